"""Static tables: profiles and default proposals."""
