"""Profile resolution and connection assembly."""
