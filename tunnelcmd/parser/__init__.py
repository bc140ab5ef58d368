"""Option file loading."""
