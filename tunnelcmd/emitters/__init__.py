"""Descriptor renderers."""
