"""Data models for connection options, selectors and descriptors."""
