"""Command-line IKE client: resolves options into a connection and initiates it."""

__version__ = "0.1.0"
