"""Interaction with the charon daemon: jobs, shutdown and swanctl."""
