"""Shared helpers: credentials, HTTP access and logging utilities."""
