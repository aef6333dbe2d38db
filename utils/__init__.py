"""Shared helpers: request validation and exception types."""
