"""Logging and error handling."""
