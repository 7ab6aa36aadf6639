"""Configuration and reporting utilities."""
