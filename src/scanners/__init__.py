"""File system scanning."""
