"""Execution results and the sources that supply them."""
