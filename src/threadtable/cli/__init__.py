"""Command-line interface for threadtable."""
