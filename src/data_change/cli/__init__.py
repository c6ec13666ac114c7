"""Command-line interface for DataChange."""
