"""Shared utilities for DataChange."""
