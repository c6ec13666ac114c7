"""
DataChange - changelog-driven row inserts.

Turns an abstract description of a target table and a set of typed column
values into an executable INSERT, choosing between literal SQL text and a
parameterized statement with positional binding when large objects are
involved.
"""

__version__ = "0.1.0"
