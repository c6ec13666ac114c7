"""Infrastructure layer: SQL generation utilities and dialects."""
