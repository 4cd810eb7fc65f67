"""Domain value objects and the error taxonomy (no I/O)."""
