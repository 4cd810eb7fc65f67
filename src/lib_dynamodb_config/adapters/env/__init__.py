"""Environment variable settings source."""
