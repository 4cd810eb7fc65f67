"""DynamoDB client providers, repository, and factory."""
