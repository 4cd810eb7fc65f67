"""Concrete adapters for the DynamoDB store and settings sources."""
