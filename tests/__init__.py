"""Test suite for lib_dynamodb_config."""
