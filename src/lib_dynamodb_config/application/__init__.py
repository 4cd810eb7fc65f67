"""Ports and store-agnostic application logic."""
