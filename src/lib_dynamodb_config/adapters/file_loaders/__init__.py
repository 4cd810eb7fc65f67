"""Structured settings file loaders."""
