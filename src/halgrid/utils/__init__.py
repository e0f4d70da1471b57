"""Shared constants and small lookup utilities."""
