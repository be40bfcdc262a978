"""Presentation layer: host integrations."""
