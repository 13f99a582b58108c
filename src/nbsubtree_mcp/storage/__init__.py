"""Notebook file storage."""
