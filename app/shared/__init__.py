"""Shared base models, schemas and exceptions."""
