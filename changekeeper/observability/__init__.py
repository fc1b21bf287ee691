"""Observability helpers for changekeeper."""
