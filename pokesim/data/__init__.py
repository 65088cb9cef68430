"""Catalog access and normalization."""
