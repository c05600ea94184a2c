"""Facturago HTTP backend."""
