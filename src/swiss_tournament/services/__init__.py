"""Pairing engine, storage and round administration services."""
