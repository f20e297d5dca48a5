"""Importable modules used by loader and host tests."""
