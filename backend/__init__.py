"""Composition root: settings, logging and tracker factory."""
