"""Bundled data files for lsi."""
