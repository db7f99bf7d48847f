"""Core infrastructure for lsi: paths, settings and theming."""
