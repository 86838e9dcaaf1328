"""Packaged generation data: default settings, name pools and drop tables."""
