"""Packaged message catalogues and the locale manifest."""
