"""Localisation layer for the studydeck flashcard application."""
