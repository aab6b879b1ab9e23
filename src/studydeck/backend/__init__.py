"""Backend services for studydeck."""
