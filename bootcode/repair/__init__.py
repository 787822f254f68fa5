"""Single-flip repair search."""
