"""Core layer: promise primitive, error taxonomy and logging."""
