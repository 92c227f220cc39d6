"""Core chat pipeline, sessions and fallback review."""
