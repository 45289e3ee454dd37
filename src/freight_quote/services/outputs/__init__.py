"""Quote serialization helpers."""
