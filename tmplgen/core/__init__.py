"""Core domain types: descriptors, keys, settings and errors."""
