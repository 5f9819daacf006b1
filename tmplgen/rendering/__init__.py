"""Compilation, rendering, partial resolution and output."""
