"""Library layer - settings, paths, process and rendering helpers."""
