"""Per-file structure extractors."""
