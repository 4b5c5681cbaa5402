"""Per-configuration git workspace lifecycle."""
