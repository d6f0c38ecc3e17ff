"""Command-line tools for pymodscan."""
