"""Public cache API."""
