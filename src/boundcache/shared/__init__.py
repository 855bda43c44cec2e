"""Shared exceptions, configuration and logging."""
