"""Shared helpers: logging setup and console output."""
