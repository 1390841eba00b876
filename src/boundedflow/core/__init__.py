"""Core functionality of boundedflow."""
