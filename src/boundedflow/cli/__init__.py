"""Command-line interface for boundedflow."""
