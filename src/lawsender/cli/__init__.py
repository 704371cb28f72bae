"""Command-line interface for law-sender."""
