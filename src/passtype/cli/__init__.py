"""Command-line interface for Passtype."""
