"""Command implementations for the modindex CLI."""
