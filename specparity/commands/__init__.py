"""Command handlers for the specparity CLI."""
