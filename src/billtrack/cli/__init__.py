"""Command line interface for billtrack."""
