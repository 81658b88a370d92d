"""Command line entry points for Press Sync validation."""
