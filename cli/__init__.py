"""Command line interface for zisnet."""
