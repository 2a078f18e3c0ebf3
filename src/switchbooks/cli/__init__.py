"""Command line interface for switchbooks."""
