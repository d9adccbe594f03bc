"""Command line interface for the tablecheck validation engine."""
