"""Shared helpers for the tablecheck command line interface."""
