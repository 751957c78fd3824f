"""Command-line interface for shaft alignment calculations."""
