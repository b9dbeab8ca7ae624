"""Command-line interface for LearnMe."""
