"""Command line interface for patternsmith."""
