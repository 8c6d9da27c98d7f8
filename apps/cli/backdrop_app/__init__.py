"""Command-line app for the backdrop contrast tools."""
