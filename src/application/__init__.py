"""Application entry points (command line)."""
