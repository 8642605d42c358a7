"""Background and command-line jobs."""
