"""wumuc command-line interface."""
