"""Command-line tools for GitHub content download and curl rendering."""
