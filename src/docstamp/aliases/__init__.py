"""Directory alias map and path resolution."""
