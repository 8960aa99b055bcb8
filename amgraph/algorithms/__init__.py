"""Matrix-level graph algorithms: traversal, shortest paths, min-cut and clustering."""
