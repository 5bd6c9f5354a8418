"""In-memory book catalog with search, grouping and statistics."""
