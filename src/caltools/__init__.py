"""caltools - personal calendar utilities."""
