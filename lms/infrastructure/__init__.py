"""Infrastructure layer: database access and repositories."""
