"""Infrastructure layer: database access and repository implementations."""
