"""Domain layer: entities, errors and the repository contract."""
