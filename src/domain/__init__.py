"""Domain layer: entities, exceptions and ports."""
