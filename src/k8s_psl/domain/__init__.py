"""Domain layer: resource references, label assignments, outcome kinds."""
