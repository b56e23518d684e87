"""Domain layer: collaborator protocols."""
