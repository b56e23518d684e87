"""Infrastructure layer: cache database and REST backend."""
