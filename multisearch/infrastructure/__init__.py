"""Infrastructure layer: implementations of the application ports."""
