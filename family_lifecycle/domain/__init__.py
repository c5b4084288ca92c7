"""Domain layer: models, errors and pure services. No I/O."""
