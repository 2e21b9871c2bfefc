"""Domain layer: definitions, runtime weapons and the scoring engine."""
