"""Domain services: type inference and the mapping engine."""
