"""Domain layer: records, seed data and the rules that operate on them."""
