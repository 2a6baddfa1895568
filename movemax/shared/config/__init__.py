"""Static configuration assets (prompt templates)."""
