"""MoveMax application layer: shell state, routing, controllers and CLI."""
