"""Database infrastructure - shared connection primitives."""
