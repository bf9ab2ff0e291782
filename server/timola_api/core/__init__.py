"""Configuration, persistence, auth and cross-cutting HTTP concerns."""
