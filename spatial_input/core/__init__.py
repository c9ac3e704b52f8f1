"""Shared types, event bus and the spatial input registry."""
