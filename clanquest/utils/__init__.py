"""Persistence, replay and logging helpers."""
