"""Pillow backends and helpers."""
