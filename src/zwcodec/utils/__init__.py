"""Utility helpers for zwcodec."""
