"""Utility modules for dirstack."""
