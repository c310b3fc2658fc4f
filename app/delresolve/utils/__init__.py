"""Utility modules for delresolve."""
