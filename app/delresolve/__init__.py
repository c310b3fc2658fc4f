"""delresolve - tiered deletion resolution for files outside your control."""

__version__ = "0.1.0"
