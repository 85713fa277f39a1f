"""storyhub - persistence and engagement layer for a multi-language story library."""

__version__ = "0.1.0"
