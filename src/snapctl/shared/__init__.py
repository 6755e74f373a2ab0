"""snapctl Shared Module.

This package contains shared constants, models, types, and error handling used across snapctl.
"""

__all__ = ["constants", "errors", "logging", "models", "protocols", "types"]
