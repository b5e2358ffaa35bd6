"""
nestedset.commands - CLI command implementations
"""

__all__ = [
    "check",
    "config_cmd",
    "rebuild",
]
