"""
Configuration adapters
"""
from .loader import ConfigLoader, parse_define

__all__ = ["ConfigLoader", "parse_define"]
