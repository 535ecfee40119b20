"""
Configuration adapters
"""
from .loader import AppConfig, ConfigLoader

__all__ = ["AppConfig", "ConfigLoader"]
