"""
Configuration module for skillshelf.

Uses pydantic-settings for environment variable loading.
"""

from skillshelf.config.settings import Settings

__all__ = ["Settings"]
