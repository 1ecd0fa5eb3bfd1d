"""
Validation utilities for vocab-builder.

- url.py: URLValidator - remote vocabulary URL checks
"""

from .url import URLValidator

__all__ = [
    'URLValidator',
]
