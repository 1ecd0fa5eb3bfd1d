"""
URL validation for remote vocabulary sources.

Remote vocabularies are fetched over plain HTTP(S). This module rejects
anything else before a request is attempted, so that configuration mistakes
surface as configuration errors instead of transport failures.

Usage:
    from vocab_builder.core.validators.url import URLValidator
    
    URLValidator.validate_url("https://xmlns.com/foaf/0.1/index.rdf")
    URLValidator.is_remote("./foaf.rdf")  # False
"""

import logging
from typing import Any, List, Optional
from urllib.parse import urlparse

from ...constants import HTTPConfig

logger = logging.getLogger(__name__)


class URLValidator:
    """
    Validation helpers for vocabulary URLs.
    
    Checks performed:
    - Type and emptiness
    - Protocol (http/https by default)
    - Presence of a host
    """
    
    DEFAULT_ALLOWED_PROTOCOLS = list(HTTPConfig.REMOTE_SCHEMES)
    
    @classmethod
    def is_remote(cls, value: Any) -> bool:
        """Return True if ``value`` looks like an http(s) URL."""
        if not isinstance(value, str):
            return False
        lowered = value.strip().lower()
        return any(lowered.startswith(f"{scheme}://") for scheme in cls.DEFAULT_ALLOWED_PROTOCOLS)
    
    @classmethod
    def validate_url(
        cls,
        url: Any,
        allowed_protocols: Optional[List[str]] = None,
    ) -> str:
        """
        Validate a vocabulary URL.
        
        Args:
            url: URL to validate
            allowed_protocols: List of allowed protocols (default: http, https)
            
        Returns:
            Validated URL string (stripped)
            
        Raises:
            TypeError: If URL is not a string
            ValueError: If URL is empty, malformed, uses a disallowed
                protocol, or has no host
        """
        if not isinstance(url, str):
            raise TypeError(f"URL must be string, got {type(url).__name__}")
        
        url = url.strip()
        if not url:
            raise ValueError("URL cannot be empty")
        if any(c.isspace() for c in url):
            raise ValueError("URL must not contain whitespace")
        
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ValueError(f"Invalid URL format: {e}")
        
        if allowed_protocols is None:
            allowed_protocols = cls.DEFAULT_ALLOWED_PROTOCOLS
        allowed_protocols_lower = [p.lower() for p in allowed_protocols]
        
        if not parsed.scheme:
            raise ValueError("URL must include protocol scheme (e.g., https://)")
        if parsed.scheme.lower() not in allowed_protocols_lower:
            raise ValueError(
                f"Protocol '{parsed.scheme}' not allowed. "
                f"Allowed protocols: {', '.join(allowed_protocols_lower)}"
            )
        if not parsed.hostname:
            raise ValueError(f"URL has no host: {url}")
        
        return url
