"""
Conditional retrieval of remote vocabularies.

The fetcher issues a single GET per vocabulary, negotiating the returned
representation via an Accept header built from every parser format rdflib
provides. When a cached copy exists, the response's ``Last-Modified`` date is
compared against the cached file's modification time:

- remote date strictly earlier than the cached copy: UNCHANGED, body discarded
- otherwise (including a missing or unparsable header): body streamed to the
  cache and FETCHED returned

Any transport or I/O error becomes a FAILED outcome; nothing is retried.
"""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import requests

from .. import __version__
from ..constants import HTTPConfig, ToolInfo
from ..formats.rdf.format_resolver import FormatResolver, build_accept_header
from ..shared.models import FetchOutcome, VocabularySpec
from .cache_store import CacheStore

logger = logging.getLogger(__name__)


def build_user_agent(project_name: Optional[str] = None) -> str:
    """User-Agent identifying the tool and, if known, the build it runs in."""
    agent = f"{ToolInfo.NAME}/{__version__} ({ToolInfo.DESCRIPTION})"
    if project_name:
        agent = f"{agent} {project_name}"
    return agent


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an HTTP date header into an aware UTC datetime.
    
    Returns:
        The parsed date, or None if the value is absent or unparsable.
    """
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        logger.debug(f"Unparsable HTTP date: {value!r}")
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Fetcher:
    """
    Fetch remote vocabularies into the cache.
    
    Each fetch runs in its own ``requests.Session``, closed on success and
    failure alike.
    
    Args:
        cache_store: Where fetched documents are staged.
        resolver: Resolves the media type used to name cache files.
        user_agent: User-Agent header value.
        session_factory: Callable returning a new session (default:
            ``requests.Session``).
        accept: Accept header override; defaults to all rdflib parser formats.
    """
    
    def __init__(
        self,
        cache_store: CacheStore,
        resolver: Optional[FormatResolver] = None,
        user_agent: Optional[str] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        accept: Optional[str] = None,
    ) -> None:
        self.cache_store = cache_store
        self.resolver = resolver or FormatResolver()
        self.user_agent = user_agent or build_user_agent()
        self.session_factory = session_factory or requests.Session
        self.accept = accept if accept is not None else build_accept_header()
    
    def _headers(self) -> dict:
        headers = {'User-Agent': self.user_agent}
        if self.accept:
            headers['Accept'] = self.accept
        return headers
    
    def fetch(self, url: str, spec: VocabularySpec, display_name: str) -> FetchOutcome:
        """
        Conditionally fetch ``url`` into the cache.
        
        Args:
            url: Remote vocabulary location.
            spec: The spec being built (for media type resolution).
            display_name: Name the cache file is keyed by.
            
        Returns:
            FETCHED with the cache path, UNCHANGED with the existing cache
            path, or FAILED with the cause.
        """
        resolved = self.resolver.resolve(spec)
        try:
            with self.session_factory() as session:
                response = session.get(url, headers=self._headers(), stream=True)
                try:
                    response.raise_for_status()
                    return self._handle_response(url, response, resolved, display_name)
                finally:
                    response.close()
        except (requests.RequestException, OSError) as e:
            logger.debug(f"Fetching {url} failed: {e}")
            return FetchOutcome.failed(e)
    
    def _handle_response(
        self,
        url: str,
        response: requests.Response,
        resolved: Optional[str],
        display_name: str,
    ) -> FetchOutcome:
        mime = self.resolver.resolve_with_content_type(resolved, response.headers.get('Content-Type'))
        extension = self.resolver.cache_extension(mime)
        if extension is None:
            logger.debug(f"Unknown format, cache will be {self.cache_store.file_name(display_name, None)}")
        entry = self.cache_store.entry(display_name, extension)
        cache_file = entry.path
        
        if entry.exists:
            logger.debug(f"Cache-File {cache_file} found, checking if up-to-date")
            baseline = entry.staged_at
            remote_date = parse_http_date(response.headers.get('Last-Modified'))
            if remote_date is not None and remote_date < baseline:
                logger.debug(
                    f"{baseline:%Y-%m-%d %H:%M:%S} is after {remote_date:%Y-%m-%d %H:%M:%S}, "
                    f"no action required"
                )
                return FetchOutcome.unchanged(cache_file, mime)
            logger.debug("Remote file is newer - need to rebuild vocabulary")
        else:
            logger.debug(f"No Cache-File {cache_file}, need to fetch")
        
        self.cache_store.write(cache_file, response.iter_content(chunk_size=HTTPConfig.CHUNK_SIZE))
        logger.info(f"Fetched vocabulary definition for {display_name} from {url}")
        return FetchOutcome.fetched(cache_file, mime)
    
    def download(self, url: str, target: Union[str, Path]) -> Tuple[Path, Optional[str]]:
        """
        Unconditionally download ``url`` to ``target``.
        
        Returns:
            Tuple of (written path, response Content-Type or None).
            
        Raises:
            requests.RequestException: On transport or HTTP errors.
            OSError: If the target cannot be written.
        """
        with self.session_factory() as session:
            response = session.get(url, headers=self._headers(), stream=True)
            try:
                response.raise_for_status()
                path = self.cache_store.write(
                    target, response.iter_content(chunk_size=HTTPConfig.CHUNK_SIZE)
                )
                return path, response.headers.get('Content-Type')
            finally:
                response.close()
