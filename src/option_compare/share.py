"""
Option Compare Share Links
Compresses a single project into a URL-fragment token and back
"""

import base64
import binascii
import json
import logging
import re
import zlib
from typing import Any, Mapping, Optional, Protocol, Union
from urllib.parse import unquote, urlsplit, urlunsplit

from pydantic import ValidationError

from .clipboard import Clipboard, copy_text
from .models import Project
from .store import ProjectStore

logger = logging.getLogger(__name__)

SHARE_PARAM = 'share'
_SHARE_PATTERN = re.compile(r'(?:^|[#&])' + SHARE_PARAM + r'=([^&]+)')


def canonical_json(document: Mapping[str, Any]) -> str:
    """Sorted keys, compact separators, UTF-8 kept as-is"""
    return json.dumps(document, sort_keys=True, separators=(',', ':'), ensure_ascii=False)


def encode_project(project: Union[Project, Mapping[str, Any]]) -> str:
    """
    Encode a project document as a URL-safe token

    canonical JSON -> zlib -> base64url without padding
    """
    document = project.to_document() if isinstance(project, Project) else project
    compressed = zlib.compress(canonical_json(document).encode('utf-8'), 9)
    return base64.urlsafe_b64encode(compressed).rstrip(b'=').decode('ascii')


def decode_project(token: str) -> Optional[Project]:
    """
    Decode a share token

    Returns:
        The project, or None if the token is not a valid encoded project
    """
    try:
        padded = token + '=' * (-len(token) % 4)
        compressed = base64.urlsafe_b64decode(padded.encode('ascii'))
        text = zlib.decompress(compressed).decode('utf-8')
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return Project.model_validate(data)
    except (binascii.Error, zlib.error, UnicodeError, ValidationError, ValueError, RecursionError) as e:
        logger.warning(f"Failed to decode share token {token[:12]}...: {e}")
        return None


def extract_share_token(fragment: str) -> Optional[str]:
    """Find share=<token> in a location fragment (with or without '#')"""
    if not fragment:
        return None
    match = _SHARE_PATTERN.search(fragment)
    if not match:
        return None
    return unquote(match.group(1)) or None


def build_share_url(base_url: str, token: str) -> str:
    return f"{base_url}#{SHARE_PARAM}={token}"


class Location(Protocol):
    """Current address of the running session"""

    @property
    def fragment(self) -> str:
        ...

    @property
    def base_url(self) -> str:
        """Origin plus path, no query or fragment"""
        ...

    def clear_fragment(self) -> None:
        ...


class UrlLocation:
    """In-memory address parsed from a URL string"""

    def __init__(self, url: str):
        parts = urlsplit(url)
        self._scheme = parts.scheme
        self._netloc = parts.netloc
        self._path = parts.path
        self._fragment = parts.fragment

    @property
    def fragment(self) -> str:
        return self._fragment

    @property
    def base_url(self) -> str:
        return urlunsplit((self._scheme, self._netloc, self._path, '', ''))

    def clear_fragment(self) -> None:
        self._fragment = ''


class ShareService:
    """Composes share links for the active project and copies them"""

    def __init__(self, store: ProjectStore, location: Location, clipboard: Optional[Clipboard] = None):
        self.store = store
        self.location = location
        self.clipboard = clipboard

    def share_url(self) -> str:
        token = encode_project(self.store.export_project())
        return build_share_url(self.location.base_url, token)

    async def copy_share_link(self) -> bool:
        if self.clipboard is None:
            logger.warning("No clipboard configured")
            return False
        url = self.share_url()
        copied = await copy_text(self.clipboard, url)
        if copied:
            logger.info(f"Copied share link ({len(url)} chars)")
        return copied
