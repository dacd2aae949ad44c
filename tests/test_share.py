"""
Tests for share tokens, locations and share links
"""

import base64
import re
import zlib

import pytest

from option_compare.share import (
    ShareService,
    UrlLocation,
    build_share_url,
    decode_project,
    encode_project,
    extract_share_token,
)

from tests.factories import RecordingClipboard, make_project


class TestCodec:
    """encode_project / decode_project"""

    def test_round_trip(self):
        project = make_project()
        assert decode_project(encode_project(project)) == project

    def test_round_trip_empty_project(self):
        project = make_project(options=[], criteria=[], evaluations={})
        assert decode_project(encode_project(project)) == project

    def test_round_trip_many_options_and_unicode(self):
        project = make_project(
            name="比較 ✓",
            options=[(f"o{i}", f"オプション {i}") for i in range(40)],
            criteria=[(f"c{i}", f"基準 {i}", i * 0.5) for i in range(12)],
            evaluations={f"o{i}": {f"c{j}": (i + j) % 5 + 1 for j in range(12)} for i in range(40)}
        )
        assert decode_project(encode_project(project)) == project

    def test_accepts_wire_document(self):
        project = make_project()
        assert encode_project(project.to_document()) == encode_project(project)

    def test_token_is_url_safe(self):
        token = encode_project(make_project(name="?&#/+= spaces"))
        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)

    def test_token_is_deterministic(self):
        assert encode_project(make_project()) == encode_project(make_project())

    @pytest.mark.parametrize("token", [
        "",
        "not-a-token",
        "a",
        "%%%%",
        "トークン",
        base64.urlsafe_b64encode(b"plain text, not deflated").decode(),
        base64.urlsafe_b64encode(zlib.compress(b"{not json")).decode(),
        base64.urlsafe_b64encode(zlib.compress(b"[1, 2]")).decode(),
        base64.urlsafe_b64encode(zlib.compress(b'{"name": "no id"}')).decode(),
    ])
    def test_malformed_tokens_return_none(self, token):
        assert decode_project(token) is None

    def test_truncated_token(self):
        token = encode_project(make_project())
        assert decode_project(token[: len(token) // 2]) is None

    def test_deeply_nested_token(self):
        token = base64.urlsafe_b64encode(zlib.compress(b"[" * 100000 + b"]" * 100000)).decode()
        assert decode_project(token) is None


class TestFragments:
    """Locating the share token in an address"""

    @pytest.mark.parametrize("fragment,expected", [
        ("share=abc", "abc"),
        ("#share=abc", "abc"),
        ("view=1&share=abc-_9", "abc-_9"),
        ("share=abc&view=1", "abc"),
        ("share=", None),
        ("reshare=abc", None),
        ("", None),
        ("other=1", None),
    ])
    def test_extract_share_token(self, fragment, expected):
        assert extract_share_token(fragment) == expected

    def test_build_share_url(self):
        assert build_share_url("https://example.com/tool/", "tok") == "https://example.com/tool/#share=tok"

    def test_url_location(self):
        location = UrlLocation("https://example.com/tool/?lang=ja#share=tok")
        assert location.fragment == "share=tok"
        assert location.base_url == "https://example.com/tool/"

        location.clear_fragment()
        assert location.fragment == ""
        assert location.base_url == "https://example.com/tool/"


class TestShareService:
    """Share link composition and copying"""

    def test_share_url_decodes_to_active_project(self, store):
        project = make_project()
        store.load_project(project)
        service = ShareService(store, UrlLocation("https://example.com/app/#old"))

        url = service.share_url()
        assert url.startswith("https://example.com/app/#share=")
        assert decode_project(extract_share_token(url.split("#", 1)[1])) == project

    @pytest.mark.asyncio
    async def test_copy_share_link(self, store):
        store.load_project(make_project())
        clipboard = RecordingClipboard()
        service = ShareService(store, UrlLocation("https://example.com/"), clipboard)

        assert await service.copy_share_link() is True
        assert clipboard.primary == [service.share_url()]
        assert clipboard.fallback == []

    @pytest.mark.asyncio
    async def test_copy_without_clipboard(self, store):
        service = ShareService(store, UrlLocation("https://example.com/"))
        assert await service.copy_share_link() is False
