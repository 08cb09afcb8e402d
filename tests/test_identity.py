# ============================================================================
# IDENTITY TESTS
# ============================================================================
# STATUS: Tests - Bearer token resolution
# PURPOSE: Verify infrastructure/auth/identity.py
# ============================================================================
"""
Identity Tests

Run with:
    pytest tests/test_identity.py -v
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from infrastructure.auth.identity import IdentityService, parse_bearer_token


def _make_identity(user=None):
    svc = IdentityService(MagicMock())
    svc.token_repo = MagicMock()
    svc.token_repo.get_user_by_token = AsyncMock(return_value=user)
    return svc


class TestParseBearerToken:

    @pytest.mark.parametrize("header,expected", [
        ("Bearer abc123", "abc123"),
        ("bearer abc123", "abc123"),
        ("Bearer   abc123  ", "abc123"),
        ("Bearer ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, header, expected):
        assert parse_bearer_token(header) == expected


class TestIdentityService:

    def test_no_header_is_anonymous(self):
        svc = _make_identity()
        caller = asyncio.run(svc.resolve(None))

        assert not caller.is_authenticated
        svc.token_repo.get_user_by_token.assert_not_called()

    def test_unknown_token_is_anonymous(self):
        caller = asyncio.run(_make_identity(None).resolve("Bearer nope"))
        assert not caller.is_authenticated
        assert caller.capabilities == frozenset()

    def test_known_token_resolves_role_caps(self):
        user = {"id": 5, "login": "ed", "role": "editor", "extra_caps": None}
        caller = asyncio.run(_make_identity(user).resolve("Bearer good"))

        assert caller.user_id == 5
        assert caller.login == "ed"
        assert caller.has_cap("edit_others_posts")
        assert not caller.has_cap("edit_products")

    def test_extra_caps_granted(self):
        user = {"id": 6, "login": "bot", "role": "subscriber", "extra_caps": ["edit_posts"]}
        caller = asyncio.run(_make_identity(user).resolve("Bearer good"))

        assert caller.has_cap("edit_posts")
        assert caller.has_cap("read")
