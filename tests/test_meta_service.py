# ============================================================================
# SEO META SERVICE TESTS
# ============================================================================
# STATUS: Tests - Eligibility, per-item authorization and diff-then-write
# PURPOSE: Verify services/meta_service.py with mocked repositories
# ============================================================================
"""
SeoMetaService Tests

Repositories are replaced with in-memory fakes built from AsyncMock, so
every test can inspect exactly which reads and writes happened.

Run with:
    pytest tests/test_meta_service.py -v
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from core.config import reset_defaults
from core.contracts import ContentStatus, FieldOutcome, MetaField
from core.errors import ForbiddenError, NoFieldsProvidedError
from core.models.caller import Caller
from core.models.content_item import ContentItem
from core.models.meta_update import MetaUpdateRequest
from infrastructure.auth.capabilities import capabilities_for_role
from services.meta_service import SeoMetaService


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    for var in ("COMMERCE_MODULE_ACTIVE", "ELIGIBLE_CONTENT_KINDS", "COMMERCE_CONTENT_KINDS"):
        monkeypatch.delenv(var, raising=False)
    reset_defaults()
    yield
    reset_defaults()


def _make_caller(role="editor", user_id=1):
    return Caller(
        user_id=user_id,
        login=f"user{user_id}",
        role=role,
        capabilities=capabilities_for_role(role),
    )


def _make_item(item_id=42, kind="post", status=ContentStatus.PUBLISH, author_id=1):
    return ContentItem(id=item_id, kind=kind, status=status, author_id=author_id)


def _make_meta_repo(stored=None, fail_keys=()):
    """In-memory meta repo: get_value reads, set_value writes unless the key fails."""
    stored = {} if stored is None else stored
    repo = MagicMock()

    def _get(item_id, meta_key):
        return stored.get((item_id, meta_key), "")

    def _set(item_id, meta_key, value):
        if meta_key in fail_keys:
            return False
        stored[(item_id, meta_key)] = value
        return True

    repo.get_value = AsyncMock(side_effect=_get)
    repo.set_value = AsyncMock(side_effect=_set)
    repo.stored = stored
    return repo


def _make_service(items=None, stored=None, fail_keys=()):
    items = {42: _make_item()} if items is None else items
    svc = SeoMetaService(MagicMock())
    svc.content_repo = MagicMock()
    svc.content_repo.get = AsyncMock(side_effect=lambda item_id: items.get(item_id))
    svc.meta_repo = _make_meta_repo(stored, fail_keys)
    return svc


# ============================================================================
# POST ID VALIDATION
# ============================================================================

class TestCheckPostId:

    def test_existing_post_is_valid(self):
        svc = _make_service()
        assert asyncio.run(svc.check_post_id("42")) is True
        assert asyncio.run(svc.check_post_id(42)) is True

    def test_nonexistent_item_is_invalid(self):
        svc = _make_service()
        assert asyncio.run(svc.check_post_id("999")) is False

    @pytest.mark.parametrize("value", ["abc", "-1", -1, "4.2", True, None, "0", 0])
    def test_unparseable_or_zero_is_invalid(self, value):
        svc = _make_service()
        assert asyncio.run(svc.check_post_id(value)) is False
        svc.content_repo.get.assert_not_called()

    def test_page_is_not_eligible(self):
        svc = _make_service(items={5: _make_item(item_id=5, kind="page")})
        assert asyncio.run(svc.check_post_id("5")) is False

    def test_product_needs_commerce_module(self, monkeypatch):
        svc = _make_service(items={9: _make_item(item_id=9, kind="product")})
        assert asyncio.run(svc.check_post_id("9")) is False

        monkeypatch.setenv("COMMERCE_MODULE_ACTIVE", "true")
        reset_defaults()
        assert asyncio.run(svc.check_post_id("9")) is True


# ============================================================================
# ROUTE PERMISSION
# ============================================================================

class TestRoutePermission:

    def test_contributor_passes_coarse_gate(self):
        assert _make_service().check_route_permission(_make_caller("contributor"))

    def test_subscriber_fails_coarse_gate(self):
        assert not _make_service().check_route_permission(_make_caller("subscriber"))

    def test_anonymous_fails_coarse_gate(self):
        assert not _make_service().check_route_permission(Caller.anonymous())


# ============================================================================
# UPDATE META
# ============================================================================

class TestUpdateMeta:

    def test_mixed_update_and_unchanged(self):
        stored = {
            (42, "rank_math_title"): "Old",
            (42, "rank_math_description"): "Same",
        }
        svc = _make_service(stored=stored)
        request = MetaUpdateRequest(post_id=42, title="New", description="Same")

        result = asyncio.run(svc.update_meta(request, _make_caller()))

        assert result.to_response() == {
            "rank_math_title": "updated",
            "rank_math_description": "unchanged",
        }
        svc.meta_repo.set_value.assert_awaited_once_with(42, "rank_math_title", "New")
        assert stored[(42, "rank_math_title")] == "New"

    def test_single_field_only(self):
        svc = _make_service()
        request = MetaUpdateRequest(post_id=42, canonical_url="https://example.com/c")

        result = asyncio.run(svc.update_meta(request, _make_caller()))

        assert result.to_response() == {"rank_math_canonical_url": "updated"}
        assert svc.meta_repo.get_value.await_count == 1

    def test_repeat_request_is_unchanged(self):
        svc = _make_service()
        request = MetaUpdateRequest(post_id=42, title="T", description="D", canonical_url="https://e.com/")

        first = asyncio.run(svc.update_meta(request, _make_caller()))
        second = asyncio.run(svc.update_meta(request, _make_caller()))

        assert set(first.to_response().values()) == {"updated"}
        assert set(second.to_response().values()) == {"unchanged"}
        assert svc.meta_repo.set_value.await_count == 3

    def test_unchanged_never_writes(self):
        stored = {(42, "rank_math_title"): "Same"}
        svc = _make_service(stored=stored)

        result = asyncio.run(svc.update_meta(MetaUpdateRequest(post_id=42, title="Same"), _make_caller()))

        assert result.outcomes == {MetaField.TITLE: FieldOutcome.UNCHANGED}
        svc.meta_repo.set_value.assert_not_called()

    def test_empty_value_matches_missing_meta(self):
        svc = _make_service()
        result = asyncio.run(svc.update_meta(MetaUpdateRequest(post_id=42, title=""), _make_caller()))
        assert result.to_response() == {"rank_math_title": "unchanged"}

    def test_empty_value_clears_existing(self):
        stored = {(42, "rank_math_description"): "Old"}
        svc = _make_service(stored=stored)
        result = asyncio.run(svc.update_meta(MetaUpdateRequest(post_id=42, description=""), _make_caller()))
        assert result.to_response() == {"rank_math_description": "updated"}
        assert stored[(42, "rank_math_description")] == ""

    def test_failed_write_does_not_stop_other_fields(self):
        svc = _make_service(fail_keys=("rank_math_description",))
        request = MetaUpdateRequest(post_id=42, title="T", description="D", canonical_url="https://e.com/")

        result = asyncio.run(svc.update_meta(request, _make_caller()))

        assert result.to_response() == {
            "rank_math_title": "updated",
            "rank_math_description": "failed",
            "rank_math_canonical_url": "updated",
        }
        assert svc.meta_repo.set_value.await_count == 3

    def test_fields_processed_in_fixed_order(self):
        svc = _make_service()
        request = MetaUpdateRequest(post_id=42, canonical_url="u", title="t", description="d")

        asyncio.run(svc.update_meta(request, _make_caller()))

        keys = [call.args[1] for call in svc.meta_repo.get_value.await_args_list]
        assert keys == ["rank_math_title", "rank_math_description", "rank_math_canonical_url"]

    def test_forbidden_reads_and_writes_nothing(self):
        svc = _make_service(items={42: _make_item(author_id=2)})
        request = MetaUpdateRequest(post_id=42, title="Hijack")

        with pytest.raises(ForbiddenError) as exc_info:
            asyncio.run(svc.update_meta(request, _make_caller("contributor")))

        assert exc_info.value.status == 403
        assert exc_info.value.message == "You do not have permission to edit this post."
        svc.meta_repo.get_value.assert_not_called()
        svc.meta_repo.set_value.assert_not_called()

    def test_forbidden_checked_before_missing_fields(self):
        svc = _make_service(items={42: _make_item(author_id=2)})
        with pytest.raises(ForbiddenError):
            asyncio.run(svc.update_meta(MetaUpdateRequest(post_id=42), _make_caller("contributor")))

    def test_no_fields_provided(self):
        svc = _make_service()

        with pytest.raises(NoFieldsProvidedError) as exc_info:
            asyncio.run(svc.update_meta(MetaUpdateRequest(post_id=42), _make_caller()))

        assert exc_info.value.status == 400
        assert exc_info.value.code == "no_fields_provided"
        svc.meta_repo.get_value.assert_not_called()
