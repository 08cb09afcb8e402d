# ============================================================================
# META ROUTE TESTS
# ============================================================================
# STATUS: Tests - POST /rank-math-api/v1/update-meta end to end
# PURPOSE: Verify parameter handling, check ordering and response shapes
# ============================================================================
"""
Meta Route Tests

Tests api/routes.py through FastAPI TestClient. The real SeoMetaService is
used with in-memory repositories; the identity service is mocked to return
a fixed caller.

Run with:
    pytest tests/test_meta_routes.py -v
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.params import parse_urlencoded
from api.routes import rest_error_handler, router, set_meta_services
from api.schemas import UpdateMetaParams
from core.config import reset_defaults
from core.contracts import ContentStatus
from core.errors import RestError
from core.models.caller import Caller
from core.models.content_item import ContentItem
from infrastructure.auth.capabilities import capabilities_for_role
from services.meta_service import SeoMetaService

URL = "/rank-math-api/v1/update-meta"


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
    set_meta_services(None, None)


def _make_caller(role="editor", user_id=1):
    if role is None:
        return Caller.anonymous()
    return Caller(
        user_id=user_id,
        login=f"user{user_id}",
        role=role,
        capabilities=capabilities_for_role(role),
    )


def _default_items():
    return {
        42: ContentItem(id=42, kind="post", status=ContentStatus.PUBLISH, author_id=1),
        7: ContentItem(id=7, kind="post", status=ContentStatus.DRAFT, author_id=2),
        5: ContentItem(id=5, kind="page", status=ContentStatus.PUBLISH, author_id=1),
        9: ContentItem(id=9, kind="product", status=ContentStatus.PUBLISH, author_id=1),
    }


def _make_service(stored=None):
    stored = {} if stored is None else stored
    items = _default_items()

    svc = SeoMetaService(MagicMock())
    svc.content_repo = MagicMock()
    svc.content_repo.get = AsyncMock(side_effect=lambda item_id: items.get(item_id))

    def _set(item_id, meta_key, value):
        stored[(item_id, meta_key)] = value
        return True

    svc.meta_repo = MagicMock()
    svc.meta_repo.get_value = AsyncMock(side_effect=lambda item_id, key: stored.get((item_id, key), ""))
    svc.meta_repo.set_value = AsyncMock(side_effect=_set)
    return svc


def _make_client(caller, svc=None):
    """Create a test app with the meta routes, a fixed caller and the given service."""
    svc = svc or _make_service()
    identity = MagicMock()
    identity.resolve = AsyncMock(return_value=caller)

    app = FastAPI()
    app.add_exception_handler(RestError, rest_error_handler)
    app.include_router(router, prefix="/rank-math-api/v1")
    set_meta_services(svc, identity)
    return TestClient(app)


# ============================================================================
# PARAMETER VALIDATION
# ============================================================================

class TestParameterValidation:

    def test_missing_post_id(self):
        resp = _make_client(_make_caller()).post(URL, json={"rank_math_title": "T"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "rest_missing_callback_param"
        assert body["data"] == {"status": 400, "params": ["post_id"]}

    @pytest.mark.parametrize("post_id", ["abc", "-3", "0", "999", True])
    def test_invalid_post_id(self, post_id):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": post_id, "rank_math_title": "T"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "rest_invalid_param"
        assert body["data"]["params"] == {"post_id": "Invalid parameter."}

    def test_ineligible_kind_rejected(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 5, "rank_math_title": "T"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "rest_invalid_param"

    def test_product_eligible_with_commerce_module(self, monkeypatch):
        monkeypatch.setenv("COMMERCE_MODULE_ACTIVE", "true")
        reset_defaults()
        client = _make_client(_make_caller("shop_manager"))

        resp = client.post(URL, json={"post_id": 9, "rank_math_title": "Shoes"})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_title": "updated"}

    def test_non_string_field_rejected(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 42, "rank_math_title": 123})

        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "rest_invalid_param"
        assert body["data"]["params"] == {"rank_math_title": "rank_math_title is not of type string."}

    def test_null_field_rejected(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 42, "rank_math_description": None})

        assert resp.status_code == 400
        assert resp.json()["data"]["params"] == {
            "rank_math_description": "rank_math_description is not of type string.",
        }

    def test_every_invalid_param_reported(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 999, "rank_math_title": 123})

        assert resp.status_code == 400
        assert resp.json()["data"]["params"] == {
            "post_id": "Invalid parameter.",
            "rank_math_title": "rank_math_title is not of type string.",
        }

    def test_malformed_json(self):
        resp = _make_client(_make_caller()).post(
            URL, content="{bad", headers={"content-type": "application/json"}
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "rest_invalid_json"

    def test_validation_runs_before_authorization(self):
        resp = _make_client(_make_caller(None)).post(URL, json={"post_id": 999, "rank_math_title": "T"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "rest_invalid_param"


# ============================================================================
# AUTHORIZATION
# ============================================================================

class TestAuthorization:

    def test_anonymous_gets_401(self):
        resp = _make_client(_make_caller(None)).post(URL, json={"post_id": 42, "rank_math_title": "T"})

        assert resp.status_code == 401
        body = resp.json()
        assert body["code"] == "rest_forbidden"
        assert body["message"] == "Sorry, you are not allowed to do that."

    def test_subscriber_gets_403(self):
        resp = _make_client(_make_caller("subscriber")).post(URL, json={"post_id": 42, "rank_math_title": "T"})

        assert resp.status_code == 403
        assert resp.json() == {
            "code": "rest_forbidden",
            "message": "Sorry, you are not allowed to do that.",
            "data": {"status": 403},
        }

    def test_contributor_on_others_post_gets_403(self):
        svc = _make_service()
        client = _make_client(_make_caller("contributor"), svc)

        resp = client.post(URL, json={"post_id": 7, "rank_math_title": "T"})

        assert resp.status_code == 403
        body = resp.json()
        assert body["code"] == "rest_forbidden"
        assert body["message"] == "You do not have permission to edit this post."
        svc.meta_repo.get_value.assert_not_called()
        svc.meta_repo.set_value.assert_not_called()


# ============================================================================
# UPDATES
# ============================================================================

class TestUpdateMeta:

    def test_json_update(self):
        stored = {
            (42, "rank_math_title"): "Old",
            (42, "rank_math_description"): "Same",
        }
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(URL, json={
            "post_id": 42,
            "rank_math_title": "New",
            "rank_math_description": "Same",
        })

        assert resp.status_code == 200
        assert resp.json() == {
            "rank_math_title": "updated",
            "rank_math_description": "unchanged",
        }

    def test_form_update(self):
        client = _make_client(_make_caller())
        resp = client.post(URL, data={"post_id": "42", "rank_math_canonical_url": "https://example.com/c"})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_canonical_url": "updated"}

    def test_query_string_update(self):
        client = _make_client(_make_caller())
        resp = client.post(URL, params={"post_id": "42", "rank_math_description": "Desc"})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_description": "updated"}

    def test_invalid_utf8_form_value_stored_as_empty(self):
        stored = {(42, "rank_math_title"): "Old"}
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(
            URL,
            content="post_id=42&rank_math_title=%FF%FEabc",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_title": "updated"}
        assert stored[(42, "rank_math_title")] == ""

    def test_invalid_utf8_query_value_stored_as_empty(self):
        stored = {(42, "rank_math_description"): "Old"}
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(URL + "?post_id=42&rank_math_description=%FFabc")

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_description": "updated"}
        assert stored[(42, "rank_math_description")] == ""

    def test_lone_surrogate_json_value_stored_as_empty(self):
        stored = {(42, "rank_math_title"): "Old"}
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(
            URL,
            content='{"post_id": 42, "rank_math_title": "abc\\udcff"}',
            headers={"content-type": "application/json"},
        )

        assert resp.status_code == 200
        assert stored[(42, "rank_math_title")] == ""

    def test_utf8_form_value_kept(self):
        stored = {}
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(URL, data={"post_id": "42", "rank_math_title": "Café"})

        assert resp.status_code == 200
        assert stored[(42, "rank_math_title")] == "Café"

    def test_no_fields_provided(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 42})

        assert resp.status_code == 400
        assert resp.json() == {
            "code": "no_fields_provided",
            "message": "No Rank Math fields were provided for update.",
            "data": {"status": 400},
        }

    def test_unknown_params_ignored(self):
        resp = _make_client(_make_caller()).post(URL, json={"post_id": 42, "rank_math_focus_keyword": "x"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "no_fields_provided"

    def test_values_are_sanitized_before_compare(self):
        stored = {(42, "rank_math_title"): "Hi there"}
        svc = _make_service(stored)
        client = _make_client(_make_caller(), svc)

        resp = client.post(URL, json={"post_id": 42, "rank_math_title": "  <b>Hi</b>\n there "})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_title": "unchanged"}
        svc.meta_repo.set_value.assert_not_called()

    def test_disallowed_url_stored_as_empty(self):
        stored = {(42, "rank_math_canonical_url"): "https://example.com/"}
        client = _make_client(_make_caller(), _make_service(stored))

        resp = client.post(URL, json={"post_id": 42, "rank_math_canonical_url": "javascript:alert(1)"})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_canonical_url": "updated"}
        assert stored[(42, "rank_math_canonical_url")] == ""

    def test_contributor_updates_own_draft(self):
        client = _make_client(_make_caller("contributor", user_id=2))
        resp = client.post(URL, json={"post_id": "7", "rank_math_title": "Draft title"})

        assert resp.status_code == 200
        assert resp.json() == {"rank_math_title": "updated"}


# ============================================================================
# PARAMETER HELPERS
# ============================================================================

class TestParamHelpers:

    def test_parse_urlencoded_drops_invalid_utf8_values(self):
        assert parse_urlencoded("a=%C3%A9&b=%FF&c=") == {"a": "é", "b": "", "c": ""}

    def test_schema_sanitizes_and_tracks_supplied_fields(self):
        params = UpdateMetaParams.model_validate({"post_id": "42", "rank_math_title": " <b>T</b> "})

        assert params.post_id == "42"
        assert params.supplied_fields() == {"rank_math_title": "T"}


# ============================================================================
# WIRING
# ============================================================================

class TestWiring:

    def test_services_not_initialized_returns_503(self):
        app = FastAPI()
        app.add_exception_handler(RestError, rest_error_handler)
        app.include_router(router, prefix="/rank-math-api/v1")
        set_meta_services(None, None)

        resp = TestClient(app).post(URL, json={"post_id": 42, "rank_math_title": "T"})
        assert resp.status_code == 503
