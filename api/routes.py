# ============================================================================
# API ROUTES
# ============================================================================
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoint for SEO meta updates
# ============================================================================
"""
API Routes

Endpoints (mounted under /rank-math-api/v1 by main.py):
- POST /update-meta - Set title, description and canonical URL of a content item

Request parameters (query, form or JSON body):
    post_id                  required, non-negative integer, eligible item
    rank_math_title          optional string, plain text
    rank_math_description    optional string, plain text
    rank_math_canonical_url  optional string, URL

Responses:
    200 {"rank_math_title": "updated", ...}  one entry per supplied field
    400 rest_missing_callback_param / rest_invalid_param / no_fields_provided
    401 rest_forbidden (not authenticated)
    403 rest_forbidden (missing edit_posts, or edit_post on this item)
"""

import logging
import uuid

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from core.contracts import MetaField
from core.errors import ForbiddenError, RestError
from core.logging import log_context
from core.models.meta_update import MetaUpdateRequest
from core.sanitize import absint
from .params import collect_params, validate_params
from .schemas import UpdateMetaParams

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meta"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_meta_service = None
_identity_service = None


def set_meta_services(meta_service, identity_service):
    """Called by main.py at startup to inject the meta and identity services."""
    global _meta_service, _identity_service
    _meta_service = meta_service
    _identity_service = identity_service


def services_initialized() -> bool:
    """True once main.py has injected both services."""
    return _meta_service is not None and _identity_service is not None


def _get_meta_service():
    """Get the meta service, raising 503 if not initialized."""
    if _meta_service is None:
        raise HTTPException(503, "Meta service not initialized")
    return _meta_service


def _get_identity_service():
    """Get the identity service, raising 503 if not initialized."""
    if _identity_service is None:
        raise HTTPException(503, "Identity service not initialized")
    return _identity_service


# ============================================================================
# ERROR RENDERING
# ============================================================================

async def rest_error_handler(request: Request, exc: RestError) -> JSONResponse:
    """Render a RestError as {code, message, data: {status, ...}}."""
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


# ============================================================================
# UPDATE META
# ============================================================================

@router.post("/update-meta")
async def update_meta(request: Request):
    """
    Update the SEO meta fields of a content item.

    Only fields present in the request are processed; each is written only
    if it differs from the stored value.
    """
    svc = _get_meta_service()
    identity = _get_identity_service()

    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    caller = await identity.resolve(request.headers.get("authorization"))

    with log_context(request_id=request_id, user_id=caller.user_id, operation="update_meta"):
        params = await collect_params(request)

        try:
            args = await validate_params(
                UpdateMetaParams,
                params,
                validators={"post_id": svc.check_post_id},
            )
        except RestError as e:
            logger.warning(f"Rejected update-meta parameters: {e.message}")
            raise

        if not svc.check_route_permission(caller):
            logger.warning("Caller lacks edit_posts")
            raise ForbiddenError(
                "Sorry, you are not allowed to do that.",
                status=403 if caller.is_authenticated else 401,
            )

        fields = args.supplied_fields()
        meta_request = MetaUpdateRequest(
            post_id=absint(args.post_id),
            title=fields.get(MetaField.TITLE.value),
            description=fields.get(MetaField.DESCRIPTION.value),
            canonical_url=fields.get(MetaField.CANONICAL_URL.value),
        )

        with log_context(post_id=meta_request.post_id):
            result = await svc.update_meta(meta_request, caller)

    return JSONResponse(status_code=200, content=result.to_response())
