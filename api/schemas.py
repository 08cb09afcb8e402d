# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Request schemas
# PURPOSE: Pydantic models for route parameter validation
# ============================================================================
"""
API Schemas

Parameter models for the meta routes. Values arrive merged from the query
string and the body (see api.params.collect_params), so the models ignore
unknown keys and the route reads presence from model_fields_set.
"""

from typing import Annotated, Any, Dict

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr

from core.contracts import MetaField
from core.sanitize import esc_url_raw, sanitize_text_field

PlainText = Annotated[StrictStr, AfterValidator(sanitize_text_field)]
RawUrl = Annotated[StrictStr, AfterValidator(esc_url_raw)]


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class UpdateMetaParams(BaseModel):
    """Parameters of POST /update-meta."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    # Raw value; checked against the content store by the route
    post_id: Any = Field(...)

    # Defaults are not validated, so only an explicit null is a type error
    rank_math_title: PlainText = Field(None, description="SEO title, plain text")
    rank_math_description: PlainText = Field(None, description="SEO description, plain text")
    rank_math_canonical_url: RawUrl = Field(None, description="Canonical URL")

    def supplied_fields(self) -> Dict[str, str]:
        """Sanitized values of the meta fields present in the request."""
        return {
            field.value: getattr(self, field.value)
            for field in MetaField
            if field.value in self.model_fields_set
        }


__all__ = [
    "UpdateMetaParams",
]
