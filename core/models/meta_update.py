# ============================================================================
# META UPDATE MODELS
# ============================================================================
# STATUS: Domain model - Explicit request/result records for the handler
# PURPOSE: One Optional[str] per managed field, ordered per-field outcomes
# ============================================================================
"""
Meta Update Models

MetaUpdateRequest is built by the API layer after parameter validation and
sanitization. A field left as None was not supplied; "" was supplied empty.

MetaUpdateResult keeps outcomes in field order and serializes to the
response body, e.g. {"rank_math_title": "updated"}.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from core.contracts import FieldOutcome, MetaField


class MetaUpdateRequest(BaseModel):
    """Validated, sanitized update request for one content item."""

    post_id: int = Field(..., ge=0)
    title: Optional[str] = None
    description: Optional[str] = None
    canonical_url: Optional[str] = None

    model_config = {"frozen": True}

    def value_for(self, meta_field: MetaField) -> Optional[str]:
        """Submitted value for a field, None if not supplied."""
        return getattr(self, meta_field.attr_name)

    def supplied(self) -> List[Tuple[MetaField, str]]:
        """(field, value) pairs for supplied fields, in field order."""
        return [
            (meta_field, self.value_for(meta_field))
            for meta_field in MetaField.ordered()
            if self.value_for(meta_field) is not None
        ]


class MetaUpdateResult(BaseModel):
    """Per-field outcomes of an update request."""

    post_id: int
    outcomes: Dict[MetaField, FieldOutcome] = Field(default_factory=dict)

    def record(self, meta_field: MetaField, outcome: FieldOutcome) -> None:
        self.outcomes[meta_field] = outcome

    def to_response(self) -> Dict[str, str]:
        """Response body: supplied field name -> outcome, in field order."""
        return {
            meta_field.value: self.outcomes[meta_field].value
            for meta_field in MetaField.ordered()
            if meta_field in self.outcomes
        }
