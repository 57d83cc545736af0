"""pydantic hooks that reject fields containing contact information.

    from typing import Annotated
    from pydantic import AfterValidator, BaseModel

    class MessageIn(BaseModel):
        body: Annotated[str, AfterValidator(no_contact_info("Message"))]

A blocked value raises a ``contact_info`` error whose ``ctx`` carries the
field label and the high-confidence detections, for the error message
and for the violation audit trail.  Medium-confidence hits never block;
use ``validate_and_detect`` when you need them forwarded to review.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from pydantic_core import PydanticCustomError

from .content_filter import (
    ContentFilter,
    ContentScanTimeout,
    ContentTooLong,
    analyze_content,
    get_blocked_content_message,
)
from .types import ContentFilterResult, Detection

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ContentCheck:
    """A value that passed the filter, with every detection found in it."""
    value: str
    detections: list[Detection] = field(default_factory=list)


def _check(field_label: str, value: str, content_filter: ContentFilter | None) -> ContentFilterResult:
    try:
        if content_filter is None:
            result = analyze_content(value)
        else:
            result = content_filter.analyze(value)
    except ContentTooLong as e:
        raise PydanticCustomError(
            "content_too_long",
            "Your {field_label} is too long to be checked ({length} characters, limit {max_length}).",
            {"field_label": field_label, "length": e.length, "max_length": e.max_length},
        ) from e
    except ContentScanTimeout as e:
        raise PydanticCustomError(
            "content_unscannable",
            "Your {field_label} could not be checked. Please shorten or simplify it.",
            {"field_label": field_label},
        ) from e

    if not result.allowed:
        high = result.high_confidence_detections
        logger.info("rejected %s: %s", field_label, sorted({d.type for d in high}))
        if content_filter is None:
            message = get_blocked_content_message(field_label, high)
        else:
            message = content_filter.blocked_message(field_label, high)
        raise PydanticCustomError(
            "contact_info",
            message,
            {"field_label": field_label, "detections": [d.to_dict() for d in high]},
        )
    return result


def no_contact_info(
    field_label: str,
    *,
    content_filter: ContentFilter | None = None,
) -> Callable[[str], str]:
    """Validator factory: reject on any high-confidence detection."""
    def validate(value: str) -> str:
        _check(field_label, value, content_filter)
        return value

    return validate


def validate_and_detect(
    field_label: str,
    *,
    content_filter: ContentFilter | None = None,
) -> Callable[[str], ContentCheck]:
    """Like no_contact_info, but returns the value with all detections."""
    def validate(value: str) -> ContentCheck:
        result = _check(field_label, value, content_filter)
        return ContentCheck(value=value, detections=result.detections)

    return validate
