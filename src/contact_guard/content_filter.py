"""ContentFilter, the main detection API.  Whitelist first, then two tiers.

Usage:
    from contact_guard import analyze_content, get_blocked_content_message

    result = analyze_content("Call me at 555-123-4567")
    result.allowed                       # False
    get_blocked_content_message("Message", result.high_confidence_detections)
    # "Your Message appears to contain a phone number. For your security, ..."

``analyze_content`` uses a default ``ContentFilter``; build your own
with a ``FilterConfig`` to change limits.  Instances hold no mutable
state and are safe to share across threads.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable

from .patterns import (
    detect_high_confidence,
    detect_medium_confidence,
    strip_whitelisted_content,
)
from .types import ContentFilterResult, Detection, UserRecord

logger = logging.getLogger(__name__)

PLATFORM_NAME = "PlankMarket"

_TYPE_LABELS = {
    "phone": "phone number",
    "email": "email address",
    "url": "website URL",
    "social_handle": "social media handle",
    "email_substitution": "email address",
    "intent_phrase": "contact information request",
    "business_name": "business name",
    "full_name": "personal name",
}


class ContentFilterError(Exception):
    """Text could not be scanned; treat as a rejected submission."""


class ContentTooLong(ContentFilterError):
    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"content length {length} exceeds limit of {max_length}")
        self.length = length
        self.max_length = max_length


class ContentScanTimeout(ContentFilterError):
    """A pattern scan exceeded the configured matching timeout."""


@dataclass
class FilterConfig:
    """Configuration for the ContentFilter."""
    max_length: int | None = 20_000       # None = no cap
    regex_timeout: float | None = 0.5     # seconds per pattern scan, None = no limit
    platform_name: str = PLATFORM_NAME


class ContentFilter:
    """Anti-circumvention content filter.

    Stage 1: Strip whitelisted trade text (prices, dimensions, SKUs, ZIPs)
    Stage 2: High-confidence scan (phone, email, URL), blocks
    Stage 3: Medium-confidence scan (handles, intent phrases), review only
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()

    def analyze(self, text: str) -> ContentFilterResult:
        """Analyze text for contact information.

        Raises ContentTooLong / ContentScanTimeout when the text cannot be
        scanned within the configured limits.
        """
        max_length = self.config.max_length
        if max_length is not None and len(text) > max_length:
            raise ContentTooLong(len(text), max_length)

        timeout = self.config.regex_timeout
        try:
            cleaned = strip_whitelisted_content(text, timeout=timeout)
            high = detect_high_confidence(cleaned, timeout=timeout)
            medium = detect_medium_confidence(cleaned, timeout=timeout)
        except TimeoutError as e:
            raise ContentScanTimeout(str(e)) from e

        if medium:
            logger.info(
                "medium-confidence contact signals: count=%d types=%s",
                len(medium), sorted({d.type for d in medium}),
            )

        return ContentFilterResult(
            allowed=not high,
            detections=high + medium,
            high_confidence_detections=high,
            medium_confidence_detections=medium,
        )

    def blocked_message(self, field_label: str, detections: Iterable[Detection]) -> str:
        return get_blocked_content_message(
            field_label, detections, platform_name=self.config.platform_name,
        )


_default_filter = ContentFilter()


def analyze_content(text: str) -> ContentFilterResult:
    """Analyze text with the default filter configuration."""
    return _default_filter.analyze(text)


def detect_self_reference(text: str, user: UserRecord) -> list[Detection]:
    """Find the user's own business name or full name in text.

    Needs the author's record, so callers run it next to analyze_content
    rather than inside it.  Offsets refer to the unstripped input.
    """
    detections: list[Detection] = []
    lowered = text.lower()

    # Short names collide with ordinary words.
    if user.business_name and len(user.business_name) >= 4:
        needle = user.business_name.lower().strip()
        index = lowered.find(needle)
        if index != -1:
            detections.append(Detection(
                level="high",
                type="business_name",
                match=text[index:index + len(needle)],
                index=index,
            ))

    # First names alone are too common; require first + last.
    if user.name and len(user.name.split()) >= 2:
        needle = user.name.lower().strip()
        index = lowered.find(needle)
        if index != -1:
            detections.append(Detection(
                level="medium",
                type="full_name",
                match=text[index:index + len(needle)],
                index=index,
            ))

    return detections


def format_detection_type(kind: str) -> str:
    """User-facing label for a detection type."""
    return _TYPE_LABELS.get(kind, "contact information")


def get_blocked_content_message(
    field_label: str,
    detections: Iterable[Detection],
    *,
    platform_name: str = PLATFORM_NAME,
) -> str:
    """One sentence telling the user why their field was rejected."""
    suffix = f"For your security, all communication must stay on {platform_name}."

    labels: list[str] = []
    for d in detections:
        label = format_detection_type(d.type)
        if label not in labels:
            labels.append(label)

    if not labels:
        return f"Your {field_label} appears to contain contact information. {suffix}"
    if len(labels) == 1:
        return f"Your {field_label} appears to contain a {labels[0]}. {suffix}"

    listed = ", ".join(labels[:-1]) + " or " + labels[-1]
    return f"Your {field_label} appears to contain {listed}. {suffix}"
