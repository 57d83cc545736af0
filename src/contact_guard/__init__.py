"""contact-guard: anti-circumvention filtering and identity masking for a B2B marketplace."""

from .content_filter import (
    ContentFilter, FilterConfig,
    ContentFilterError, ContentTooLong, ContentScanTimeout,
    analyze_content, detect_self_reference,
    format_detection_type, get_blocked_content_message,
)
from .patterns import (
    strip_whitelisted_content,
    detect_high_confidence, detect_medium_confidence, detect_all_patterns,
)
from .identity import (
    get_anonymous_display_name, get_anonymous_initials,
    get_role_label, should_reveal_identity,
)
from .masking import get_mask_level, mask_email, mask_phone, mask_user_for_order
from .validation import ContentCheck, no_contact_info, validate_and_detect
from .config import create_filter, load_config, load_from_yaml
from .types import (
    Detection, ContentFilterResult, DisclosureLevel, UserRecord, UserContactView,
)

__all__ = [
    "ContentFilter", "FilterConfig",
    "ContentFilterError", "ContentTooLong", "ContentScanTimeout",
    "analyze_content", "detect_self_reference",
    "format_detection_type", "get_blocked_content_message",
    "strip_whitelisted_content",
    "detect_high_confidence", "detect_medium_confidence", "detect_all_patterns",
    "get_anonymous_display_name", "get_anonymous_initials",
    "get_role_label", "should_reveal_identity",
    "get_mask_level", "mask_email", "mask_phone", "mask_user_for_order",
    "ContentCheck", "no_contact_info", "validate_and_detect",
    "create_filter", "load_config", "load_from_yaml",
    "Detection", "ContentFilterResult", "DisclosureLevel", "UserRecord", "UserContactView",
]
__version__ = "0.1.0"
