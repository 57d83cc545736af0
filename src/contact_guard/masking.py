"""Order-status-driven contact masking.

    | Order status          | Identity   | Email / phone |
    |-----------------------|------------|---------------|
    | delivered, completed  | full       | full          |
    | shipped               | anonymous  | masked        |
    | anything else         | anonymous  | hidden        |

Unknown statuses fall through to the most private row.  Masking is
display-layer obfuscation only.
"""

from __future__ import annotations
from typing import Any, Mapping

import regex as re

from .identity import get_anonymous_display_name, should_reveal_identity
from .types import DisclosureLevel, UserContactView, UserRecord

_NON_DIGIT = re.compile(r"\D", re.ASCII)

FULL = DisclosureLevel(identity="full", contact="full")
MASKED = DisclosureLevel(identity="anonymous", contact="masked")
HIDDEN = DisclosureLevel(identity="anonymous", contact="hidden")


def get_mask_level(order_status: str) -> DisclosureLevel:
    if should_reveal_identity(order_status):
        return FULL
    if order_status == "shipped":
        return MASKED
    return HIDDEN


def mask_email(email: str) -> str:
    """Keep one or two leading characters of the local part.

    "john.doe@example.com" -> "jo***@example.com", "a@b.com" -> "a***@b.com".
    Anything without both halves is returned unchanged.
    """
    parts = email.split("@")
    local = parts[0]
    domain = parts[1] if len(parts) > 1 else ""
    if not local or not domain:
        return email

    visible = 1 if len(local) == 1 else 2
    return f"{local[:visible]}***@{domain}"


def mask_phone(phone: str) -> str:
    """Keep the last four digits, in the punctuation style of the input.

    "(555) 123-4567" -> "(***) ***-4567", "555-123-4567" -> "***-***-4567",
    anything else -> "******4567".
    """
    last_four = _NON_DIGIT.sub("", phone)[-4:]
    if "(" in phone and ")" in phone:
        return f"(***) ***-{last_four}"
    if "-" in phone:
        return f"***-***-{last_four}"
    return f"******{last_four}"


def mask_user_for_order(
    user: UserRecord | Mapping[str, Any],
    order_status: str,
    is_admin: bool = False,
) -> UserContactView:
    """Project a user into what the order counterparty is allowed to see.

    Admins always get the unmodified record.
    """
    if not isinstance(user, UserRecord):
        user = UserRecord.from_mapping(user)

    if is_admin:
        return UserContactView(
            id=user.id,
            name=user.name,
            business_name=user.business_name,
            email=user.email,
            phone=user.phone,
        )

    level = get_mask_level(order_status)
    revealed = level.identity == "full"

    email: str | None = None
    phone: str | None = None
    if level.contact == "full":
        email, phone = user.email, user.phone
    elif level.contact == "masked":
        email = mask_email(user.email) if user.email else None
        phone = mask_phone(user.phone) if user.phone else None

    return UserContactView(
        id=user.id,
        name=user.name if revealed else get_anonymous_display_name(user.role, user.business_state),
        business_name=user.business_name if revealed else None,
        email=email,
        phone=phone,
    )
