"""Anonymous identities for buyers and sellers.

Counterparties see a role/state pseudonym ("Verified Seller in FL")
until an order is delivered or completed; only then is the real
business identity revealed.
"""

from __future__ import annotations

from .content_filter import PLATFORM_NAME

REVEAL_STATUSES = frozenset({"delivered", "completed"})

SUPPORT_LABEL = f"{PLATFORM_NAME} Support"

# role -> (default label, synonym picked for even hashes)
_ROLE_SYNONYMS = {
    "seller": ("Seller", "Supplier"),
    "buyer": ("Buyer", "Professional"),
}

_INITIALS = {
    "seller": "VS",   # Verified Seller
    "buyer": "VB",    # Verified Buyer
    "admin": "PS",    # PlankMarket Support
}


def should_reveal_identity(order_status: str) -> bool:
    """True once the order is delivered or completed."""
    return order_status in REVEAL_STATUSES


def get_anonymous_display_name(
    role: str,
    business_state: str | None = None,
    user_id: str | None = None,
) -> str:
    """Pseudonym shown in place of a real name or business name.

    >>> get_anonymous_display_name("seller", "FL")
    'Verified Seller in FL'
    >>> get_anonymous_display_name("buyer")
    'Verified Buyer'
    >>> get_anonymous_display_name("admin", "TX")
    'PlankMarket Support'
    """
    if role == "admin":
        return SUPPORT_LABEL

    label = get_role_label(role, user_id)
    if business_state:
        return f"Verified {label} in {business_state}"
    return f"Verified {label}"


def get_role_label(role: str, user_id: str | None = None) -> str:
    """Display label for a role.

    With a user id, sellers and buyers get one of two synonyms chosen by
    a stable hash of the id, so the same user always reads the same way
    while different users don't all share one label.
    """
    synonyms = _ROLE_SYNONYMS.get(role)
    if synonyms is not None:
        default, alternate = synonyms
        if user_id and _simple_hash(user_id) % 2 == 0:
            return alternate
        return default
    if role == "admin":
        return "Admin"
    return role[:1].upper() + role[1:]


def get_anonymous_initials(role: str) -> str:
    """Two-letter avatar initials matching the anonymous display name."""
    if role in _INITIALS:
        return _INITIALS[role]
    return "V" + role[:1].upper()


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _simple_hash(value: str) -> int:
    """Rolling hash: h = (h << 5) - h + unit, folded to signed 32-bit.

    Iterates UTF-16 code units so ids hash identically to the browser
    client.  Returns the absolute value.
    """
    data = value.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return abs(h)
