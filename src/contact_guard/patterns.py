r"""Pattern tables for contact-information detection.

Three layers, all plain regexes compiled once at import:

  1. Whitelist: legitimate flooring trade text (prices, dimensions,
     SKUs, ZIPs) that is blanked out before anything else runs.
  2. High confidence: phones, emails, URLs.  Any hit blocks.
  3. Medium confidence: handles, "at/dot" emails, intent phrases.
     Routed to review, never blocks.

Offsets in returned detections refer to the *stripped* text.

Patterns use the ``regex`` module so every scan can carry a matching
timeout.  None of them nest unbounded quantifiers; worst case is
polynomial in input length, which callers bound via ``max_length``.

``\d``, ``\w`` and ``\b`` are ASCII, as in the browser client, but
``\s`` also covers the Unicode spaces the browser treats as whitespace
(NBSP, en/em spaces, ideographic space, ...).  Otherwise a phone
number separated by NBSPs would pass.
"""

from __future__ import annotations
import regex as re

from .types import Detection

_FLAGS = re.ASCII
_IFLAGS = re.ASCII | re.IGNORECASE

_SPACE = r"\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"


def _compile(pattern: str, flags: int = _FLAGS) -> re.Pattern:
    """Compile with ``\\s`` widened to _SPACE, inside and outside classes."""
    out: list[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            esc = pattern[i:i + 2]
            if esc == r"\s":
                out.append(_SPACE if in_class else f"[{_SPACE}]")
            else:
                out.append(esc)
            i += 2
            continue
        if ch == "[" and not in_class:
            in_class = True
        elif ch == "]" and in_class:
            in_class = False
        out.append(ch)
        i += 1
    return re.compile("".join(out), flags)


# Not inside or right after a phone group: "555.123.4567", "(555) 123".
_NOT_PHONE_TAIL = r"(?<![\d)][-.\s]|[\d)])"

# Applied in order; later passes see the blanks left by earlier ones.
WHITELIST_PATTERNS: tuple[re.Pattern, ...] = (
    # Prices: $2.50, $6,250.00, $2.50/sq ft, $2.50/sqft
    _compile(
        r"\$\d{1,3}(?:,\d{3})*(?:\.\d{2})?"
        r"(?:\s*/\s*(?:sq\s*ft|sqft|square\s*foot))?", _IFLAGS),

    # Square footage: 2,500 sq ft, 500sqft, 2500 square feet
    _compile(r"\d{1,3}(?:,\d{3})*\s*(?:sq\s*ft|sqft|square\s*feet?)", _IFLAGS),

    # Quoted dimensions: 48" x 40", 3/4" x 5", 12"x12"
    _compile(_NOT_PHONE_TAIL + r'\d+(?:/\d+)?"\s*x\s*\d+(?:/\d+)?"', _IFLAGS),

    # Bare dimensions: 48x40, 12 x 12, 3x5x8
    _compile(r"\b\d+\s*x\s*\d+(?:\s*x\s*\d+)?\b", _IFLAGS),

    # Product identifiers: SKU #555-1234, Model 555-1234, SKU-12345, Part: 12345
    _compile(r"\b(?:SKU|Model|Item|Part)\s*[:#]?\s*[\w-]+", _IFLAGS),

    # Order / reference codes: PM-XXXXXXXX, ORD-12345, #12345
    _compile(r"\b(?:PM|ORD|REF|INV)-[\w-]+\b", _IFLAGS),
    # Capped below ten digits so "#5551234567" still reads as a phone
    _compile(r"(?<!\w)#\d{4,9}\b"),

    # ZIP codes, unless they look like the tail or head of a phone number
    _compile(r"(?<!\d{3}[-.\s])\b\d{5}\b(?![-.\s]\d{4})"),

    # Thickness: 3/4"x5, 0.5"thick
    _compile(_NOT_PHONE_TAIL + r'\b\d+/\d+"\b'),
    _compile(_NOT_PHONE_TAIL + r'\b\d+\.\d+"\b'),
)

# Each entry: (detection type, compiled regex)
HIGH_CONFIDENCE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    # (555) 123-4567
    ("phone", _compile(r"\(\d{3}\)\s*\d{3}[-.\s]?\d{4}")),
    # 555-123-4567, 555.123.4567, 555 123 4567
    ("phone", _compile(r"\b\d{3}[-.\s]\d{3}[-.\s]\d{4}\b")),
    # 5551234567
    ("phone", _compile(r"\b\d{10}\b")),
    # +1-555-123-4567, +1 (555) 123-4567
    ("phone", _compile(r"\+1[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")),
    # 1-800-555-1234
    ("phone", _compile(r"\b1[-.\s]?800[-.\s]?\d{3}[-.\s]?\d{4}\b")),

    ("email", _compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")),

    # Scheme and www are optional, so this also catches word.word domains
    ("url", _compile(
        r"\b(?:https?://)?(?:www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(?:/[^\s]*)?\b")),
    # Bare domains on common TLDs
    ("url", _compile(r"\b[a-zA-Z0-9-]+\.(?:com|net|org|io|co|biz|info)\b", _IFLAGS)),
)

MEDIUM_CONFIDENCE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    # @username, not an email local part and not followed by a TLD
    ("social_handle", _compile(r"(?<![a-zA-Z0-9])@[a-zA-Z0-9_]{3,}(?!\.[a-zA-Z]{2,})")),

    # "name at domain dot com"
    ("email_substitution", _compile(
        r"\b[\w.-]+\s+(?:at|@)\s+[\w.-]+\s+(?:dot|\.)\s+(?:com|net|org|io|co)\b", _IFLAGS)),

    ("intent_phrase", _compile(r"\b(?:call|text|email|contact|reach)\s+(?:me|us)\s+(?:at|on|@)", _IFLAGS)),
    ("intent_phrase", _compile(r"\bmy\s+(?:phone|number|email|cell)\s+(?:is|:)", _IFLAGS)),
    ("intent_phrase", _compile(r"\breach\s+(?:me|us)\s+at\b", _IFLAGS)),
    ("intent_phrase", _compile(r"\bget\s+in\s+touch\s+(?:at|via)\b", _IFLAGS)),
    ("intent_phrase", _compile(r"\bmessage\s+me\s+(?:at|on)\b", _IFLAGS)),
)


def strip_whitelisted_content(text: str, *, timeout: float | None = None) -> str:
    """Replace every whitelist match with a single space, pass by pass."""
    cleaned = text
    for pattern in WHITELIST_PATTERNS:
        cleaned = pattern.sub(" ", cleaned, timeout=timeout)
    return cleaned


def _scan(
    text: str,
    table: tuple[tuple[str, re.Pattern], ...],
    level: str,
    timeout: float | None,
) -> list[Detection]:
    # Every match of every pattern is reported, overlaps included.
    detections: list[Detection] = []
    for kind, pattern in table:
        for m in pattern.finditer(text, timeout=timeout):
            detections.append(Detection(level=level, type=kind, match=m.group(), index=m.start()))
    return detections


def detect_high_confidence(text: str, *, timeout: float | None = None) -> list[Detection]:
    """Phones, emails and URLs. Expects already-stripped text."""
    return _scan(text, HIGH_CONFIDENCE_PATTERNS, "high", timeout)


def detect_medium_confidence(text: str, *, timeout: float | None = None) -> list[Detection]:
    """Handles, obfuscated emails and intent phrases. Expects already-stripped text."""
    return _scan(text, MEDIUM_CONFIDENCE_PATTERNS, "medium", timeout)


def detect_all_patterns(text: str, *, timeout: float | None = None) -> list[Detection]:
    """Strip, then run both tiers. High-confidence hits come first."""
    cleaned = strip_whitelisted_content(text, timeout=timeout)
    return (
        detect_high_confidence(cleaned, timeout=timeout)
        + detect_medium_confidence(cleaned, timeout=timeout)
    )
