"""Tests for the content filter: whitelist, detection tiers, orchestration."""

import sys, os
import dataclasses
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from contact_guard import (
    ContentFilter, FilterConfig, ContentTooLong, ContentScanTimeout,
    Detection, UserRecord,
    analyze_content, detect_self_reference, get_blocked_content_message,
    format_detection_type,
)
from contact_guard.patterns import (
    strip_whitelisted_content, detect_high_confidence,
    detect_medium_confidence, detect_all_patterns,
)


def _pairs(detections):
    return [(d.type, d.match) for d in detections]


# ── Whitelist ────────────────────────────────────────────────────────

def test_strip_price_with_unit():
    assert strip_whitelisted_content("Price $2.50/sq ft") == "Price  "


def test_strip_bare_dimensions():
    assert strip_whitelisted_content("48x40 pallet") == "  pallet"


def test_strip_zip_code():
    assert strip_whitelisted_content("Ships from 33101") == "Ships from  "


def test_strip_sku_keeps_digits_away_from_detectors():
    assert strip_whitelisted_content("SKU #555-1234") == " "


def test_strip_reference_codes():
    assert strip_whitelisted_content("see #12345 and ORD-9981") == "see   and  "


def test_strip_golden_listing():
    text = (
        'Oak flooring $4.25/sq ft, 2,500 sq ft available, 48x40 pallets, '
        'SKU: FL-1234, order PM-AB12CD34, ships from 33101, 3/4" thick'
    )
    assert strip_whitelisted_content(text) == (
        'Oak flooring  ,   available,   pallets,  , order  , ships from  , 3/4" thick'
    )


def test_whitelisted_content_is_clean():
    text = (
        'Oak flooring $4.25/sq ft, 2,500 sq ft available, 48x40 pallets, '
        'SKU: FL-1234, order PM-AB12CD34, ships from 33101, 3/4" thick'
    )
    result = analyze_content(text)
    assert result.allowed
    assert result.detections == []


def test_zip_guard_does_not_eat_phone():
    result = analyze_content("Ship to 33101, call 555-123-4567")
    assert not result.allowed
    assert ("phone", "555-123-4567") in _pairs(result.high_confidence_detections)


def test_dimension_pattern_over_whitelists():
    # Accepted limitation: a phone written as a dimension slips through.
    assert strip_whitelisted_content("5551234567x2") == " "
    assert analyze_content("5551234567x2").allowed


def test_thickness_needs_word_after_quote():
    assert strip_whitelisted_content('3/4"thick') == " thick"
    assert strip_whitelisted_content('0.5"thick') == " thick"
    assert strip_whitelisted_content('3/4" thick') == '3/4" thick'


@pytest.mark.parametrize("text", [
    'My number: "555.123.4567"',
    'call 555.123.4567" today',
    '555.123.4567"x',
    '(555) 123.4567"x',
])
def test_quoted_decimal_phone_not_taken_for_thickness(text):
    result = analyze_content(text)
    assert not result.allowed
    assert "phone" in {d.type for d in result.high_confidence_detections}


def test_hash_reference_stops_short_of_phone_length():
    assert strip_whitelisted_content("#123456789") == " "
    assert strip_whitelisted_content("#5551234567") == "#5551234567"
    result = analyze_content("Ref #5551234567")
    assert _pairs(result.high_confidence_detections) == [("phone", "5551234567")]


@pytest.mark.parametrize("space", [
    "\u00a0", "\u2007", "\u2009", "\u202f", "\u3000", "\ufeff",
])
def test_unicode_spaces_separate_phone_groups(space):
    for text in [
        f"555{space}123{space}4567",
        f"(555){space}123-4567",
        f"+1{space}555{space}123{space}4567",
    ]:
        assert not analyze_content(text).allowed, repr(text)


def test_unicode_space_in_price_unit():
    assert strip_whitelisted_content("$2.50\u00a0/\u00a0sq\u00a0ft") == " "


# ── Whitelist near misses ────────────────────────────────────────────

_CONTACTS = [
    "555-123-4567",
    "(555) 123-4567",
    "555.123.4567",
    "555 123 4567",
    "5551234567",
    "+1 555 123 4567",
    "1-800-555-1234",
    "sales@oakfloors.com",
    "www.oakfloors.com",
]

# Trade text placed right next to a contact, or quote marks around it.
_NEIGHBOURS = [
    '"{}"',
    '{}" today',
    '{}"x',
    "Ref #{}",
    "pallet 48x40 {}",
    '48" x 40" {}',
    "$2.50/sq ft {}",
    "2,500 sq ft {}",
    "ZIP 33101 {}",
    "{} 33101",
    "SKU: FL-1234 {}",
    "order PM-AB12CD34 {}",
    '3/4" {}',
    '0.5" {}',
]


@pytest.mark.parametrize("template", _NEIGHBOURS)
@pytest.mark.parametrize("contact", _CONTACTS)
def test_contact_beside_trade_text_still_blocked(template, contact):
    result = analyze_content(template.format(contact))
    assert not result.allowed


# ── High confidence ──────────────────────────────────────────────────

def test_dashed_phone():
    assert _pairs(detect_high_confidence("555-123-4567")) == [("phone", "555-123-4567")]


def test_parenthesized_phone():
    assert _pairs(detect_high_confidence("(555) 123-4567")) == [("phone", "(555) 123-4567")]


def test_bare_ten_digit_phone():
    assert _pairs(detect_high_confidence("5551234567")) == [("phone", "5551234567")]


def test_international_phone_overlaps_not_deduplicated():
    phones = [d for d in detect_high_confidence("+1 555 123 4567") if d.type == "phone"]
    assert [d.match for d in phones] == ["555 123 4567", "+1 555 123 4567"]


def test_toll_free_phone():
    matches = [d.match for d in detect_high_confidence("1-800-555-1234")]
    assert "1-800-555-1234" in matches


def test_email_and_overlapping_urls():
    detections = detect_high_confidence("Email john.doe@example.com for pricing")
    assert _pairs(detections) == [
        ("email", "john.doe@example.com"),
        ("url", "john.doe"),
        ("url", "example.com"),
        ("url", "example.com"),
    ]
    assert all(d.level == "high" for d in detections)


def test_www_url():
    detections = detect_high_confidence("Visit www.floorsdirect.com today")
    assert [d.match for d in detections] == ["www.floorsdirect.com", "floorsdirect.com"]


def test_scheme_url_with_path():
    matches = [d.match for d in detect_high_confidence("See https://example.io/catalog")]
    assert matches == ["https://example.io/catalog", "example.io"]


# ── Medium confidence ────────────────────────────────────────────────

def test_social_handle():
    assert _pairs(detect_medium_confidence("Follow @plankpro on Instagram")) == [
        ("social_handle", "@plankpro"),
    ]


def test_handle_ignores_email_local_part():
    assert detect_medium_confidence("bob@example.com") == []


def test_email_substitution():
    assert _pairs(detect_medium_confidence("john at example dot com")) == [
        ("email_substitution", "john at example dot com"),
    ]


@pytest.mark.parametrize("text,phrase", [
    ("my phone is below", "my phone is"),
    ("Get in touch via the app", "Get in touch via"),
    ("message me on the weekend", "message me on"),
])
def test_intent_phrases(text, phrase):
    detections = detect_medium_confidence(text)
    assert ("intent_phrase", phrase) in _pairs(detections)
    assert all(d.level == "medium" for d in detections)


def test_medium_hits_never_block():
    result = analyze_content("Follow @plankpro or john at example dot com")
    assert result.allowed
    assert result.high_confidence_detections == []
    assert {d.type for d in result.medium_confidence_detections} == {
        "social_handle", "email_substitution",
    }


# ── Orchestration ────────────────────────────────────────────────────

def test_analyze_combines_tiers():
    result = analyze_content("Call me at 555-123-4567")
    assert not result.allowed
    assert _pairs(result.high_confidence_detections) == [("phone", "555-123-4567")]
    assert _pairs(result.medium_confidence_detections) == [("intent_phrase", "Call me at")]
    assert result.detections == (
        result.high_confidence_detections + result.medium_confidence_detections
    )


def test_allowed_iff_no_high_confidence():
    for text in ["plain text", "reach me at the booth", "call 555-123-4567", "a@b.com"]:
        result = analyze_content(text)
        assert result.allowed == (len(result.high_confidence_detections) == 0)


def test_index_refers_to_stripped_text():
    result = analyze_content("$12.50 for 555-123-4567")
    phone = result.high_confidence_detections[0]
    assert phone.match == "555-123-4567"
    assert phone.index == 6


def test_analyze_is_stable():
    text = "Email me: sales@oakfloors.com or @oakfloors"
    first = analyze_content(text)
    second = analyze_content(text)
    assert first == second


def test_result_is_immutable():
    result = analyze_content("plain text")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.allowed = False


def test_detect_all_patterns_matches_analyze():
    text = "Call me at 555-123-4567"
    assert detect_all_patterns(text) == analyze_content(text).detections


def test_result_to_dict_shape():
    data = analyze_content("call 555-123-4567").to_dict()
    assert data["allowed"] is False
    assert data["highConfidenceDetections"][0] == {
        "level": "high", "type": "phone", "match": "555-123-4567", "index": 5,
    }
    assert data["mediumConfidenceDetections"] == []


def test_max_length_enforced():
    f = ContentFilter(FilterConfig(max_length=10))
    with pytest.raises(ContentTooLong) as exc:
        f.analyze("x" * 11)
    assert exc.value.max_length == 10
    assert f.analyze("x" * 10).allowed


def test_regex_timeout_surfaces(monkeypatch):
    def boom(text, *, timeout=None):
        raise TimeoutError("regex timed out")

    monkeypatch.setattr("contact_guard.content_filter.detect_high_confidence", boom)
    with pytest.raises(ContentScanTimeout):
        ContentFilter().analyze("anything")


# ── Messages ─────────────────────────────────────────────────────────

_SUFFIX = "For your security, all communication must stay on PlankMarket."


def _det(kind, level="high"):
    return Detection(level=level, type=kind, match="x", index=0)


def test_message_without_detections():
    assert get_blocked_content_message("Message", []) == (
        f"Your Message appears to contain contact information. {_SUFFIX}"
    )


def test_message_single_type_deduplicated():
    msg = get_blocked_content_message("Message", [_det("phone"), _det("phone")])
    assert msg == f"Your Message appears to contain a phone number. {_SUFFIX}"


def test_message_lists_types_with_or():
    msg = get_blocked_content_message("Description", [_det("phone"), _det("email"), _det("url")])
    assert msg == (
        "Your Description appears to contain phone number, email address or website URL. "
        + _SUFFIX
    )


def test_message_merges_same_label():
    msg = get_blocked_content_message("Note", [_det("email"), _det("email_substitution", "medium")])
    assert msg == f"Your Note appears to contain a email address. {_SUFFIX}"


def test_message_platform_name_configurable():
    f = ContentFilter(FilterConfig(platform_name="FloorHub"))
    assert f.blocked_message("Bio", [_det("url")]).endswith("must stay on FloorHub.")


def test_format_detection_type_fallback():
    assert format_detection_type("social_handle") == "social media handle"
    assert format_detection_type("carrier_pigeon") == "contact information"


# ── Self reference ───────────────────────────────────────────────────

def test_self_reference_business_and_name():
    user = UserRecord(id="u1", name="Jane Roe", business_name="Oak Floors LLC")
    detections = detect_self_reference("Ask for jane roe at OAK FLOORS LLC", user)
    assert detections == [
        Detection(level="high", type="business_name", match="OAK FLOORS LLC", index=20),
        Detection(level="medium", type="full_name", match="jane roe", index=8),
    ]


def test_self_reference_ignores_short_and_single_names():
    user = UserRecord(id="u1", name="Jane", business_name="Oak")
    assert detect_self_reference("Jane sells Oak", user) == []
