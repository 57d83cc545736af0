"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

DetectionLevel = Literal["high", "medium"]
IdentityLevel = Literal["anonymous", "full"]
ContactLevel = Literal["hidden", "masked", "full"]


@dataclass(frozen=True, slots=True)
class Detection:
    """A single contact-information match."""
    level: DetectionLevel
    type: str              # e.g. "phone", "email", "url", "social_handle"
    match: str
    index: int             # offset into the whitelist-stripped text

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "type": self.type, "match": self.match, "index": self.index}


@dataclass(frozen=True, slots=True)
class ContentFilterResult:
    """Result of analyzing one piece of free text."""
    allowed: bool                                # False iff any high-confidence hit
    detections: list[Detection] = field(default_factory=list)
    high_confidence_detections: list[Detection] = field(default_factory=list)
    medium_confidence_detections: list[Detection] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "allowed": self.allowed,
            "detections": [d.to_dict() for d in self.detections],
            "highConfidenceDetections": [d.to_dict() for d in self.high_confidence_detections],
            "mediumConfidenceDetections": [d.to_dict() for d in self.medium_confidence_detections],
        }


@dataclass(frozen=True, slots=True)
class DisclosureLevel:
    """What a counterparty may see of a user for one order state."""
    identity: IdentityLevel
    contact: ContactLevel

    def to_dict(self) -> dict[str, str]:
        return {"identity": self.identity, "contact": self.contact}


@dataclass(frozen=True, slots=True)
class UserRecord:
    """Raw user data as loaded by the caller. Holds real PII."""
    id: str
    name: str
    business_name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str = "buyer"
    business_state: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserRecord":
        """Build from a dict using either snake_case or camelCase keys."""
        def pick(snake: str, camel: str) -> Any:
            return data[snake] if snake in data else data.get(camel)

        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            business_name=pick("business_name", "businessName"),
            email=data.get("email"),
            phone=data.get("phone"),
            role=data.get("role") or "buyer",
            business_state=pick("business_state", "businessState"),
        )


@dataclass(frozen=True, slots=True)
class UserContactView:
    """PII-safe projection of a user, shown to an order counterparty."""
    id: str
    name: str
    business_name: str | None
    email: str | None
    phone: str | None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "name": self.name,
            "businessName": self.business_name,
            "email": self.email,
            "phone": self.phone,
        }
