"""Typed containers shared across the adapter."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class RiskLevel(str, Enum):
    """Severity buckets the model is asked to choose from."""

    SAFE = "SAFE"
    SUSPICIOUS = "SUSPICIOUS"
    DANGEROUS = "DANGEROUS"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class AttachmentPart:
    """Base64 image payload coupled with its media type."""

    mime_type: str
    data: str

    def to_part(self) -> dict[str, Any]:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


@dataclass(frozen=True)
class VerificationStrategy:
    """A suggested counter-reply the user can send to test the other party."""

    type: str
    explanation: str
    reply: str
    expected_reaction: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "explanation": self.explanation,
            "reply": self.reply,
            "expectedReaction": self.expected_reaction,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Structured verdict returned by the model for one analysis call."""

    risk_score: float
    risk_level: RiskLevel
    summary: str
    scammer_motive: str
    expected_outcome: str
    red_flags: tuple[str, ...]
    psychological_tactics: tuple[str, ...]
    verification_strategies: tuple[VerificationStrategy, ...]
    actionable_advice: str
    scam_alert_message: str
    generated_conversation: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        # raw is a read-only copy of the decoded JSON.
        object.__setattr__(self, "raw", MappingProxyType(copy.deepcopy(dict(self.raw))))

    @property
    def is_simulation(self) -> bool:
        """True when the model fabricated a sample dialogue before analyzing it."""
        return self.generated_conversation is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase mapping the model produced."""
        return {
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "summary": self.summary,
            "generatedConversation": self.generated_conversation,
            "scammerMotive": self.scammer_motive,
            "expectedOutcome": self.expected_outcome,
            "redFlags": list(self.red_flags),
            "psychologicalTactics": list(self.psychological_tactics),
            "verificationStrategies": [s.to_dict() for s in self.verification_strategies],
            "actionableAdvice": self.actionable_advice,
            "scamAlertMessage": self.scam_alert_message,
        }
