from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from data_designer_style_spam.core import (
    FeatureVector,
    Hyperparameters,
    RuleSet,
    extract_features,
    preview,
)

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Independently toggleable suppression categories."""

    STYLE_SPAM = "style_spam"
    STRUCTURAL_EXCLUSION = "structural_exclusion"


class ReasonCode(str, Enum):
    NONE = "NONE"
    STYLE_SPAM = "STYLE_SPAM"
    STRUCTURAL_EXCLUSION = "STRUCTURAL_EXCLUSION"


DEFAULT_THRESHOLD = 0.4


class _HostSettings(BaseModel):
    """Toggle document as a host stores it (``filterSpam`` / ``filterPolls``)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    filter_spam: bool = Field(default=True, alias="filterSpam")
    filter_polls: bool = Field(default=True, alias="filterPolls")
    threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0)


class PolicyConfiguration(BaseModel):
    """Decision policy supplied by the caller on every evaluation.

    Attributes:
        threshold: Minimum score (inclusive) for a style-spam suppression.
        enabled_categories: Categories allowed to suppress a document. A disabled
            category is never checked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0, description="Inclusive suppression threshold")
    enabled_categories: frozenset[Category] = Field(
        default_factory=lambda: frozenset(Category),
        description="Categories that may suppress a document",
    )

    def is_enabled(self, category: Category) -> bool:
        return category in self.enabled_categories

    @classmethod
    def from_settings(cls, settings: Mapping[str, object]) -> PolicyConfiguration:
        """Build a policy from a host's stored toggles.

        Missing toggles default to enabled. Unknown keys raise ``ValidationError``.
        """
        host = _HostSettings.model_validate(dict(settings))
        categories = set()
        if host.filter_spam:
            categories.add(Category.STYLE_SPAM)
        if host.filter_polls:
            categories.add(Category.STRUCTURAL_EXCLUSION)
        return cls(threshold=host.threshold, enabled_categories=frozenset(categories))


DEFAULT_POLICY = PolicyConfiguration()


@dataclass(frozen=True)
class Verdict:
    should_suppress: bool
    reason_code: ReasonCode
    score: float
    explanation: FeatureVector

    def to_payload(self) -> dict[str, object]:
        return {
            "should_suppress": self.should_suppress,
            "reason_code": self.reason_code.value,
            "score": self.score,
            "fired_rules": self.explanation.fired,
            "explanation": self.explanation.to_payload(),
        }


def evaluate(
    text: str | None,
    config: PolicyConfiguration | None = None,
    *,
    structural_match: bool = False,
    rule_set: RuleSet | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> Verdict:
    """Decide whether a document should be suppressed.

    Args:
        text: Extracted document text, or ``None`` when the host could not
            extract any.
        config: Decision policy. Uses ``DEFAULT_POLICY`` if omitted.
        structural_match: Host-supplied signal that the content item matches the
            structural-exclusion pattern (e.g. it is a poll).
        rule_set: Optional rule set override.
        hyperparameters: Optional rule cut-off overrides.

    Returns:
        A ``Verdict``. Structural exclusion wins over style scoring; a document
        without text is never suppressed for style.
    """
    config = config or DEFAULT_POLICY
    features = extract_features(text or "", rule_set, hyperparameters)
    score = features.score

    if structural_match and config.is_enabled(Category.STRUCTURAL_EXCLUSION):
        logger.debug("Structural exclusion matched, suppressing without style scoring")
        return Verdict(True, ReasonCode.STRUCTURAL_EXCLUSION, score, features)

    if not config.is_enabled(Category.STYLE_SPAM):
        return Verdict(False, ReasonCode.NONE, score, features)

    if not text or not text.strip():
        logger.debug("No text available for document, leaving it visible")
        return Verdict(False, ReasonCode.NONE, score, features)

    suppress = score >= config.threshold
    logger.debug(
        "Style analysis: score=%.2f threshold=%s action=%s line_breaks=%d length=%d has_emoji=%s preview=%r",
        score,
        config.threshold,
        "HIDDEN" if suppress else "VISIBLE",
        features.measurements.line_breaks,
        features.measurements.length,
        features.measurements.has_emoji,
        preview(text, hyperparameters),
    )
    if suppress:
        return Verdict(True, ReasonCode.STYLE_SPAM, score, features)
    return Verdict(False, ReasonCode.NONE, score, features)
