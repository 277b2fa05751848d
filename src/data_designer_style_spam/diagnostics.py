from __future__ import annotations

from dataclasses import dataclass

from data_designer_style_spam.core import Hyperparameters, Measurements, RuleSet, preview
from data_designer_style_spam.policy import DEFAULT_POLICY, PolicyConfiguration, ReasonCode, Verdict, evaluate


@dataclass(frozen=True)
class Diagnostics:
    """Human-readable breakdown of one decision.

    Built from the ``Verdict`` of the same evaluation, so the rules listed here
    are exactly the ones that produced the score.
    """

    fired_rules: tuple[str, ...]
    measurements: Measurements
    points: int
    max_score: int
    score: float
    threshold: float
    action: str
    reason_code: ReasonCode
    preview: str

    @classmethod
    def from_verdict(
        cls,
        verdict: Verdict,
        config: PolicyConfiguration,
        text: str | None = None,
        hyperparameters: Hyperparameters | None = None,
    ) -> Diagnostics:
        features = verdict.explanation
        return cls(
            fired_rules=tuple(features.fired),
            measurements=features.measurements,
            points=features.points,
            max_score=features.max_score,
            score=verdict.score,
            threshold=config.threshold,
            action="HIDDEN" if verdict.should_suppress else "VISIBLE",
            reason_code=verdict.reason_code,
            preview=preview(text or "", hyperparameters),
        )

    def to_payload(self) -> dict[str, object]:
        return {
            "fired_rules": list(self.fired_rules),
            "measurements": self.measurements.to_payload(),
            "points": self.points,
            "max_score": self.max_score,
            "score": round(self.score, 2),
            "threshold": self.threshold,
            "action": self.action,
            "reason_code": self.reason_code.value,
            "preview": self.preview,
        }

    def render(self) -> str:
        m = self.measurements
        lines = [
            f"Score: {self.score:.2f} (threshold: {self.threshold})",
            f"Action: {self.action} ({self.reason_code.value})",
            f"Fired: {', '.join(self.fired_rules) or 'none'} ({self.points}/{self.max_score})",
            f"Line breaks: {m.line_breaks}",
            f"Length: {m.length}",
            f"Short lines: {m.short_lines}",
            f"Paragraphs: {m.block_count} total, {m.single_line_blocks} single-line ({m.single_line_block_ratio:.0%})",
            f"Has emojis: {m.has_emoji}",
        ]
        return "\n".join(lines)


def explain(
    text: str | None,
    config: PolicyConfiguration | None = None,
    *,
    structural_match: bool = False,
    rule_set: RuleSet | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> Diagnostics:
    """Evaluate ``text`` and describe how the decision was reached."""
    config = config or DEFAULT_POLICY
    verdict = evaluate(
        text,
        config,
        structural_match=structural_match,
        rule_set=rule_set,
        hyperparameters=hyperparameters,
    )
    return Diagnostics.from_verdict(verdict, config, text, hyperparameters)
