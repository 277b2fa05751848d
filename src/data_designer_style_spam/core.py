# Surface-formatting scorer for low-substance "style spam" posts.
#
# Runs a fixed set of structural rules (line breaks, line lengths, paragraph
# fragmentation, emoji, decorative glyphs, bait openers) against raw text and
# reduces them to a normalized score in [0, 1]. No topic analysis.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

import regex

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Cut-offs used by the structural rules."""

    line_break_min: int = 4
    brevity_max_chars: int = 300
    short_line_max_chars: int = 60
    short_line_min_count: int = 5
    very_short_line_max_chars: int = 30
    very_short_min_lines: int = 10
    very_short_ratio: float = 0.5
    decorative_glyph_min: int = 3
    fragmentation_min_blocks: int = 6
    fragmentation_single_ratio: float = 0.7
    preview_chars: int = 100


DEFAULT_HYPERPARAMETERS = Hyperparameters()


# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_PICTOGRAPHIC_RE = regex.compile(r"\p{Extended_Pictographic}")

_HYPE_EMOJI = "(?:\U0001f525|\U0001f680|\U0001f4af)"
# Two hype emoji separated by nothing, horizontal spaces, or variation selectors.
_HYPE_RUN_RE = re.compile(_HYPE_EMOJI + "[ \\t\\u00a0\\ufe0f]*" + _HYPE_EMOJI)

_BAIT_OPENERS = [
    r"wild",
    r"hot take",
    r"unpopular opinion",
    r"controversial",
    r"real talk",
    r"let that sink in",
    r"mind[.\s]*blown",
    r"unsettling",
    r"shocking",
    r"game[- ]changer",
    r"this changes everything",
]
_BAIT_OPENER_RE = re.compile(r"(?:" + "|".join(_BAIT_OPENERS) + r")", re.IGNORECASE)

_DECORATIVE_GLYPH_RE = re.compile("[→↳•✓✔✅❌]")


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Measurements:
    """Raw structural counts taken from one document in a single pass."""

    length: int
    line_breaks: int
    line_count: int
    short_lines: int
    non_empty_lines: int
    very_short_lines: int
    block_count: int
    single_line_blocks: int
    has_emoji: bool
    hype_run: bool
    bait_opener: bool
    decorative_glyphs: int

    @property
    def single_line_block_ratio(self) -> float:
        if self.block_count == 0:
            return 0.0
        return self.single_line_blocks / self.block_count

    @property
    def very_short_line_ratio(self) -> float:
        if self.non_empty_lines == 0:
            return 0.0
        return self.very_short_lines / self.non_empty_lines

    def to_payload(self) -> dict[str, object]:
        return {
            "length": self.length,
            "line_breaks": self.line_breaks,
            "line_count": self.line_count,
            "short_lines": self.short_lines,
            "non_empty_lines": self.non_empty_lines,
            "very_short_lines": self.very_short_lines,
            "very_short_line_ratio": round(self.very_short_line_ratio, 2),
            "block_count": self.block_count,
            "single_line_blocks": self.single_line_blocks,
            "single_line_block_ratio": round(self.single_line_block_ratio, 2),
            "has_emoji": self.has_emoji,
            "hype_run": self.hype_run,
            "bait_opener": self.bait_opener,
            "decorative_glyphs": self.decorative_glyphs,
        }


def _paragraph_blocks(lines: list[str]) -> list[int]:
    """Line counts of each maximal run of non-blank lines."""
    blocks: list[int] = []
    current = 0
    for line in lines:
        if line.strip():
            current += 1
        elif current:
            blocks.append(current)
            current = 0
    if current:
        blocks.append(current)
    return blocks


def measure(text: str, hyperparameters: Hyperparameters | None = None) -> Measurements:
    """Take every measurement the rules need. Total over all strings."""
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    # "".split("\n") is [""], which would count as one short line.
    lines = text.split("\n") if text else []
    trimmed = [line.strip() for line in lines]
    non_empty = [t for t in trimmed if t]
    blocks = _paragraph_blocks(lines)

    return Measurements(
        length=len(text),
        line_breaks=text.count("\n"),
        line_count=len(lines),
        short_lines=sum(1 for t in trimmed if len(t) < hp.short_line_max_chars),
        non_empty_lines=len(non_empty),
        very_short_lines=sum(1 for t in non_empty if len(t) < hp.very_short_line_max_chars),
        block_count=len(blocks),
        single_line_blocks=sum(1 for b in blocks if b == 1),
        has_emoji=_PICTOGRAPHIC_RE.search(text) is not None,
        hype_run=_HYPE_RUN_RE.search(text) is not None,
        bait_opener=_BAIT_OPENER_RE.match(text.strip()) is not None,
        decorative_glyphs=len(_DECORATIVE_GLYPH_RE.findall(text)),
    )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

_Predicate = Callable[[str, Measurements, Hyperparameters], bool]


@dataclass(frozen=True)
class Rule:
    """A named, weighted check.

    ``predicate`` receives the raw text together with the shared ``Measurements``
    so custom rules can look at anything ``measure`` does not already count.
    """

    name: str
    weight: int
    predicate: _Predicate
    description: str = ""


def _line_break_density(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    return m.line_breaks >= hp.line_break_min


def _deceptive_brevity(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    # Empty text has nothing to be deceptive about.
    return 0 < m.length < hp.brevity_max_chars


def _emoji_presence(_text: str, m: Measurements, _hp: Hyperparameters) -> bool:
    return m.has_emoji


def _short_line_prevalence(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    return m.short_lines >= hp.short_line_min_count


def _repeated_hype_emoji(_text: str, m: Measurements, _hp: Hyperparameters) -> bool:
    return m.hype_run


def _bait_opener(_text: str, m: Measurements, _hp: Hyperparameters) -> bool:
    return m.bait_opener


def _whitespace_ratio(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    return m.non_empty_lines > hp.very_short_min_lines and m.very_short_line_ratio > hp.very_short_ratio


def _decorative_glyph_density(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    return m.decorative_glyphs >= hp.decorative_glyph_min


def _paragraph_fragmentation(_text: str, m: Measurements, hp: Hyperparameters) -> bool:
    return (
        m.block_count >= hp.fragmentation_min_blocks
        and m.single_line_block_ratio > hp.fragmentation_single_ratio
    )


@dataclass(frozen=True)
class RuleSet:
    """Ordered, closed collection of weighted rules.

    Order only affects how diagnostics are listed. ``max_score`` is derived from
    the weights so adding or removing a rule keeps scores normalized.
    """

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        if not self.rules:
            raise ValueError("RuleSet requires at least one rule")
        names = [r.name for r in self.rules]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names in RuleSet: {duplicates}")
        for rule in self.rules:
            if not isinstance(rule.weight, int) or isinstance(rule.weight, bool) or rule.weight < 1:
                raise ValueError(f"Rule {rule.name!r} must have a positive integer weight, got {rule.weight!r}")

    @property
    def max_score(self) -> int:
        return sum(r.weight for r in self.rules)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.rules]

    def __len__(self) -> int:
        return len(self.rules)


DEFAULT_RULE_SET = RuleSet(
    rules=(
        Rule("line_break_density", 1, _line_break_density, "Many line breaks"),
        Rule("deceptive_brevity", 1, _deceptive_brevity, "Short text stretched vertically"),
        Rule("emoji_presence", 1, _emoji_presence, "Contains pictographic emoji"),
        Rule("short_line_prevalence", 1, _short_line_prevalence, "Many short lines"),
        Rule("repeated_hype_emoji", 1, _repeated_hype_emoji, "Back-to-back hype emoji"),
        Rule("bait_opener", 1, _bait_opener, "Opens with a clickbait phrase"),
        Rule("whitespace_ratio", 1, _whitespace_ratio, "Mostly very short dramatic lines"),
        Rule("decorative_glyph_density", 1, _decorative_glyph_density, "Arrows, checkmarks or bullets"),
        Rule("paragraph_fragmentation", 2, _paragraph_fragmentation, "Every sentence is its own paragraph"),
    )
)

MAX_SCORE = DEFAULT_RULE_SET.max_score


# ---------------------------------------------------------------------------
# Feature vector
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Signal:
    rule: str
    weight: int
    value: int

    @property
    def fired(self) -> bool:
        return self.value > 0

    def to_payload(self) -> dict[str, object]:
        return {"rule": self.rule, "weight": self.weight, "value": self.value}


@dataclass(frozen=True)
class FeatureVector:
    """Per-rule signals for one document, plus the measurements behind them."""

    signals: tuple[Signal, ...]
    measurements: Measurements
    max_score: int

    @property
    def points(self) -> int:
        return sum(s.value for s in self.signals)

    @property
    def score(self) -> float:
        return self.points / self.max_score

    @property
    def fired(self) -> list[str]:
        return [s.rule for s in self.signals if s.fired]

    def to_payload(self) -> dict[str, object]:
        return {
            "signals": [s.to_payload() for s in self.signals],
            "points": self.points,
            "max_score": self.max_score,
            "score": self.score,
        }


def extract_features(
    text: str,
    rule_set: RuleSet | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> FeatureVector:
    """Evaluate every rule of ``rule_set`` against ``text``.

    Args:
        text: Raw document text. Empty text yields an all-zero vector.
        rule_set: Rules to evaluate. Defaults to the canonical nine-rule set.
        hyperparameters: Optional cut-off overrides.

    Returns:
        A ``FeatureVector`` with one ``Signal`` per rule, in rule-set order.
    """
    rs = rule_set or DEFAULT_RULE_SET
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    m = measure(text, hp)
    signals = tuple(
        Signal(rule=r.name, weight=r.weight, value=r.weight if r.predicate(text, m, hp) else 0)
        for r in rs.rules
    )
    return FeatureVector(signals=signals, measurements=m, max_score=rs.max_score)


def compute_score(
    text: str,
    rule_set: RuleSet | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> float:
    """Normalized style-spam score in [0, 1]."""
    return extract_features(text, rule_set, hyperparameters).score


def preview(text: str, hyperparameters: Hyperparameters | None = None) -> str:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if len(text) > hp.preview_chars:
        return text[: hp.preview_chars] + "..."
    return text
