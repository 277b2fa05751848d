from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import data_designer.lazy_heavy_imports as lazy
from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_style_spam.config import StyleSpamColumnConfig
from data_designer_style_spam.diagnostics import Diagnostics
from data_designer_style_spam.policy import evaluate

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

_TRUTHY_STRINGS = frozenset({"true", "t", "yes", "y", "1"})


def _is_missing(value) -> bool:
    if value is None:
        return True
    missing = lazy.pd.isna(value)
    # Array-like cells (lists, arrays) give element-wise results; only scalars can be missing.
    return bool(missing) if isinstance(missing, (bool, lazy.np.bool_)) else False


def _row_text(values) -> str | None:
    parts = [str(v) for v in values if not _is_missing(v)]
    parts = [p for p in parts if p]
    if not parts:
        return None
    return "\n\n".join(parts)


def _is_flagged(value) -> bool:
    if _is_missing(value):
        return False
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return bool(value)


class StyleSpamColumnGenerator(ColumnGeneratorFullColumn[StyleSpamColumnConfig]):
    """Column generator that flags style-spam rows via structural text rules."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f6ab Scoring column {self.config.name!r} for style spam")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   threshold: {self.config.threshold}")
        if self.config.structural_column:
            logger.info(f"   structural column: {self.config.structural_column!r}")

        policy = self.config.policy()
        results = []
        for _, row in data.iterrows():
            text = _row_text(row[self.config.target_columns].values)
            structural = (
                _is_flagged(row[self.config.structural_column]) if self.config.structural_column else False
            )
            verdict = evaluate(text, policy, structural_match=structural)
            output: dict = {
                "should_suppress": verdict.should_suppress,
                "reason_code": verdict.reason_code.value,
                "style_score": round(verdict.score, 2),
                "fired_rules": verdict.explanation.fired,
            }
            if self.config.include_diagnostics:
                output["style_diagnostics"] = Diagnostics.from_verdict(verdict, policy, text).to_payload()
            results.append(output)

        suppressed = sum(1 for r in results if r["should_suppress"])
        logger.info(f"   suppressed {suppressed} of {len(results)} rows")

        data = data.copy()
        data[self.config.name] = results
        return data
