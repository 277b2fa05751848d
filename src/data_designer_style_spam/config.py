from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig

from data_designer_style_spam.policy import Category, PolicyConfiguration


class StyleSpamColumnConfig(SingleColumnConfig):
    """Flag rows whose text is low-substance "style spam" using surface formatting rules.

    Scores the concatenated text of ``target_columns`` with nine structural rules
    (line breaks, short lines, paragraph fragmentation, emoji, decorative glyphs,
    bait openers) and produces a score (0-1), a suppress decision and a reason code.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        threshold: Minimum score (inclusive) for ``should_suppress=True``. Defaults to 0.4.
        filter_style_spam: Whether style scoring may suppress a row.
        structural_column: Optional boolean column marking rows that match a structural
            exclusion (e.g. the post is a poll). Such rows are suppressed regardless of text.
        filter_structural: Whether ``structural_column`` may suppress a row.
        include_diagnostics: Include the measurement breakdown in output.
    """

    target_columns: list[str]
    threshold: float = Field(default=0.4, ge=0.0, le=1.0, description="Inclusive score threshold for suppression")
    filter_style_spam: bool = Field(default=True, description="Suppress rows that score as style spam")
    structural_column: str | None = Field(default=None, description="Boolean column with the structural-exclusion signal")
    filter_structural: bool = Field(default=True, description="Suppress rows flagged in structural_column")
    include_diagnostics: bool = Field(default=False, description="Include measurement breakdown in output")
    column_type: Literal["style-spam"] = "style-spam"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f6ab"

    @property
    def required_columns(self) -> list[str]:
        if self.structural_column:
            return [*self.target_columns, self.structural_column]
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []

    def policy(self) -> PolicyConfiguration:
        categories = set()
        if self.filter_style_spam:
            categories.add(Category.STYLE_SPAM)
        if self.filter_structural:
            categories.add(Category.STRUCTURAL_EXCLUSION)
        return PolicyConfiguration(threshold=self.threshold, enabled_categories=frozenset(categories))
