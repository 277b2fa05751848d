import pytest
from pydantic import ValidationError

from data_designer_style_spam import Category, StyleSpamColumnConfig


class TestStyleSpamColumnConfig:
    def test_defaults(self):
        config = StyleSpamColumnConfig(name="style_check", target_columns=["post"])
        assert config.column_type == "style-spam"
        assert config.threshold == 0.4
        assert config.required_columns == ["post"]
        assert config.side_effect_columns == []

    def test_structural_column_is_required(self):
        config = StyleSpamColumnConfig(name="style_check", target_columns=["post"], structural_column="is_poll")
        assert config.required_columns == ["post", "is_poll"]

    def test_policy(self):
        config = StyleSpamColumnConfig(
            name="style_check", target_columns=["post"], threshold=0.5, filter_structural=False
        )
        policy = config.policy()
        assert policy.threshold == 0.5
        assert policy.enabled_categories == frozenset({Category.STYLE_SPAM})

    def test_rejects_bad_threshold(self):
        with pytest.raises(ValidationError):
            StyleSpamColumnConfig(name="style_check", target_columns=["post"], threshold=1.2)
