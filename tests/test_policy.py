import pytest
from pydantic import ValidationError

from data_designer_style_spam.policy import (
    DEFAULT_POLICY,
    Category,
    PolicyConfiguration,
    ReasonCode,
    evaluate,
)
from samples import (
    CONTINUOUS_PROSE,
    CORPUS,
    FRAGMENTED,
    LEGIT_PROSE,
    ONE_LINER_SPAM,
    PROFESSIONAL_POST,
    SHORT_TWO_LINES,
    SIX_PARAGRAPHS,
)

STYLE_ONLY = PolicyConfiguration(enabled_categories={Category.STYLE_SPAM})
STRUCTURAL_ONLY = PolicyConfiguration(enabled_categories={Category.STRUCTURAL_EXCLUSION})
NOTHING_ENABLED = PolicyConfiguration(enabled_categories=frozenset())
THRESHOLDS = [i / 10 for i in range(11)]


class TestPolicyConfiguration:
    def test_defaults(self):
        assert DEFAULT_POLICY.threshold == 0.4
        assert DEFAULT_POLICY.enabled_categories == frozenset(Category)

    def test_accepts_boundaries(self):
        assert PolicyConfiguration(threshold=0.0).threshold == 0.0
        assert PolicyConfiguration(threshold=1.0).threshold == 1.0

    @pytest.mark.parametrize("threshold", [-0.01, 1.01, 5])
    def test_rejects_out_of_range_threshold(self, threshold):
        with pytest.raises(ValidationError):
            PolicyConfiguration(threshold=threshold)

    def test_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            PolicyConfiguration(enabled_categories={"style_spam", "topic_filter"})

    def test_accepts_category_values(self):
        config = PolicyConfiguration(enabled_categories={"style_spam"})
        assert config.enabled_categories == frozenset({Category.STYLE_SPAM})

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            PolicyConfiguration(threshold=0.5, max_posts=10)

    def test_is_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_POLICY.threshold = 0.9

    def test_from_settings_defaults_to_all_enabled(self):
        assert PolicyConfiguration.from_settings({}) == DEFAULT_POLICY

    def test_from_settings_toggles(self):
        config = PolicyConfiguration.from_settings({"filterSpam": False, "filterPolls": True})
        assert config.enabled_categories == frozenset({Category.STRUCTURAL_EXCLUSION})
        config = PolicyConfiguration.from_settings({"filterSpam": True, "filterPolls": False, "threshold": 0.5})
        assert config.enabled_categories == frozenset({Category.STYLE_SPAM})
        assert config.threshold == 0.5

    def test_from_settings_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            PolicyConfiguration.from_settings({"filterSpam": True, "darkMode": True})

    def test_from_settings_rejects_bad_threshold(self):
        with pytest.raises(ValidationError):
            PolicyConfiguration.from_settings({"threshold": 1.5})


class TestEvaluate:
    def test_short_text_not_suppressed(self):
        verdict = evaluate(SHORT_TWO_LINES, DEFAULT_POLICY)
        assert verdict.score == pytest.approx(0.1)
        assert verdict.should_suppress is False
        assert verdict.reason_code is ReasonCode.NONE

    def test_fragmented_text_suppressed(self):
        verdict = evaluate(SIX_PARAGRAPHS, DEFAULT_POLICY)
        assert verdict.should_suppress is True
        assert verdict.reason_code is ReasonCode.STYLE_SPAM
        assert "paragraph_fragmentation" in verdict.explanation.fired

    def test_threshold_is_inclusive(self):
        verdict = evaluate(FRAGMENTED, PolicyConfiguration(threshold=0.4))
        assert verdict.score == pytest.approx(0.4)
        assert verdict.should_suppress is True

    def test_prose_not_suppressed(self):
        for text in (CONTINUOUS_PROSE, LEGIT_PROSE, PROFESSIONAL_POST):
            assert evaluate(text, DEFAULT_POLICY).should_suppress is False

    def test_one_liner_spam_suppressed(self):
        assert evaluate(ONE_LINER_SPAM).reason_code is ReasonCode.STYLE_SPAM

    def test_empty_text_never_suppressed(self):
        verdict = evaluate("", PolicyConfiguration(threshold=0.0))
        assert verdict.score == 0
        assert verdict.should_suppress is False
        assert verdict.reason_code is ReasonCode.NONE

    def test_missing_text_never_suppressed(self):
        verdict = evaluate(None, PolicyConfiguration(threshold=0.0))
        assert verdict.should_suppress is False
        assert verdict.explanation.fired == []

    def test_whitespace_only_text_never_suppressed(self):
        verdict = evaluate("   \n\n\n\n  ", PolicyConfiguration(threshold=0.0))
        assert verdict.should_suppress is False

    def test_structural_exclusion_wins(self):
        verdict = evaluate(CONTINUOUS_PROSE, DEFAULT_POLICY, structural_match=True)
        assert verdict.score == 0
        assert verdict.should_suppress is True
        assert verdict.reason_code is ReasonCode.STRUCTURAL_EXCLUSION

    def test_structural_exclusion_without_text(self):
        verdict = evaluate(None, DEFAULT_POLICY, structural_match=True)
        assert verdict.reason_code is ReasonCode.STRUCTURAL_EXCLUSION

    def test_structural_exclusion_disabled(self):
        verdict = evaluate(CONTINUOUS_PROSE, STYLE_ONLY, structural_match=True)
        assert verdict.should_suppress is False
        assert verdict.reason_code is ReasonCode.NONE

    def test_style_spam_disabled(self):
        for text in CORPUS:
            for threshold in THRESHOLDS:
                config = PolicyConfiguration(
                    threshold=threshold, enabled_categories={Category.STRUCTURAL_EXCLUSION}
                )
                verdict = evaluate(text, config)
                assert verdict.reason_code is not ReasonCode.STYLE_SPAM
                assert verdict.should_suppress is False

    def test_nothing_enabled(self):
        verdict = evaluate(ONE_LINER_SPAM, NOTHING_ENABLED, structural_match=True)
        assert verdict.should_suppress is False

    def test_score_reported_even_when_style_disabled(self):
        verdict = evaluate(ONE_LINER_SPAM, STRUCTURAL_ONLY)
        assert verdict.score == pytest.approx(0.6)


class TestProperties:
    def test_idempotent(self):
        for text in CORPUS:
            assert evaluate(text, DEFAULT_POLICY) == evaluate(text, DEFAULT_POLICY)

    def test_monotonic_in_threshold(self):
        for text in CORPUS:
            decisions = [evaluate(text, PolicyConfiguration(threshold=t)).should_suppress for t in THRESHOLDS]
            # Once kept, raising the threshold never suppresses again.
            assert decisions == sorted(decisions, reverse=True)

    def test_structural_toggle_does_not_change_style_branch(self):
        for text in CORPUS:
            for threshold in THRESHOLDS:
                both = PolicyConfiguration(threshold=threshold)
                style = PolicyConfiguration(threshold=threshold, enabled_categories={Category.STYLE_SPAM})
                assert evaluate(text, both) == evaluate(text, style)

    def test_style_toggle_does_not_change_structural_branch(self):
        for text in CORPUS:
            both = evaluate(text, DEFAULT_POLICY, structural_match=True)
            structural = evaluate(text, STRUCTURAL_ONLY, structural_match=True)
            assert both.reason_code is structural.reason_code is ReasonCode.STRUCTURAL_EXCLUSION
            assert both.should_suppress is structural.should_suppress is True

    def test_payload(self):
        payload = evaluate(SIX_PARAGRAPHS).to_payload()
        assert payload["should_suppress"] is True
        assert payload["reason_code"] == "STYLE_SPAM"
        assert payload["explanation"]["max_score"] == 10
        assert payload["explanation"]["points"] == 5
        assert "paragraph_fragmentation" in payload["fired_rules"]
