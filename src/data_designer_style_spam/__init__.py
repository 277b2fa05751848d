# SPDX-License-Identifier: Apache-2.0
"""Style-spam filter plugin for NeMo Data Designer.

Adds a ``style-spam`` column type that flags low-substance, stylistically
inflated posts (one-line paragraphs, stacked line breaks, hype emoji, bait
openers) from surface formatting alone. No topic analysis, no model calls.

Usage::

    from data_designer_style_spam import PolicyConfiguration, evaluate, explain

    verdict = evaluate(post_text, PolicyConfiguration(threshold=0.4))
    if verdict.should_suppress:
        print(explain(post_text).render())
"""

from data_designer_style_spam.config import StyleSpamColumnConfig
from data_designer_style_spam.core import (
    DEFAULT_RULE_SET,
    MAX_SCORE,
    FeatureVector,
    Hyperparameters,
    Rule,
    RuleSet,
    compute_score,
    extract_features,
)
from data_designer_style_spam.diagnostics import Diagnostics, explain
from data_designer_style_spam.policy import Category, PolicyConfiguration, ReasonCode, Verdict, evaluate

__all__ = [
    "Category",
    "DEFAULT_RULE_SET",
    "Diagnostics",
    "FeatureVector",
    "Hyperparameters",
    "MAX_SCORE",
    "PolicyConfiguration",
    "ReasonCode",
    "Rule",
    "RuleSet",
    "StyleSpamColumnConfig",
    "Verdict",
    "compute_score",
    "evaluate",
    "explain",
    "extract_features",
]
