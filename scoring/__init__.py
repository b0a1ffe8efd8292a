"""
Package quality scoring.
"""

from .evaluator import (
    AnthropicContentEvaluator, ContentEvaluator, EvaluationOutcome, EvaluationStatus,
    HeuristicEvaluator, build_evaluator, extract_prompt_text, parse_evaluation
)
from .quality_scorer import PackageSnapshot, QualityScorer, ScoreBreakdown, score_package

__all__ = [
    'AnthropicContentEvaluator',
    'ContentEvaluator',
    'EvaluationOutcome',
    'EvaluationStatus',
    'HeuristicEvaluator',
    'PackageSnapshot',
    'QualityScorer',
    'ScoreBreakdown',
    'build_evaluator',
    'extract_prompt_text',
    'parse_evaluation',
    'score_package',
]
