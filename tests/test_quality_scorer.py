"""
Unit tests for the package quality scorer.

Tests cover:
- Individual registry signal scores
- Score bounds
- Heuristic fallback when the content evaluator is slow, failing or skipped
"""

import asyncio
import httpx
import pytest
from datetime import datetime, timedelta, timezone

from core.canonical_models import (
    CanonicalPackage, Example, ExamplesSection, InstructionsSection, MetadataSection
)
from scoring.evaluator import (
    AnthropicContentEvaluator, ContentEvaluator, EvaluationOutcome, HeuristicEvaluator
)
from scoring.quality_scorer import (
    PackageSnapshot, QualityScorer, ScoreBreakdown, author_packages_score,
    description_quality_score, downloads_score, examples_score, rating_score,
    recency_score, score_package, stars_score, version_count_score
)

NOW = datetime(2026, 1, 15, tzinfo=timezone.utc)
LONG_TEXT = 'Explain each change, reference the failing test, and keep commits small. ' * 3


def make_package(content=LONG_TEXT):
    return CanonicalPackage(id='p', name='P', description='Commit message conventions', sections=[
        MetadataSection(title='P'),
        InstructionsSection(content=content),
    ])


class FixedEvaluator(ContentEvaluator):
    """Returns a preset outcome and records how often it was asked."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = 0

    async def evaluate(self, pkg):
        self.calls += 1
        return self.outcome


class SlowEvaluator(ContentEvaluator):

    async def evaluate(self, pkg):
        await asyncio.sleep(5)
        return EvaluationOutcome.ok(1.0)


def content_quality(scorer, pkg):
    return asyncio.run(scorer.content_quality(pkg))


class TestSignalScores:

    @pytest.mark.parametrize('downloads, expected', [
        (0, 0.0), (-3, 0.0), (500, 0.4), (100000, 0.4),
    ])
    def test_downloads(self, downloads, expected):
        assert downloads_score(downloads) == pytest.approx(expected)

    def test_downloads_monotonic(self):
        values = [downloads_score(d) for d in (1, 10, 50, 200, 499)]
        assert values == sorted(values)
        assert all(0 < value < 0.4 for value in values)

    @pytest.mark.parametrize('count, expected', [(0, 0.0), (1, 0.0), (2, 0.15), (7, 0.3)])
    def test_author_packages(self, count, expected):
        assert author_packages_score(count) == expected

    @pytest.mark.parametrize('stars, expected', [(0, 0.0), (3, 0.1), (10, 0.2), (50, 0.3)])
    def test_stars(self, stars, expected):
        assert stars_score(stars) == expected

    def test_rating_needs_three_votes(self):
        assert rating_score(5.0, 2) == 0.0
        assert rating_score(None, 10) == 0.0
        assert rating_score(5.0, 3) == pytest.approx(0.3)
        assert rating_score(2.5, 10) == pytest.approx(0.15)

    @pytest.mark.parametrize('age_days, expected', [
        (5, 0.3), (60, 0.2), (120, 0.1), (400, 0.05),
    ])
    def test_recency(self, age_days, expected):
        assert recency_score(NOW - timedelta(days=age_days), now=NOW) == expected

    def test_recency_naive_datetime_and_missing(self):
        assert recency_score(datetime(2026, 1, 10), now=NOW) == 0.3
        assert recency_score(None, now=NOW) == 0.0

    @pytest.mark.parametrize('count, expected', [(1, 0.0), (2, 0.1), (5, 0.2)])
    def test_version_count(self, count, expected):
        assert version_count_score(count) == expected

    @pytest.mark.parametrize('length, expected', [(10, 0.0), (30, 0.03), (80, 0.07), (200, 0.1)])
    def test_description_quality(self, length, expected):
        assert description_quality_score('d' * length) == expected

    def test_examples_from_sections_or_readme(self):
        pkg = make_package()
        assert examples_score(PackageSnapshot(package=pkg)) == 0.0
        assert examples_score(PackageSnapshot(package=pkg, readme="```sh\nmake\n```")) == 0.1
        pkg.sections.append(ExamplesSection(examples=[Example(code=str(i)) for i in range(3)]))
        assert examples_score(PackageSnapshot(package=pkg)) == 0.15


class TestScoreBounds:

    def test_total_clamped(self):
        breakdown = ScoreBreakdown(content_quality=1.0, verified_author=0.5, official=0.7,
                                   downloads=0.4, stars=0.3, rating=0.3, recency=0.3,
                                   author_packages=0.3, version_count=0.2, prompt_length=0.3,
                                   examples=0.2, documentation=0.2, description=0.1,
                                   description_quality=0.1, repository=0.05, metadata=0.05)
        assert breakdown.total == 5.0
        assert ScoreBreakdown(content_quality=-1.0).total == 0.0

    def test_bare_package_scores_low(self):
        snapshot = PackageSnapshot(package=CanonicalPackage(id='e', name='e'))
        score = score_package(snapshot)
        assert score == 0.0

    def test_rich_snapshot_within_bounds(self):
        snapshot = PackageSnapshot(
            package=make_package(),
            readme='x' * 6000,
            documentation_url='https://docs.example.org',
            repository_url='https://git.example.org/p',
            homepage_url='https://example.org',
            keywords=['git', 'commits', 'style'],
            tags=['git'],
            verified=True,
            official=True,
            author_package_count=12,
            downloads=10000,
            stars=40,
            rating_average=4.5,
            rating_count=20,
            version_count=4,
            last_published=datetime.now(timezone.utc),
        )
        score = QualityScorer(timeout=1.0).score_sync(snapshot)
        assert 3.0 < score <= 5.0


class TestContentQuality:
    """Evaluator results and fallbacks."""

    def test_no_evaluator_uses_heuristic(self):
        pkg = make_package()
        scorer = QualityScorer(timeout=1.0)
        assert content_quality(scorer, pkg) == pytest.approx(HeuristicEvaluator().score(pkg))

    def test_evaluator_score_used(self):
        evaluator = FixedEvaluator(EvaluationOutcome.ok(0.9))
        scorer = QualityScorer(evaluator, timeout=1.0, min_evaluation_length=10)
        assert content_quality(scorer, make_package()) == pytest.approx(0.9)
        assert evaluator.calls == 1

    @pytest.mark.parametrize('outcome', [
        EvaluationOutcome.failed('HTTP 500'),
        EvaluationOutcome.timed_out(),
        EvaluationOutcome.skipped('too short'),
    ])
    def test_unusable_outcome_falls_back(self, outcome):
        pkg = make_package()
        scorer = QualityScorer(FixedEvaluator(outcome), timeout=1.0, min_evaluation_length=10)
        assert content_quality(scorer, pkg) == pytest.approx(HeuristicEvaluator().score(pkg))

    def test_timeout_falls_back(self):
        pkg = make_package()
        scorer = QualityScorer(SlowEvaluator(), timeout=0.05, min_evaluation_length=10)
        assert content_quality(scorer, pkg) == pytest.approx(HeuristicEvaluator().score(pkg))

    def test_short_content_never_evaluated(self):
        evaluator = FixedEvaluator(EvaluationOutcome.ok(1.0))
        scorer = QualityScorer(evaluator, timeout=1.0, min_evaluation_length=1000)
        content_quality(scorer, make_package('Short.'))
        assert evaluator.calls == 0

    def test_evaluator_exception_falls_back(self):
        class BrokenEvaluator(ContentEvaluator):
            async def evaluate(self, pkg):
                raise RuntimeError("unexpected response shape")

        pkg = make_package()
        scorer = QualityScorer(BrokenEvaluator(), timeout=1.0, min_evaluation_length=10)
        assert content_quality(scorer, pkg) == pytest.approx(HeuristicEvaluator().score(pkg))

    @pytest.mark.parametrize('body', [
        [],
        {'content': [{'type': 'text', 'text': None}]},
    ])
    def test_malformed_evaluator_reply_still_scores(self, body):
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=body)))
        evaluator = AnthropicContentEvaluator(api_key='k', client=client, min_length=10)
        snapshot = PackageSnapshot(package=make_package())

        score = score_package(snapshot, evaluator=evaluator, timeout=1.0)
        assert score == score_package(snapshot, timeout=1.0)
