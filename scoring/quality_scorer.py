"""
Package quality scorer.

Combines the content quality of a canonical package with its registry
signals (documentation, popularity, author standing, maintenance) into a
single score between 0 and 5.

Content quality comes from a ContentEvaluator. The remote evaluator is
optional: when it is absent, skipped, slow or failing, the heuristic
evaluator supplies the score. There are no retries.
"""

import asyncio
import logging
import math
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from core.canonical_models import CanonicalPackage, ExamplesSection
from core.config import get_settings

from .evaluator import ContentEvaluator, EvaluationStatus, HeuristicEvaluator, extract_prompt_text

logger = logging.getLogger(__name__)

MAX_SCORE = 5.0
CODE_FENCE = re.compile(r'```')


@dataclass
class PackageSnapshot:
    """A canonical package plus the registry signals scored alongside it."""
    package: CanonicalPackage
    readme: str = ""
    description: str = ""
    documentation_url: Optional[str] = None
    repository_url: Optional[str] = None
    homepage_url: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    verified: bool = False
    official: bool = False
    author_package_count: int = 0
    downloads: int = 0
    stars: int = 0
    rating_average: Optional[float] = None
    rating_count: int = 0
    version_count: int = 1
    last_published: Optional[datetime] = None
    created: Optional[datetime] = None


@dataclass
class ScoreBreakdown:
    content_quality: float = 0.0
    prompt_length: float = 0.0
    examples: float = 0.0
    documentation: float = 0.0
    description: float = 0.0
    description_quality: float = 0.0
    repository: float = 0.0
    metadata: float = 0.0
    verified_author: float = 0.0
    official: float = 0.0
    author_packages: float = 0.0
    downloads: float = 0.0
    stars: float = 0.0
    rating: float = 0.0
    recency: float = 0.0
    version_count: float = 0.0

    @property
    def total(self) -> float:
        return round(max(0.0, min(MAX_SCORE, sum(asdict(self).values()))), 2)


def prompt_length_score(snapshot: PackageSnapshot) -> float:
    length = len(extract_prompt_text(snapshot.package)) + len(snapshot.readme)
    for threshold, points in ((5000, 0.3), (3000, 0.25), (2000, 0.2),
                              (1000, 0.15), (500, 0.1), (200, 0.05)):
        if length >= threshold:
            return points
    return 0.0


def examples_score(snapshot: PackageSnapshot) -> float:
    count = sum(len(section.examples) for section in snapshot.package.sections
                if isinstance(section, ExamplesSection))
    if count >= 5:
        return 0.2
    if count >= 3:
        return 0.15
    if count >= 1:
        return 0.1
    if CODE_FENCE.search(snapshot.readme):
        return 0.1
    return 0.0


def description_quality_score(description: str) -> float:
    length = len(description.strip())
    if 100 <= length <= 300:
        return 0.1
    if 50 <= length < 100 or 300 < length <= 500:
        return 0.07
    if length > 20:
        return 0.03
    return 0.0


def metadata_score(snapshot: PackageSnapshot) -> float:
    score = 0.0
    if len(snapshot.tags) >= 3:
        score += 0.02
    elif snapshot.tags:
        score += 0.01
    if len(snapshot.keywords) >= 3:
        score += 0.02
    elif snapshot.keywords:
        score += 0.01
    if snapshot.homepage_url:
        score += 0.01
    return min(0.05, score)


def author_packages_score(count: int) -> float:
    if count < 2:
        return 0.0
    if count < 5:
        return 0.15
    return 0.3


def downloads_score(downloads: int) -> float:
    """Log-scaled: 500 downloads reach the 0.4 ceiling."""
    if downloads <= 0:
        return 0.0
    return min(0.4, 0.4 * math.log10(downloads + 1) / math.log10(501))


def stars_score(stars: int) -> float:
    if stars <= 0:
        return 0.0
    if stars < 5:
        return 0.1
    if stars < 20:
        return 0.2
    return 0.3


def rating_score(average: Optional[float], count: int) -> float:
    if average is None or count < 3:
        return 0.0
    return max(0.0, min(0.3, (average / 5) * 0.3))


def recency_score(last_published: Optional[datetime], now: Optional[datetime] = None) -> float:
    if last_published is None:
        return 0.0
    now = now or datetime.now(timezone.utc)
    if last_published.tzinfo is None:
        last_published = last_published.replace(tzinfo=timezone.utc)
    days = (now - last_published).days
    if days <= 30:
        return 0.3
    if days <= 90:
        return 0.2
    if days <= 180:
        return 0.1
    return 0.05


def version_count_score(count: int) -> float:
    if count >= 3:
        return 0.2
    if count == 2:
        return 0.1
    return 0.0


class QualityScorer:
    """
    Score packages from content and registry signals.

    Args:
        evaluator: Optional remote content evaluator; the heuristic is used
            when it is None or does not produce a score
        timeout: Seconds to wait for the evaluator
        min_evaluation_length: Prompt text shorter than this never reaches
            the evaluator
    """

    def __init__(self, evaluator: Optional[ContentEvaluator] = None,
                 timeout: Optional[float] = None,
                 min_evaluation_length: Optional[int] = None):
        settings = get_settings()
        self.evaluator = evaluator
        self.timeout = timeout if timeout is not None else settings.evaluation_timeout
        self.min_evaluation_length = (min_evaluation_length if min_evaluation_length is not None
                                      else settings.min_evaluation_length)
        self.heuristic = HeuristicEvaluator()

    async def content_quality(self, pkg: CanonicalPackage) -> float:
        fallback = self.heuristic.score(pkg)
        if self.evaluator is None:
            return fallback
        if len(extract_prompt_text(pkg)) < self.min_evaluation_length:
            logger.debug("Skipping evaluation of %s: content too short", pkg.id)
            return fallback

        try:
            outcome = await asyncio.wait_for(self.evaluator.evaluate(pkg), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.info("Content evaluation of %s timed out after %ss", pkg.id, self.timeout)
            return fallback
        except Exception as e:
            logger.warning("Content evaluation of %s raised %s; using heuristic", pkg.id, e)
            return fallback

        if outcome.status != EvaluationStatus.OK or outcome.score is None:
            logger.info("Content evaluation of %s %s; using heuristic", pkg.id, outcome.status.value)
            return fallback
        return outcome.score

    async def breakdown(self, snapshot: PackageSnapshot,
                        now: Optional[datetime] = None) -> ScoreBreakdown:
        description = snapshot.description or snapshot.package.description
        return ScoreBreakdown(
            content_quality=await self.content_quality(snapshot.package),
            prompt_length=prompt_length_score(snapshot),
            examples=examples_score(snapshot),
            documentation=0.2 if snapshot.documentation_url else 0.0,
            description=0.1 if len(description.strip()) > 20 else 0.0,
            description_quality=description_quality_score(description),
            repository=0.05 if snapshot.repository_url else 0.0,
            metadata=metadata_score(snapshot),
            verified_author=0.5 if snapshot.verified else 0.0,
            official=0.7 if snapshot.official else 0.0,
            author_packages=author_packages_score(snapshot.author_package_count),
            downloads=downloads_score(snapshot.downloads),
            stars=stars_score(snapshot.stars),
            rating=rating_score(snapshot.rating_average, snapshot.rating_count),
            recency=recency_score(snapshot.last_published, now),
            version_count=version_count_score(snapshot.version_count),
        )

    async def score(self, snapshot: PackageSnapshot) -> float:
        return (await self.breakdown(snapshot)).total

    def score_sync(self, snapshot: PackageSnapshot) -> float:
        return asyncio.run(self.score(snapshot))


def score_package(snapshot: PackageSnapshot, evaluator: Optional[ContentEvaluator] = None,
                  timeout: Optional[float] = None) -> float:
    """Score one package between 0 and 5 (two decimals)."""
    return QualityScorer(evaluator, timeout=timeout).score_sync(snapshot)
