"""
Content evaluators for package quality scoring.

An evaluator rates the instructional content of a package in [0, 1]. Two
implementations share the ContentEvaluator interface:

- HeuristicEvaluator: synchronous, offline, based on section count, section
  variety, content length and whether instructions or rules are present
- AnthropicContentEvaluator: one non-blocking call to the Anthropic
  Messages API through httpx

Evaluators never raise. They return an EvaluationOutcome whose status says
whether a score was produced (ok), the call ran out of time (timed_out),
failed (failed) or was not attempted (skipped). The caller picks the
fallback.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import httpx

from core.canonical_models import (
    CanonicalPackage, ContextSection, CustomSection, ExamplesSection,
    InstructionsSection, PersonaSection, RulesSection, SectionType
)
from core.config import ConverterSettings
from core.errors import EvaluationUnavailable

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_SCORE = 0.5
MAX_PROMPT_CHARS = 8000

EVALUATION_PROMPT = """Rate the quality of the following AI coding assistant prompt on a scale from 0.0 to 1.0.

Consider clarity, specificity, structure, actionable guidance and useful examples.

Respond in exactly this format:
SCORE: [decimal score between 0.0 and 1.0]
REASONING: [2-3 sentences explaining the score]
STRENGTHS: [comma-separated list of 2-3 strengths]
WEAKNESSES: [comma-separated list of 2-3 weaknesses, or "none"]

Prompt:
{content}"""


class EvaluationStatus(str, Enum):
    OK = "ok"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EvaluationOutcome:
    """Result of one evaluation. `score` is set only when status is OK."""
    status: EvaluationStatus
    score: Optional[float] = None
    reasoning: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return self.status == EvaluationStatus.OK

    @classmethod
    def ok(cls, score: float, reasoning: str = "", strengths: Optional[List[str]] = None,
           weaknesses: Optional[List[str]] = None) -> 'EvaluationOutcome':
        return cls(EvaluationStatus.OK, clamp_score(score), reasoning,
                   list(strengths or []), list(weaknesses or []))

    @classmethod
    def timed_out(cls) -> 'EvaluationOutcome':
        return cls(EvaluationStatus.TIMED_OUT, reasoning="evaluation timed out")

    @classmethod
    def failed(cls, reason: str) -> 'EvaluationOutcome':
        return cls(EvaluationStatus.FAILED, reasoning=reason)

    @classmethod
    def skipped(cls, reason: str) -> 'EvaluationOutcome':
        return cls(EvaluationStatus.SKIPPED, reasoning=reason)


def clamp_score(score: float) -> float:
    return max(0.0, min(1.0, float(score)))


def extract_prompt_text(pkg: CanonicalPackage) -> str:
    """Collect the instructional text of a package for evaluation."""
    parts: List[str] = []
    metadata = pkg.metadata_section()
    if metadata is not None:
        if metadata.title:
            parts.append(f"# {metadata.title}")
        if metadata.description:
            parts.append(metadata.description)

    for section in pkg.sections:
        if isinstance(section, InstructionsSection):
            parts.append(f"## {section.title}\n{section.content}" if section.title else section.content)
        elif isinstance(section, RulesSection):
            rules = '\n'.join(f"- {rule.content}" for rule in section.items)
            parts.append(f"## {section.title}\n{rules}")
        elif isinstance(section, ExamplesSection):
            for example in section.examples:
                parts.append(f"{example.description}\n```\n{example.code}\n```".strip())
        elif isinstance(section, PersonaSection):
            parts.append(f"Role: {section.role}")
        elif isinstance(section, ContextSection):
            parts.append(section.content)
        elif isinstance(section, CustomSection) and not section.executable:
            parts.append(section.content)
    return '\n\n'.join(part for part in parts if part)


def parse_evaluation(text: str) -> Tuple[float, str, List[str], List[str]]:
    """
    Parse a SCORE/REASONING/STRENGTHS/WEAKNESSES response.

    A missing or unreadable score falls back to 0.5; scores are clamped to
    [0, 1].
    """
    score_match = re.search(r'SCORE:\s*([0-9.]+)', text, re.IGNORECASE)
    try:
        score = float(score_match.group(1)) if score_match else DEFAULT_SCORE
    except ValueError:
        score = DEFAULT_SCORE

    reasoning = re.search(r'REASONING:\s*(.+?)(?=STRENGTHS:|$)', text, re.IGNORECASE | re.DOTALL)
    strengths = re.search(r'STRENGTHS:\s*(.+?)(?=WEAKNESSES:|$)', text, re.IGNORECASE | re.DOTALL)
    weaknesses = re.search(r'WEAKNESSES:\s*(.+?)$', text, re.IGNORECASE | re.DOTALL)

    def as_list(match) -> List[str]:
        if not match:
            return []
        items = [item.strip() for item in match.group(1).split(',')]
        return [item for item in items if item and item.lower() != 'none']

    return (
        clamp_score(score),
        reasoning.group(1).strip() if reasoning else "",
        as_list(strengths),
        as_list(weaknesses),
    )


class ContentEvaluator(ABC):
    """Rates package content in [0, 1]."""

    @abstractmethod
    async def evaluate(self, pkg: CanonicalPackage) -> EvaluationOutcome:
        pass


class HeuristicEvaluator(ContentEvaluator):
    """Offline scoring from the shape of the section list."""

    def score(self, pkg: CanonicalPackage) -> float:
        sections = pkg.sections
        if not sections:
            return 0.0

        score = 0.0
        if len(sections) >= 5:
            score += 0.3
        elif len(sections) >= 3:
            score += 0.2
        else:
            score += 0.1

        types = {section.type for section in sections}
        if len(types) >= 4:
            score += 0.2
        elif len(types) >= 2:
            score += 0.1

        length = len(extract_prompt_text(pkg))
        if length >= 2000:
            score += 0.3
        elif length >= 1000:
            score += 0.2
        elif length >= 500:
            score += 0.1
        elif length >= 200:
            score += 0.05

        if SectionType.INSTRUCTIONS in types or SectionType.RULES in types:
            score += 0.2

        return min(1.0, score)

    async def evaluate(self, pkg: CanonicalPackage) -> EvaluationOutcome:
        return EvaluationOutcome.ok(self.score(pkg), reasoning="heuristic")


class AnthropicContentEvaluator(ContentEvaluator):
    """
    Evaluate content with the Anthropic Messages API.

    Args:
        api_key: Anthropic API key
        base_url: API base URL
        model: Model name
        max_tokens: Max tokens for the response
        min_length: Prompt text shorter than this is not sent
        client: Optional shared httpx.AsyncClient (tests pass one backed by
            httpx.MockTransport)
    """

    def __init__(self, api_key: str, base_url: str = "https://api.anthropic.com",
                 model: str = "claude-3-5-haiku-latest", max_tokens: int = 500,
                 min_length: int = 50, client: Optional[httpx.AsyncClient] = None):
        if not api_key:
            raise ValueError("Anthropic API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.max_tokens = max_tokens
        self.min_length = min_length
        self._client = client

    async def evaluate(self, pkg: CanonicalPackage) -> EvaluationOutcome:
        text = extract_prompt_text(pkg)
        if len(text) < self.min_length:
            return EvaluationOutcome.skipped(
                f"content is {len(text)} characters; minimum is {self.min_length}"
            )
        try:
            response_text = await self._request(text[:MAX_PROMPT_CHARS])
        except httpx.TimeoutException:
            return EvaluationOutcome.timed_out()
        except (httpx.HTTPError, EvaluationUnavailable) as e:
            logger.warning("Content evaluation failed: %s", e)
            return EvaluationOutcome.failed(str(e))

        score, reasoning, strengths, weaknesses = parse_evaluation(response_text)
        return EvaluationOutcome.ok(score, reasoning, strengths, weaknesses)

    async def _request(self, text: str) -> str:
        payload = {
            'model': self.model,
            'max_tokens': self.max_tokens,
            'temperature': 0,
            'messages': [{'role': 'user', 'content': EVALUATION_PROMPT.format(content=text)}],
        }
        headers = {
            'x-api-key': self.api_key,
            'anthropic-version': ANTHROPIC_VERSION,
            'content-type': 'application/json',
        }
        url = f"{self.base_url}/v1/messages"

        if self._client is not None:
            response = await self._client.post(url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, json=payload, headers=headers)

        if response.status_code != 200:
            raise EvaluationUnavailable(f"Evaluator returned HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise EvaluationUnavailable(f"Evaluator returned invalid JSON: {e}")

        if not isinstance(data, dict):
            raise EvaluationUnavailable("Evaluator response is not a JSON object")
        blocks = data.get('content')
        if not isinstance(blocks, list):
            blocks = []
        text_blocks = []
        for block in blocks:
            if not isinstance(block, dict) or block.get('type') != 'text':
                continue
            if not isinstance(block.get('text'), str):
                raise EvaluationUnavailable("Evaluator returned a text block without text")
            text_blocks.append(block['text'])
        if not text_blocks:
            raise EvaluationUnavailable("Evaluator response has no text content")
        return ''.join(text_blocks)


def build_evaluator(settings: ConverterSettings,
                    client: Optional[httpx.AsyncClient] = None) -> Optional[ContentEvaluator]:
    """
    Create the remote evaluator when settings enable it.

    Returns:
        AnthropicContentEvaluator, or None when evaluation is disabled or no
        API key is configured
    """
    if not settings.evaluation_enabled:
        return None
    if not settings.anthropic_api_key:
        logger.warning("Content evaluation enabled but no API key configured; using heuristic")
        return None
    return AnthropicContentEvaluator(
        api_key=settings.anthropic_api_key,
        base_url=settings.evaluator_base_url,
        model=settings.evaluator_model,
        max_tokens=settings.evaluator_max_tokens,
        min_length=settings.min_evaluation_length,
        client=client,
    )
