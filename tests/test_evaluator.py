"""
Unit tests for content evaluators.

The remote evaluator is exercised against httpx.MockTransport; no network
access is needed.
"""

import asyncio
import json
import httpx
import pytest

from core.canonical_models import (
    CanonicalPackage, CustomSection, InstructionsSection, MetadataSection, Rule, RulesSection
)
from core.config import ConverterSettings
from scoring.evaluator import (
    AnthropicContentEvaluator, EvaluationStatus, HeuristicEvaluator, build_evaluator,
    extract_prompt_text, parse_evaluation
)

RESPONSE_TEXT = """SCORE: 0.82
REASONING: Clear structure with concrete rules.
STRENGTHS: specific, well organized
WEAKNESSES: none"""


def make_package(content='Always write tests for new behaviour and keep functions small.'):
    return CanonicalPackage(id='p', name='P', sections=[
        MetadataSection(title='P'),
        InstructionsSection(content=content),
    ])


def evaluate_with(handler, pkg=None, **kwargs):
    """Run the remote evaluator against a mocked Messages endpoint."""
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            evaluator = AnthropicContentEvaluator(api_key='test-key', client=client, **kwargs)
            return await evaluator.evaluate(pkg or make_package())
    return asyncio.run(run())


class TestParseEvaluation:

    def test_full_response(self):
        score, reasoning, strengths, weaknesses = parse_evaluation(RESPONSE_TEXT)
        assert score == pytest.approx(0.82)
        assert reasoning == 'Clear structure with concrete rules.'
        assert strengths == ['specific', 'well organized']
        assert weaknesses == []

    def test_missing_score_defaults(self):
        score, reasoning, _, _ = parse_evaluation("I liked it.")
        assert score == 0.5
        assert reasoning == ''

    def test_score_clamped(self):
        assert parse_evaluation("SCORE: 7")[0] == 1.0


class TestHeuristicEvaluator:

    def test_empty_package(self):
        assert HeuristicEvaluator().score(CanonicalPackage(id='e', name='e')) == 0.0

    def test_small_package(self):
        # 2 sections, 2 types, short text, has instructions
        assert HeuristicEvaluator().score(make_package()) == pytest.approx(0.4)

    def test_rich_package_capped(self):
        pkg = make_package('x' * 2500)
        pkg.sections += [
            RulesSection(items=[Rule('a')]),
            CustomSection(content='c', dialect='cursor'),
            InstructionsSection(content='more', title='More'),
        ]
        assert HeuristicEvaluator().score(pkg) == 1.0

    def test_evaluate_is_ok(self):
        outcome = asyncio.run(HeuristicEvaluator().evaluate(make_package()))
        assert outcome.is_ok
        assert outcome.score == pytest.approx(0.4)


class TestExtractPromptText:

    def test_executable_sections_excluded(self):
        pkg = make_package('Body')
        pkg.sections.append(CustomSection(content='secret', dialect='kiro-agent', executable=True))
        text = extract_prompt_text(pkg)
        assert text.startswith('# P')
        assert 'Body' in text
        assert 'secret' not in text


class TestAnthropicContentEvaluator:

    def test_requires_api_key(self):
        with pytest.raises(ValueError, match="API key"):
            AnthropicContentEvaluator(api_key='')

    def test_ok(self):
        seen = {}

        def handler(request):
            seen['url'] = str(request.url)
            seen['headers'] = request.headers
            seen['body'] = json.loads(request.content)
            return httpx.Response(200, json={'content': [{'type': 'text', 'text': RESPONSE_TEXT}]})

        outcome = evaluate_with(handler, base_url='https://evaluator.test/')
        assert outcome.status == EvaluationStatus.OK
        assert outcome.score == pytest.approx(0.82)
        assert outcome.strengths == ['specific', 'well organized']
        assert seen['url'] == 'https://evaluator.test/v1/messages'
        assert seen['headers']['x-api-key'] == 'test-key'
        assert seen['headers']['anthropic-version'] == '2023-06-01'
        assert seen['body']['temperature'] == 0
        assert 'Always write tests' in seen['body']['messages'][0]['content']

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        outcome = evaluate_with(handler)
        assert outcome.status == EvaluationStatus.TIMED_OUT
        assert outcome.score is None

    def test_server_error(self):
        outcome = evaluate_with(lambda request: httpx.Response(500, text='overloaded'))
        assert outcome.status == EvaluationStatus.FAILED
        assert 'HTTP 500' in outcome.reasoning

    def test_response_without_text(self):
        outcome = evaluate_with(lambda request: httpx.Response(200, json={'content': []}))
        assert outcome.status == EvaluationStatus.FAILED

    @pytest.mark.parametrize('body', [
        [],
        {'content': [{'type': 'text', 'text': None}]},
        {'content': 'SCORE: 0.9'},
    ])
    def test_malformed_body_fails(self, body):
        outcome = evaluate_with(lambda request: httpx.Response(200, json=body))
        assert outcome.status == EvaluationStatus.FAILED
        assert outcome.score is None

    def test_short_content_skipped(self):
        def handler(request):
            raise AssertionError("short content must not be sent")

        outcome = evaluate_with(handler, pkg=make_package('Hi'), min_length=500)
        assert outcome.status == EvaluationStatus.SKIPPED


class TestBuildEvaluator:

    def test_disabled(self):
        settings = ConverterSettings(evaluation_enabled=False, anthropic_api_key='k')
        assert build_evaluator(settings) is None

    def test_enabled_without_key(self):
        settings = ConverterSettings(evaluation_enabled=True, anthropic_api_key=None)
        assert build_evaluator(settings) is None

    def test_enabled(self):
        settings = ConverterSettings(evaluation_enabled=True, anthropic_api_key='k',
                                     evaluator_model='claude-test', min_evaluation_length=10)
        evaluator = build_evaluator(settings)
        assert isinstance(evaluator, AnthropicContentEvaluator)
        assert evaluator.model == 'claude-test'
        assert evaluator.min_length == 10
