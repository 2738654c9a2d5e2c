# tests/unit/analysis/test_unit_response_parser.py - v1
"""Tests for analysis/response_parser.py - tagged results and fallbacks."""

from __future__ import annotations

import json
import random

import pytest

from creatorlens.analysis.response_parser import (
    RAW_TEXT_LIMIT,
    Parsed,
    Refused,
    Unparseable,
    build_refusal_placeholder,
    build_unparseable_fallback,
    interpret_response,
    normalize_category,
    parse_analysis,
)
from creatorlens.core.models import ANALYSIS_FIELDS, CATEGORIES, StructuredAnalysis


def _assert_complete(analysis: StructuredAnalysis) -> None:
    data = analysis.model_dump()
    assert set(data) == set(ANALYSIS_FIELDS)
    for name in ANALYSIS_FIELDS:
        assert isinstance(data[name], str)
        assert data[name].strip(), name
    assert analysis.category in CATEGORIES


class TestInterpretResponse:
    def test_valid_json(self, sample_json_reply, sample_analysis):
        result = interpret_response(sample_json_reply)
        assert isinstance(result, Parsed)
        assert result.analysis == sample_analysis

    def test_fenced_json(self, sample_json_reply, sample_analysis):
        result = interpret_response(f"```json\n{sample_json_reply}\n```")
        assert isinstance(result, Parsed)
        assert result.analysis == sample_analysis

    def test_json_with_surrounding_prose(self, sample_json_reply):
        result = interpret_response(f"Here is the analysis:\n{sample_json_reply}\nHope it helps!")
        assert isinstance(result, Parsed)

    @pytest.mark.parametrize(
        "text",
        [
            "I'm unable to analyze this image",
            "Sorry, I CANNOT ANALYZE images of people.",
            "I can't help with identifying people.",
            "I’m unable to do that.",
        ],
    )
    def test_refusals(self, text):
        assert isinstance(interpret_response(text), Refused)

    @pytest.mark.parametrize("text", ["Sure! {bad json", "no braces at all", "[1, 2, 3]", ""])
    def test_unparseable(self, text):
        assert isinstance(interpret_response(text), Unparseable)

    def test_non_object_json(self):
        result = interpret_response('{"a": 1} and {"b": 2}')
        # greedy span covers both objects and is not valid JSON
        assert isinstance(result, Unparseable)

    def test_none_input(self):
        assert isinstance(interpret_response(None), Unparseable)


class TestNormalization:
    def test_missing_fields_are_filled(self):
        result = interpret_response('{"creator_score": "7/10", "category": "food"}')
        assert isinstance(result, Parsed)
        _assert_complete(result.analysis)
        assert result.analysis.creator_score == "7/10"
        assert result.analysis.category == "food"

    def test_non_string_values(self):
        payload = {
            "creator_score": 8,
            "category": "Tech",
            "key_strengths": ["editing", "storytelling"],
            "audience_demographics": {"age": "18-24"},
        }
        result = interpret_response(json.dumps(payload))
        assert isinstance(result, Parsed)
        assert result.analysis.creator_score == "8"
        assert result.analysis.category == "tech"
        assert result.analysis.key_strengths == "editing, storytelling"
        assert "18-24" in result.analysis.audience_demographics

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("fitness", "fitness"),
            ("  Beauty ", "beauty"),
            ("Fitness & Lifestyle", "fitness"),
            ("Lifestyle and travel vlogs", "lifestyle"),
            ("Cooking", "other"),
            (None, "other"),
            (42, "other"),
        ],
    )
    def test_category(self, value, expected):
        assert normalize_category(value) == expected


class TestParseAnalysis:
    def test_refusal_scenario(self):
        analysis = parse_analysis("I'm unable to analyze this image")
        assert analysis.category == "lifestyle"
        assert analysis == build_refusal_placeholder()

    def test_bad_json_scenario(self):
        raw = "Sure! {bad json"
        analysis = parse_analysis(raw)
        assert analysis.category == "other"
        assert raw.startswith(analysis.overall_assessment)

    def test_long_raw_text_is_truncated(self):
        raw = "x" * 2000
        analysis = parse_analysis(raw, tier="premium")
        assert analysis.overall_assessment == "x" * RAW_TEXT_LIMIT + "..."
        assert analysis.creator_score == "Analysis completed - premium level"

    def test_exactly_limit_not_marked(self):
        raw = "y" * RAW_TEXT_LIMIT
        assert parse_analysis(raw).overall_assessment == raw

    def test_parsed_passthrough(self, sample_json_reply, sample_analysis):
        assert parse_analysis(sample_json_reply) == sample_analysis

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "{}",
            "{",
            "}",
            "```",
            "```json\n```",
            '{"category": null}',
            "null",
            "[" * 5000 + "]" * 5000,
            "{" + '"a":' * 3000 + "1" + "}" * 3000,
            "\x00\x01\x02 binary {\x7f}",
            '{"creator_score": "' + "9" * 5000 + '"}',
        ],
    )
    def test_never_partial(self, text):
        _assert_complete(parse_analysis(text))

    def test_random_bytes_never_fail(self):
        rng = random.Random(1234)
        for _ in range(200):
            raw = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 400)))
            _assert_complete(parse_analysis(raw.decode("latin-1")))


class TestFallbackBuilders:
    def test_placeholder_complete(self):
        _assert_complete(build_refusal_placeholder())

    def test_unparseable_fallback_complete(self):
        _assert_complete(build_unparseable_fallback("some text", "basic"))

    def test_unparseable_fallback_empty_text(self):
        analysis = build_unparseable_fallback("")
        assert analysis.overall_assessment
        assert analysis.category == "other"
