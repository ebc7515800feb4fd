"""Tests for the content quality filter."""

import pytest

from config import DEFAULT_HEDGE_PHRASES
from models.research import Answer, Unusable, Usable
from models.section import SectionId
from research.quality import ContentFilter
from tests.fakes import answer


@pytest.fixture
def content_filter():
    return ContentFilter()


def test_real_content_is_usable(content_filter):
    result = content_filter.classify(
        SectionId.SUMMARY,
        answer("Microsoft is a technology company headquartered in Redmond.", "https://a"),
    )

    assert isinstance(result, Usable)
    assert result.section is SectionId.SUMMARY
    assert result.text.startswith("Microsoft")
    assert [c.url for c in result.citations] == ["https://a"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_is_unusable(content_filter, text):
    result = content_filter.classify(SectionId.NEWS, Answer(success=True, text=text))

    assert isinstance(result, Unusable)
    assert result.reason == "empty answer"


def test_upstream_failure_is_unusable(content_filter):
    result = content_filter.classify(SectionId.NEWS, answer("Real looking text.", success=False))

    assert isinstance(result, Unusable)
    assert "failure" in result.reason


@pytest.mark.parametrize("phrase", DEFAULT_HEDGE_PHRASES)
@pytest.mark.parametrize("transform", [str.lower, str.upper, str.title])
def test_hedge_phrases_in_any_case_are_unusable(content_filter, phrase, transform):
    text = f"Regarding Acme: {transform(phrase)} about recent events."

    result = content_filter.classify(SectionId.NEWS, answer(text))

    assert isinstance(result, Unusable)
    assert phrase in result.reason


def test_scenario_hedge_answer(content_filter):
    result = content_filter.classify(
        SectionId.NEWS,
        answer("I don't have enough information about recent news."),
    )

    assert isinstance(result, Unusable)


def test_default_phrase_list_is_stable():
    assert DEFAULT_HEDGE_PHRASES == (
        "don't have enough information",
        "do not have enough information",
        "based on the sources found",
        "insufficient information",
        "no information available",
        "unable to find",
        "cannot provide",
        "not available",
    )


def test_incidental_phrase_is_an_accepted_false_positive(content_filter):
    text = "The product is not available in Europe but sells well in the US."

    assert isinstance(content_filter.classify(SectionId.PRODUCTS, answer(text)), Unusable)


def test_custom_phrases_replace_defaults():
    content_filter = ContentFilter(["No Data", "  "])

    assert content_filter.phrases == ("no data",)
    assert content_filter.find_hedge("There is NO DATA here.") == "no data"
    assert isinstance(
        content_filter.classify(SectionId.NEWS, answer("Info is not available.")),
        Usable,
    )
