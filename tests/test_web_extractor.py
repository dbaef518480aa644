"""Tests for the div extractor."""

import itertools
from unittest.mock import patch

import pytest

from divextract import markup as markup_module
from divextract.web_extractor import ExtractionError, ExtractionResult, extract_content

TARGET = "mw-content-ltr mw-parser-output"


class TestExtractContent:
    """Test extract_content outcomes."""

    def test_skips_non_matching_div(self):
        markup = '<div class="a"></div><div class="mw-content-ltr mw-parser-output"><p>X</p></div>'
        result = extract_content(markup, TARGET)

        assert result.success
        assert result.content == '<div class="mw-content-ltr mw-parser-output"><p>X</p></div>'

    def test_not_found(self):
        result = extract_content('<div class="other">Y</div>', TARGET)

        assert not result.success
        assert result.error == ExtractionError.NOT_FOUND
        assert result.target_classes == TARGET
        assert TARGET in result.reason

    def test_order_independent_with_extra_classes(self):
        markup = '<div class="mw-parser-output mw-content-ltr extra"><p>Z</p></div>'
        result = extract_content(markup, TARGET)

        assert result.success
        assert result.content == markup

    def test_malformed(self):
        result = extract_content('<div class="x"><p>unclosed', "x")

        assert result.error == ExtractionError.MALFORMED
        assert result.content is None

    def test_empty_markup(self):
        result = extract_content("", "x")

        assert result.error == ExtractionError.INVALID_INPUT
        assert result.field == "markup"

    def test_blank_markup(self):
        assert extract_content(" \n\t", "x").field == "markup"

    @pytest.mark.parametrize("target", ["", "   ", None])
    def test_blank_target(self, target):
        result = extract_content('<div class="x"></div>', target)

        assert result.error == ExtractionError.INVALID_INPUT
        assert result.field == "target_classes"

    def test_first_match_wins(self, caplog):
        markup = (
            '<div class="x">First</div>'
            '<div class="x">Second</div>'
        )
        result = extract_content(markup, "x")

        assert "First" in result.content
        assert "Second" not in result.content
        assert result.match_count == 2
        assert caplog.text.count("multiple_matches_found") == 1

    def test_selection_goes_through_locator(self):
        markup = '<div class="x">First</div><div class="x">Second</div>'
        with patch("divextract.web_extractor.locate_opening_tag",
                   wraps=markup_module.locate_opening_tag) as mock_locate:
            result = extract_content(markup, "x")

        mock_locate.assert_called_once()
        assert result.match_count == 2

    def test_self_closing_target_is_not_extracted(self):
        markup = '<div class="outer"><div class="t"/><p>x</p></div><div>y</div>'
        result = extract_content(markup, "t")

        assert result.error == ExtractionError.NOT_FOUND

    def test_attributes_without_separating_whitespace(self):
        result = extract_content('<div class="t"id="x">A</div>', "t")

        assert result.content == '<div class="t"id="x">A</div>'

    def test_whole_token_matching(self):
        result = extract_content('<div class="navigation">x</div>', "nav")
        assert result.error == ExtractionError.NOT_FOUND

    def test_nested_children_included(self, article_html, article_body):
        result = extract_content(article_html, TARGET)

        assert result.success
        assert result.content == article_body
        assert result.content.startswith("<")
        assert result.content.endswith("</div>")
        assert "Footer" not in result.content

    def test_shuffled_tokens(self):
        tokens = ["a", "b", "c"]
        for doc_order in itertools.permutations(tokens):
            markup = '<p></p><div class="%s"><div>in</div></div>' % " ".join(doc_order)
            for query_order in itertools.permutations(tokens):
                result = extract_content(markup, " ".join(query_order))
                assert result.content == markup[7:]

    def test_repeatable(self, article_html):
        first = extract_content(article_html, TARGET)
        second = extract_content(article_html, TARGET)
        assert first.content == second.content


class TestExtractionResult:
    """Test ExtractionResult helpers."""

    def test_to_dict_success(self):
        data = ExtractionResult(content="<div></div>", match_count=1).to_dict()
        assert data["success"] is True
        assert data["error"] is None

    def test_to_dict_failure(self):
        result = ExtractionResult.failed(ExtractionError.MALFORMED, "broken")
        assert result.to_dict()["error"] == "malformed"
        assert "malformed" in repr(result)
