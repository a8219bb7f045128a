"""
Tests for reference segmentation and the letter-ratio section filter.
"""

import pytest

from pdfextract.errors import MalformedSegmentationInputError
from pdfextract.models import SpatialObject
from pdfextract.spatials.references import (
    infer_delimiters,
    is_reference_bearing,
    letter_ratio,
    split_refs,
)


def _contents(refs):
    return [(r["order"], r["content"]) for r in refs]


class TestDelimiterInference:

    def test_brackets(self):
        assert infer_delimiters("Intro text [1] body [2] more [3] end") == ("[", "]")

    def test_trailing_parenthesis(self):
        assert infer_delimiters("a 1) ref one 2) ref two 9) unrelated 3) ref three") == (" ", ")")

    def test_out_of_sequence_numbers_do_not_vote(self):
        text = "(1) first, 1999. (2) second, 2004. (3) third"
        assert infer_delimiters(text) == ("(", ")")

    def test_no_numbers(self):
        assert infer_delimiters("no citations here") is None

    def test_missing_bounds_are_not_counted(self):
        assert infer_delimiters("1") == ("", "")


class TestSplitRefs:

    TEXT = "Intro text [1] body [2] more [3] end"

    def test_bracketed_sequence_with_trailing_entry(self):
        refs = split_refs(self.TEXT)
        assert _contents(refs) == [(1, "body"), (2, "more"), (3, "end")]

    def test_bracketed_sequence_without_trailing_entry(self):
        refs = split_refs(self.TEXT, close_trailing=False)
        assert _contents(refs) == [(1, "body"), (2, "more")]

    def test_orders_increase_by_one(self):
        orders = [r["order"] for r in split_refs(self.TEXT)]
        assert orders == list(range(orders[0], orders[0] + len(orders)))

    def test_broken_sequence_is_folded_into_entry(self):
        text = "a 1) ref one 2) ref two 9) unrelated 3) ref three"
        refs = split_refs(text)
        assert _contents(refs) == [
            (1, "ref one"),
            (2, "ref two 9) unrelated"),
            (3, "ref three"),
        ]

    def test_broken_sequence_without_trailing_entry(self):
        text = "a 1) ref one 2) ref two 9) unrelated 3) ref three"
        refs = split_refs(text, close_trailing=False)
        assert _contents(refs) == [(1, "ref one"), (2, "ref two 9) unrelated")]

    def test_numbers_inside_entries_are_kept(self):
        text = "[1] Smith J. Data 12(3) 2001. [2] Wong K. Maps 45(6) 2003. [3] Chen L. Text 78(9) 2005."
        refs = split_refs(text)
        assert _contents(refs) == [
            (1, "Smith J. Data 12(3) 2001."),
            (2, "Wong K. Maps 45(6) 2003."),
            (3, "Chen L. Text 78(9) 2005."),
        ]

    def test_multiline_dotted_numbering(self):
        text = "1. Alpha, B. On things.\n2. Gamma, D. On more things.\n3. Epsilon, F. Last."
        refs = split_refs(text)
        assert [r["order"] for r in refs] == [1, 2, 3]
        assert refs[0]["content"] == "Alpha, B. On things."

    def test_empty_trailing_text_is_not_an_entry(self):
        refs = split_refs("[1] one [2] two [3]")
        assert _contents(refs) == [(1, "one"), (2, "two")]

    def test_no_numbers_yields_no_entries(self):
        assert split_refs("An abstract without any citations.") == []
        assert split_refs("") == []

    def test_single_number_yields_trailing_entry_only(self):
        assert _contents(split_refs("see [1] the only one")) == [(1, "the only one")]
        assert split_refs("see [1] the only one", close_trailing=False) == []

    def test_entries_are_spatial_objects(self):
        refs = split_refs(self.TEXT)
        assert all(isinstance(r, SpatialObject) for r in refs)
        assert set(refs[0]) == {"content", "order"}

    def test_non_text_input(self):
        with pytest.raises(MalformedSegmentationInputError):
            split_refs(12)


class TestLetterRatio:

    def test_letter_ratio(self):
        assert letter_ratio("ab12") == 0.5
        assert letter_ratio("") == 0.0
        assert letter_ratio("....") == 0.0

    @pytest.mark.parametrize("ratio, included", [
        (0.05, False),
        (0.2, True),
        (0.35, True),
        (0.5, True),
        (0.51, False),
        (0.9, False),
    ])
    def test_window_is_inclusive(self, ratio, included):
        section = SpatialObject(content="irrelevant", letter_ratio=ratio)
        assert is_reference_bearing(section, 0.2, 0.5) is included

    def test_ratio_computed_when_missing(self):
        assert is_reference_bearing({"content": "ab12"})
        assert not is_reference_bearing({"content": "abcdef"})
