"""
Reference extraction.

Splits a block of running text into numbered citation entries without any
numbering markup, by looking for a sequence of consecutive integers
(1, 2, 3, ...) and inferring which characters bound them, e.g. ``[1]``,
``1.`` or ``(1)``.

Algorithm:
1. Scan for numbers with at most one bounding character on each side.
2. Accept a number if it is the first one or follows the last accepted
   number by one; count the bounding characters of accepted numbers.
3. The most frequent leading and trailing characters become the delimiter
   style.
4. Re-scan for delimiter-bounded numbers. The first one starts the list;
   each one continuing the sequence closes the text collected so far as an
   entry. Numbers that break the sequence stay part of the entry text.
5. The text after the last delimiter is closed as a final entry when
   ``close_trailing`` is set, and discarded otherwise.

Only sections whose fraction of alphabetic characters falls inside the
configured window are treated as reference lists.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Mapping

from pdfextract.errors import MalformedSegmentationInputError
from pdfextract.graph import TypeRegistry
from pdfextract.models import SpatialObject

logger = logging.getLogger(__name__)

# Bounding characters never cross a line break.
_CANDIDATE = re.compile(r"([^\d\n])?(\d+)([^\d\n])?")


def infer_delimiters(text: str) -> tuple[str, str] | None:
    """Most frequent (before, after) characters around the number sequence.

    Returns None when the text holds no number at all.
    """
    before: Counter[str] = Counter()
    after: Counter[str] = Counter()
    last_n = None
    for match in _CANDIDATE.finditer(text):
        n = int(match.group(2))
        if last_n is not None and n != last_n + 1:
            continue
        last_n = n
        if match.group(1):
            before[match.group(1)] += 1
        if match.group(3):
            after[match.group(3)] += 1

    if last_n is None:
        return None
    delim_before = before.most_common(1)[0][0] if before else ""
    delim_after = after.most_common(1)[0][0] if after else ""
    return delim_before, delim_after


def split_refs(text: str, close_trailing: bool = True) -> list[SpatialObject]:
    """Partition ``text`` into ``{content, order}`` reference entries.

    Example:
        >>> [r["order"] for r in split_refs("Intro [1] one [2] two [3] three")]
        [1, 2, 3]
        >>> [r["order"] for r in split_refs("Intro [1] one [2] two [3] three", close_trailing=False)]
        [1, 2]
    """
    if not isinstance(text, str):
        raise MalformedSegmentationInputError(
            f"Reference text must be a string, got {type(text).__name__}"
        )

    delimiters = infer_delimiters(text)
    if delimiters is None:
        return []
    delim_before, delim_after = delimiters
    pattern = re.compile(re.escape(delim_before) + r"(\d+)" + re.escape(delim_after))

    refs: list[SpatialObject] = []
    current_ref = ""
    last_n = None
    cursor = 0
    for match in pattern.finditer(text):
        preceding = text[cursor:match.start()]
        cursor = match.end()
        n = int(match.group(1))
        if last_n is None:
            last_n = n
        elif n == last_n + 1:
            current_ref += preceding
            refs.append(SpatialObject(content=current_ref.strip(), order=last_n))
            current_ref = ""
            last_n = n
        else:
            current_ref += preceding + match.group(0)

    if close_trailing and last_n is not None:
        current_ref += text[cursor:]
        if current_ref.strip():
            refs.append(SpatialObject(content=current_ref.strip(), order=last_n))

    return refs


def letter_ratio(text: str) -> float:
    """Fraction of characters in ``text`` that are alphabetic."""
    if not text:
        return 0.0
    return sum(1 for c in text if c.isalpha()) / len(text)


def is_reference_bearing(
    section: Mapping,
    min_ratio: float = 0.2,
    max_ratio: float = 0.5,
) -> bool:
    """True when the section's letter ratio lies in [min_ratio, max_ratio]."""
    ratio = section.get("letter_ratio")
    if ratio is None:
        ratio = letter_ratio(section.get("content", ""))
    return min_ratio <= ratio <= max_ratio


def build_references(ctx) -> None:
    sections = ctx.objects("sections")
    settings = ctx.config.references

    @ctx.after
    def references():
        refs = []
        for section in sections:
            if not is_reference_bearing(section, settings.min_letter_ratio, settings.max_letter_ratio):
                continue
            found = split_refs(section.get("content", ""), close_trailing=settings.close_trailing)
            logger.debug(
                "Section on page %s yielded %d references", section.get("page"), len(found),
            )
            refs.extend(found)
        return refs


def include_in(registry: TypeRegistry) -> None:
    registry.register(
        "references", ["sections"], build_references,
        "Numbered citation entries",
    )
