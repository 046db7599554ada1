from __future__ import annotations

import json

import pytest

from bizdoc.core.model.document import RenderedSection, SectionKind
from bizdoc.core.normalize import GENERIC_HEADING, humanize_key, normalize_content


def test_slides_array_yields_one_section_per_slide_in_order() -> None:
    content = {
        "slides": [
            {"title": "Intro", "content": "a\nb"},
            {"title": "Close", "content": ["c", "d"]},
            {"title": "Third", "content": "e"},
        ]
    }
    sections = normalize_content(content)
    assert [s.heading for s in sections] == ["Intro", "Close", "Third"]
    assert [s.kind for s in sections] == [SectionKind.SLIDE] * 3
    assert sections[0].text == "a\nb"
    assert sections[1].body == ("c", "d")
    assert sections[1].text == "c\n\nd"


def test_slides_take_precedence_over_other_keys() -> None:
    content = {"summary": "ignored", "slides": [{"title": "Only", "content": "x"}]}
    sections = normalize_content(content)
    assert len(sections) == 1
    assert sections[0].heading == "Only"


def test_slide_without_title_gets_positional_heading() -> None:
    content = {"slides": [{"content": "x"}, {"title": "  ", "content": "y"}, "raw text"]}
    sections = normalize_content(content)
    assert [s.heading for s in sections] == ["Slide 1", "Slide 2", "Slide 3"]
    assert sections[2].text == "raw text"


def test_slide_title_is_kept_verbatim() -> None:
    sections = normalize_content({"slides": [{"title": "  1. 개요 ", "content": "x"}]})
    assert sections[0].heading == "  1. 개요 "


def test_slide_missing_content_has_empty_body() -> None:
    sections = normalize_content({"slides": [{"title": "Blank"}]})
    assert sections[0].text == ""


def test_slide_list_items_are_stringified() -> None:
    sections = normalize_content({"slides": [{"title": "T", "content": ["a", 3, {"k": "v"}]}]})
    assert sections[0].body == ("a", "3", '{"k": "v"}')


def test_flat_object_emits_one_section_per_key_in_insertion_order() -> None:
    content = {"documentType": "X", "customer": "Y", "validUntil": "Z"}
    sections = normalize_content(content)
    assert [s.heading for s in sections] == ["document Type", "customer", "valid Until"]
    assert [s.text for s in sections] == ["X", "Y", "Z"]
    assert all(s.kind is SectionKind.FIELD for s in sections)


def test_flat_object_non_string_values_are_pretty_printed_not_skipped() -> None:
    content = {"items": [{"name": "모듈", "qty": 2}], "total": 1200, "note": None}
    sections = normalize_content(content)
    assert [s.heading for s in sections] == ["items", "total", "note"]
    assert sections[0].text == json.dumps(content["items"], ensure_ascii=False, indent=2)
    assert "모듈" in sections[0].text
    assert sections[1].text == "1200"
    assert sections[2].text == "null"


def test_empty_slides_list_falls_back_to_object_path() -> None:
    sections = normalize_content({"slides": [], "summary": "s"})
    assert [s.heading for s in sections] == ["slides", "summary"]
    assert sections[0].text == "[]"


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (42, "42"),
        (4.5, "4.5"),
        ("plain text", "plain text"),
        (True, "true"),
        (None, ""),
        ([1, "two"], '[1, "two"]'),
        ({}, ""),
    ],
)
def test_scalar_and_unclassifiable_content_yield_single_generic_section(content, expected) -> None:
    sections = normalize_content(content)
    assert sections == [RenderedSection(GENERIC_HEADING, expected, SectionKind.SCALAR)]


def test_normalizer_does_not_mutate_content() -> None:
    content = {"slides": [{"title": "A", "content": ["x", "y"]}], "extra": {"k": [1, 2]}}
    snapshot = json.dumps(content, sort_keys=True)
    normalize_content(content)
    normalize_content(content)
    assert json.dumps(content, sort_keys=True) == snapshot


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("documentType", "document Type"),
        ("customer", "customer"),
        ("totalAmountVAT", "total Amount V A T"),
        ("Summary", "Summary"),
        ("견적번호", "견적번호"),
    ],
)
def test_humanize_key(key: str, expected: str) -> None:
    assert humanize_key(key) == expected
