"""Markdown assembly tests."""

from src.scraper.assembler import assemble


def test_full_header():
    assert assemble("T", "D", "H", "Body") == "# T\n\n*D*\n\n## H\n\nBody"


def test_description_omitted_when_empty():
    assert assemble("T", "", "H", "Body") == "# T\n\n## H\n\nBody"


def test_heading_omitted_when_empty():
    assert assemble("T", "D", "", "Body") == "# T\n\n*D*\n\nBody"


def test_heading_omitted_when_same_as_title():
    assert assemble("Same", "", "Same", "Body") == "# Same\n\nBody"


def test_collapses_runs_of_blank_lines():
    assert assemble("T", "", "", "a\n\n\n\nb\n\n\nc") == "# T\n\na\n\nb\n\nc"


def test_keeps_single_blank_lines_and_line_breaks():
    assert assemble("T", "", "", "a\nb\n\nc") == "# T\n\na\nb\n\nc"


def test_trims_result():
    assert assemble("T", "", "", "\n\nBody\n\n  ") == "# T\n\nBody"


def test_empty_body():
    assert assemble("T", "D", "", "") == "# T\n\n*D*"


def test_empty_title_still_produces_header_marker():
    assert assemble("", "", "", "Body") == "# \n\nBody"
