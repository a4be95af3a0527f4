"""
Tests for template expansion.
"""

import pytest

from nestprops.document.templates import (
    MalformedTemplate,
    TemplateError,
    TemplateExpander,
    UndefinedTemplate,
    expand_templates,
)


def test_reference_is_replaced_by_definition() -> None:
    source = "<common>\ntimeout = 30\nretries = 3\n</common>\nalpha\n{\n%common%\n}\n"

    assert expand_templates(source) == "alpha\n{\ntimeout = 30\nretries = 3\n}\n"


def test_each_reference_gets_a_copy() -> None:
    source = "<t>\n    x = 1\n</t>\n%t%\n  %t%  \n"

    assert expand_templates(source) == "    x = 1\n    x = 1\n"


def test_definitions_are_kept_by_name() -> None:
    expander = TemplateExpander("<a>\none\ntwo\n</a>\n<b>\n</b>\n")
    expander.expand()

    assert expander.definitions == {"a": ["one", "two"], "b": []}


def test_later_definition_replaces_earlier() -> None:
    source = "<t>\na = 1\n</t>\n<t>\na = 2\n</t>\n%t%\n"

    assert expand_templates(source) == "a = 2\n"


def test_expansion_is_not_recursive() -> None:
    source = "<inner>\nx = 1\n</inner>\n<outer>\n%inner%\n</outer>\n%outer%\n"

    assert expand_templates(source) == "%inner%\n"


def test_closing_tag_must_match_name() -> None:
    source = "<a>\n</b>\n</a>\n%a%\n"

    assert expand_templates(source) == "</b>\n"


def test_plain_lines_pass_through() -> None:
    source = "# comment\n\nkey = <value>\npercent = %x%\n"

    assert expand_templates(source) == source


def test_missing_final_newline_is_kept() -> None:
    assert expand_templates("a = 1") == "a = 1"
    assert expand_templates("") == ""


def test_trailing_reference_without_newline_is_terminated() -> None:
    assert expand_templates("<t>\nx = 1\n</t>\n%t%") == "x = 1\n"
    assert expand_templates("<t>\nx = 1\ny = 2\n</t>\na = 0\n%t%") == "a = 0\nx = 1\ny = 2\n"


def test_line_numbers_point_at_source() -> None:
    expander = TemplateExpander("a = 0\n<t>\nb = 1\nc = 2\n</t>\n%t%\nd = 3\n")
    expander.expand()

    assert expander.line_numbers == [1, 6, 6, 7]


def test_undefined_reference() -> None:
    with pytest.raises(UndefinedTemplate) as exc_info:
        expand_templates("a = 1\n%nope%\n")

    assert exc_info.value.name == "nope"
    assert exc_info.value.line == 2
    assert "Line 2" in str(exc_info.value)


def test_reference_before_definition_is_undefined() -> None:
    with pytest.raises(UndefinedTemplate):
        expand_templates("%t%\n<t>\na = 1\n</t>\n")


@pytest.mark.parametrize(
    "source",
    [
        "<>\n",
        "<a\n</a>\n",
        "%%\n",
        "%abc\n",
        "</a>\n",
    ],
)
def test_malformed_markers(source: str) -> None:
    with pytest.raises(MalformedTemplate):
        expand_templates(source)


def test_unclosed_definition() -> None:
    with pytest.raises(MalformedTemplate) as exc_info:
        expand_templates("a = 1\n<t>\nb = 2\n")

    assert exc_info.value.line == 2


def test_template_errors_share_base_class() -> None:
    assert issubclass(MalformedTemplate, TemplateError)
    assert issubclass(UndefinedTemplate, TemplateError)
