from dataclasses import FrozenInstanceError

import pytest

from pagesmith.core.events import CodeBlock, End, Heading, Link, List, Start, Text


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_heading_accepts_levels_one_to_six(level: int) -> None:
    assert Heading(level).level == level


@pytest.mark.parametrize("level", [0, 7, -1])
def test_heading_rejects_out_of_range_levels(level: int) -> None:
    with pytest.raises(ValueError):
        Heading(level)


def test_list_is_ordered_only_with_a_start_number() -> None:
    assert List().ordered is False
    assert List(start=1).ordered is True
    assert List(start=0).ordered is True


def test_events_are_immutable_values() -> None:
    event = Start(Link("https://example.com", "Example"))
    with pytest.raises(FrozenInstanceError):
        event.tag = Heading(1)  # type: ignore[misc]
    assert event == Start(Link("https://example.com", "Example"))
    assert Text("a") != Text("b")


def test_code_block_defaults_to_no_language() -> None:
    assert CodeBlock().language == ""
    assert End(CodeBlock("rust")).tag.language == "rust"
