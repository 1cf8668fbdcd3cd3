"""Prompt configuration: icons, paging, filtering and input settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

Filter = Callable[[str, str, int], bool]


@dataclass
class Icon:
    """The text shown for an icon and the colour spec used to format it."""

    text: str = ""
    format: str = ""


@dataclass
class IconSet:
    """The icons used by the prompts."""

    help_input: Icon = field(default_factory=Icon)
    error: Icon = field(default_factory=lambda: Icon("X", "red"))
    help: Icon = field(default_factory=lambda: Icon("?", "cyan"))
    question: Icon = field(default_factory=lambda: Icon("?", "green+hb"))
    marked_option: Icon = field(default_factory=lambda: Icon("[x]", "green"))
    unmarked_option: Icon = field(default_factory=lambda: Icon("[ ]", "default+hb"))
    select_focus: Icon = field(default_factory=lambda: Icon(">", "cyan+b"))


def default_filter(filter: str, value: str, index: int) -> bool:
    """Keep an option when it contains the filter text, ignoring case."""
    return filter.lower() in value.lower()


@dataclass
class PromptConfig:
    """Settings shared by every prompt of one ``ask`` call."""

    page_size: int = 7
    icons: IconSet = field(default_factory=IconSet)
    help_input: str = "?"
    suggest_input: str = "tab"
    filter: Filter = default_filter
    keep_filter: bool = False
    show_cursor: bool = False
    remove_select_all: bool = False
    remove_select_none: bool = False
    hide_character: str = "*"


def default_prompt_config() -> PromptConfig:
    """Return a fresh configuration holding the default settings."""
    return PromptConfig()


def default_icons() -> IconSet:
    """Return a fresh set of the default icons."""
    return default_prompt_config().icons