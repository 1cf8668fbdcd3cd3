"""A prompt that lets the user pick one option from a list."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .config import PromptConfig, default_prompt_config
from .keys import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DELETE_LINE,
    KEY_DELETE_WORD,
    KEY_END_TRANSMISSION,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_SPACE,
    KEY_TAB,
    InterruptError,
)
from .options import OptionAnswer, option_answer_list, paginate
from .renderer import Renderer, Template, ansi_code

Description = Callable[[str, int], str]
Filter = Callable[[str, str, int], bool]


@dataclass(eq=False)
class Select(Renderer):
    """Presents a list of options; the user moves with the arrow keys,
    types to filter and confirms with enter. The answer is an
    :class:`OptionAnswer`.
    """

    message: str = ""
    options: List[str] = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Optional[Filter] = None
    description: Optional[Description] = None
    _filter_text: str = field(default="", init=False, repr=False)
    _selected_index: int = field(default=0, init=False, repr=False)
    _showing_help: bool = field(default=False, init=False, repr=False)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def on_change(self, key: str, config: PromptConfig) -> bool:
        """Handle one key press; return whether the user is done."""
        options = self.filter_options(config)
        old_filter = self._filter_text

        if key in (KEY_ENTER, "\n"):
            return bool(options) and self._selected_index < len(options)
        elif (key == KEY_ARROW_UP or (self.vim_mode and key == "k")) and options:
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif (key in (KEY_TAB, KEY_ARROW_DOWN) or (self.vim_mode and key == "j")) and options:
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == config.help_input and self.help:
            self._showing_help = True
        elif key == KEY_ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (KEY_DELETE_WORD, KEY_DELETE_LINE):
            self._filter_text = ""
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif ord(key) >= ord(KEY_SPACE):
            self._filter_text += key
            self.vim_mode = False

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self.filter_options(config)
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        opts, idx = paginate(self._page_size(config), options, self._selected_index)
        data = SelectTemplateData(
            select=self,
            selected_index=idx,
            show_help=self._showing_help,
            description=self.description,
            page_entries=opts,
            config=config,
        )
        self.render_with_cursor_offset(SELECT_QUESTION_TEMPLATE, data, opts, idx)
        return False

    def filter_options(self, config: PromptConfig) -> List[OptionAnswer]:
        """Return the options that match the text typed so far."""
        if not self._filter_text:
            return option_answer_list(self.options)
        keep = self.filter or config.filter
        return [
            OptionAnswer(value=opt, index=index)
            for index, opt in enumerate(self.options)
            if keep(self._filter_text, opt, index)
        ]

    def _apply_default(self) -> None:
        self._selected_index = 0
        default = self.default
        if default is None:
            return
        if isinstance(default, str):
            matches = [i for i, opt in enumerate(self.options) if opt == default]
            if not matches:
                raise ValueError(f'default value "{default}" not found in options')
            self._selected_index = matches[-1]
        elif isinstance(default, int) and not isinstance(default, bool):
            if default >= len(self.options) or default < 0:
                raise ValueError(f"default index {default} exceeds the number of options")
            self._selected_index = default
        else:
            raise TypeError("default value of select must be an int or string")

    def prompt(self, config: PromptConfig) -> OptionAnswer:
        """Ask the user to pick an option and return it."""
        if not self.options:
            raise ValueError("please provide options to select from")
        self._apply_default()

        opts, idx = paginate(
            self._page_size(config), option_answer_list(self.options), self._selected_index
        )
        cursor = self.new_cursor()
        cursor.save()
        cursor.hide()
        try:
            data = SelectTemplateData(
                select=self,
                selected_index=idx,
                description=self.description,
                show_help=self._showing_help,
                page_entries=opts,
                config=config,
            )
            self.render_with_cursor_offset(SELECT_QUESTION_TEMPLATE, data, opts, idx)

            reader = self.new_rune_reader()
            with reader.raw_mode():
                while True:
                    key = reader.read_rune()
                    if key == KEY_INTERRUPT:
                        raise InterruptError()
                    if key == KEY_END_TRANSMISSION:
                        break
                    if self.on_change(key, config):
                        break

            options = self.filter_options(config)
            self._filter_text = ""
            self.filter_message = ""
        finally:
            cursor.restore()
            cursor.show()

        if self._selected_index < len(options):
            return options[self._selected_index]
        if not options:
            raise ValueError("no options match the filter")
        return options[0]

    def cleanup(self, config: PromptConfig, value: Any) -> None:
        """Replace the option list with the chosen answer."""
        self.new_cursor().restore()
        answer = value.value if isinstance(value, OptionAnswer) else str(value)
        self.render(
            SELECT_QUESTION_TEMPLATE,
            SelectTemplateData(
                select=self,
                answer=answer,
                show_answer=True,
                description=self.description,
                config=config,
            ),
        )


@dataclass
class SelectTemplateData:
    """What the select template renders from."""

    select: Select = field(default_factory=Select)
    page_entries: List[OptionAnswer] = field(default_factory=list)
    selected_index: int = 0
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False
    description: Optional[Description] = None
    config: PromptConfig = field(default_factory=default_prompt_config)
    current_opt: Optional[OptionAnswer] = None
    current_index: int = 0

    def iterate_option(self, ix: int, opt: OptionAnswer) -> "SelectTemplateData":
        """Return a copy set up to render the single option ``opt`` at ``ix``."""
        return dataclasses.replace(self, current_index=ix, current_opt=opt)

    def get_description(self, opt: OptionAnswer) -> str:
        if self.description is None:
            return ""
        return self.description(opt.value, opt.index)


def render_select_option(data: SelectTemplateData, colored: bool) -> str:
    """Render one option line of the select prompt."""

    def color(spec: str) -> str:
        return ansi_code(spec) if colored else ""

    opt = data.current_opt
    if opt is None:
        raise ValueError("no option to render")
    focus = data.config.icons.select_focus
    if data.selected_index == data.current_index:
        prefix = f"{color(focus.format)}{focus.text} "
    else:
        prefix = f"{color('default')}  "
    description = data.get_description(opt)
    suffix = f" - {color('cyan')}{description}" if description else ""
    return f"{prefix}{opt.value}{suffix}{color('reset')}\n"


def render_select_question(data: SelectTemplateData, colored: bool) -> str:
    """Render the whole select prompt, or the answer once one was chosen."""

    def color(spec: str) -> str:
        return ansi_code(spec) if colored else ""

    icons = data.config.icons
    select = data.select
    parts = []
    if data.show_help:
        parts.append(f"{color(icons.help.format)}{icons.help.text} {select.help}{color('reset')}\n")
    parts.append(f"{color(icons.question.format)}{icons.question.text} {color('reset')}")
    parts.append(f"{color('default+hb')}{select.message}{select.filter_message}{color('reset')}")
    if data.show_answer:
        parts.append(f"{color('cyan')} {data.answer}{color('reset')}\n")
        return "".join(parts)

    hint = "[Use arrows to move, type to filter"
    if select.help and not data.show_help:
        hint += f", {data.config.help_input} for more help"
    parts.append(f"  {color('cyan')}{hint}]{color('reset')}\n")
    for ix, opt in enumerate(data.page_entries):
        parts.append(render_select_option(data.iterate_option(ix, opt), colored))
    return "".join(parts)


SELECT_QUESTION_TEMPLATE = Template(render_select_question, render_select_option)