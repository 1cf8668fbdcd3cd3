"""Asking a series of questions, validating and transforming the answers."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .config import IconSet, PromptConfig, default_prompt_config
from .cursor import Stdio
from .validate import Validator

Transformer = Callable[[Any], Any]


class Prompt(Protocol):
    """Anything that can ask the user for a value."""

    def prompt(self, config: PromptConfig) -> Any: ...

    def cleanup(self, config: PromptConfig, value: Any) -> None: ...

    def error(self, config: PromptConfig, invalid: Any) -> None: ...


@dataclass
class Question:
    """One question: where its answer goes, how it is asked and checked."""

    name: str
    prompt: Prompt
    validate: Optional[Validator] = None
    transform: Optional[Transformer] = None


def _default_stdio() -> Stdio:
    return Stdio(in_=sys.stdin, out=sys.stdout, err=sys.stderr)


@dataclass
class AskOptions:
    """Settings for one call of :func:`ask`."""

    stdio: Stdio = field(default_factory=_default_stdio)
    validators: List[Validator] = field(default_factory=list)
    prompt_config: PromptConfig = field(default_factory=default_prompt_config)


AskOpt = Callable[[AskOptions], None]


def with_stdio(in_: Any, out: Any, err: Any) -> AskOpt:
    """Use the given input, output and error streams."""

    def apply(options: AskOptions) -> None:
        options.stdio.in_ = in_
        options.stdio.out = out
        options.stdio.err = err

    return apply


def with_filter(filter: Callable[[str, str, int], bool]) -> AskOpt:
    """Use ``filter`` to decide which options match typed text."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.filter = filter

    return apply


def with_keep_filter(keep_filter: bool) -> AskOpt:
    """Keep the filter text after a selection."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.keep_filter = keep_filter

    return apply


def with_remove_select_all() -> AskOpt:
    """Remove the select-all choice from multi-select prompts."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.remove_select_all = True

    return apply


def with_remove_select_none() -> AskOpt:
    """Remove the select-none choice from multi-select prompts."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.remove_select_none = True

    return apply


def with_validator(validator: Validator) -> AskOpt:
    """Check every answer with ``validator`` as well."""

    def apply(options: AskOptions) -> None:
        options.validators.append(validator)

    return apply


def with_page_size(page_size: int) -> AskOpt:
    """Show ``page_size`` options at a time."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.page_size = page_size

    return apply


def with_help_input(char: str) -> AskOpt:
    """Use ``char`` as the key that shows the help text."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.help_input = str(char)

    return apply


def with_icons(set_icons: Callable[[IconSet], None]) -> AskOpt:
    """Let ``set_icons`` change the icons in place."""

    def apply(options: AskOptions) -> None:
        set_icons(options.prompt_config.icons)

    return apply


def with_show_cursor(show_cursor: bool) -> AskOpt:
    """Choose whether the cursor stays visible while prompting."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.show_cursor = show_cursor

    return apply


def with_hide_character(char: str) -> AskOpt:
    """Show ``char`` in place of each typed password character."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.hide_character = char

    return apply


def _validate(question: Question, validators: Sequence[Validator], value: Any) -> None:
    if question.validate is not None:
        question.validate(value)
    for validator in validators:
        validator(value)


def _ask_until_valid(question: Question, options: AskOptions) -> Any:
    prompt = question.prompt
    config = options.prompt_config
    answer: Any = None
    invalid: Optional[Exception] = None
    while True:
        if invalid is not None:
            prompt.error(config, invalid)
        prompt_again = getattr(prompt, "prompt_again", None)
        if invalid is not None and prompt_again is not None:
            answer = prompt_again(config, answer, invalid)
        else:
            answer = prompt.prompt(config)
        try:
            _validate(question, options.validators, answer)
        except Exception as exc:  # any failure rejects the answer
            invalid = exc
            continue
        return answer


def ask(questions: Sequence[Question], *opts: Optional[AskOpt]) -> Dict[str, Any]:
    """Ask every question in turn and return the answers by question name.

    An answer that fails validation is reported and asked for again.
    """
    options = AskOptions()
    for opt in opts:
        if opt is not None:
            opt(options)

    answers: Dict[str, Any] = {}
    for question in questions:
        set_stdio = getattr(question.prompt, "with_stdio", None)
        if callable(set_stdio):
            set_stdio(options.stdio)

        answer = _ask_until_valid(question, options)
        if question.transform is not None:
            transformed = question.transform(answer)
            if transformed is not None:
                answer = transformed

        question.prompt.cleanup(options.prompt_config, answer)
        answers[question.name] = answer
    return answers


def ask_one(prompt: Prompt, *opts: Optional[AskOpt]) -> Any:
    """Ask a single prompt and return its answer."""
    return ask([Question(name="", prompt=prompt)], *opts)[""]