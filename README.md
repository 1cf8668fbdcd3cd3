# askprompt

Interactive prompts for terminal programs. Show the user a list to pick from
with the arrow keys, let them type to narrow the list, check the answer with
validators, reshape it with transformers and collect the answers into a
dictionary.

## Installing

```
pip install askprompt
```

No third-party packages are needed. Switching the terminal into
key-at-a-time mode uses `termios`, so interactive use needs a POSIX system;
input that is not a terminal is read as it is.

## Asking one question

```python
from askprompt.ask import ask_one
from askprompt.select import Select

prompt = Select(message="Choose a color:", options=["red", "blue", "green"])
answer = ask_one(prompt)
print(answer.value, answer.index)
```

The answer to a `Select` is an `askprompt.options.OptionAnswer`, holding the
chosen `value` and its `index` in the option list.

`Select` takes:

- `message` – the question text;
- `options` – the strings to choose from (an empty list raises `ValueError`);
- `default` – the option string or index selected at first; a string that is
  not an option or an index past the end raises `ValueError`, any other type
  raises `TypeError`;
- `help` – text shown when the help key is pressed;
- `page_size` – options shown at once (0 uses the configured page size, 7 by
  default);
- `vim_mode` – start with `j`/`k` navigation turned on;
- `filter` – a function `(filter_text, option, index) -> bool` used instead of
  the configured filter;
- `description` – a function `(option, index) -> str` whose text is shown
  after each option.

While the list is shown:

- up/down arrows (or Tab) move the highlight, wrapping at either end;
- typing narrows the list to matching options (case-insensitive substring by
  default) and turns vim mode off;
- Backspace removes the last filter character, Ctrl+W or Ctrl+X clears it;
- Esc toggles vim mode, where `j` and `k` move the highlight;
- `?` shows the help text, if the prompt has one;
- Enter accepts the highlighted option (ignored while nothing matches),
  Ctrl+D accepts as well, and Ctrl+C raises `askprompt.keys.InterruptError`.

## Asking several questions

```python
from askprompt.ask import Question, ask, with_page_size
from askprompt.select import Select
from askprompt.validate import required

questions = [
    Question(
        name="color",
        prompt=Select(message="Choose a color:", options=["red", "blue", "green"], default="blue"),
        validate=required,
    ),
]

answers = ask(questions, with_page_size(5))
print(answers["color"].value)
```

`ask` returns a dictionary from each question's `name` to its answer. When a
validator raises, the prompt's `error` method shows the message under the
prompt and the question is asked again (through `prompt_again` if the prompt
has one). Any object with `prompt(config)`, `cleanup(config, value)` and
`error(config, invalid)` methods can be used as a prompt; if it also has
`with_stdio(stdio)`, it is handed the streams in use.

## Validators and transformers

`askprompt.validate` provides `required`, `max_length`, `min_length`,
`max_items`, `min_items` and `compose_validators`. A validator takes the
answer and raises `ValidationError` when it is not acceptable. `required`
rejects empty values but accepts `False`; the length checks count characters
of strings, the item checks count lists of `OptionAnswer`.

`askprompt.transform` provides `to_lower`, `title`, `transform_string` and
`compose_transformers`. A transformer returns the new answer; returning `None`
leaves the answer as it was. Transformers made with `transform_string` return
`""` for empty answers and for answers that are not strings.

## Options

`ask` and `ask_one` accept option functions from `askprompt.ask`:
`with_stdio`, `with_filter`, `with_keep_filter`, `with_remove_select_all`,
`with_remove_select_none`, `with_validator`, `with_page_size`,
`with_help_input`, `with_icons`, `with_show_cursor` and
`with_hide_character`. Each changes the `AskOptions` of that call.

Icons and other defaults come from `askprompt.config.default_prompt_config()`
and `default_icons()`.

## Lower-level pieces

- `askprompt.options.paginate` picks the visible page of a list.
- `askprompt.renderer.Renderer` draws templates and erases what it drew;
  `count_lines`, `compute_cursor_offset` and `ansi_code` are available on
  their own.
- `askprompt.runereader.RuneReader` reads single keys (`read_rune`) and
  edited lines (`read_line`, `read_line_with_default`, with an optional mask
  character); `raw_mode()` is a context manager for key-at-a-time input.
- `askprompt.cursor.Cursor` writes ANSI cursor movements and queries the
  cursor position; `askprompt.width.string_width` measures text in terminal
  columns, skipping ANSI escapes.

## What is not included

`Select` is the only prompt. There are no text-input, confirmation,
password, multi-select or editor prompts, so the settings that only those
would read (`keep_filter`, `remove_select_all`, `remove_select_none`,
`hide_character`, `show_cursor`, `suggest_input` and the `marked_option` and
`unmarked_option` icons) are stored in the configuration but have no effect.
Answers are returned in a dictionary rather than written into an object.
There is no command-line program.