from askprompt.config import (
    Icon,
    IconSet,
    PromptConfig,
    default_filter,
    default_icons,
    default_prompt_config,
)


def test_default_prompt_config_values():
    config = default_prompt_config()
    assert config.page_size == 7
    assert config.help_input == "?"
    assert config.suggest_input == "tab"
    assert config.hide_character == "*"
    assert config.keep_filter is False
    assert config.show_cursor is False
    assert config.remove_select_all is False
    assert config.remove_select_none is False
    assert config.filter is default_filter


def test_default_icons_values():
    icons = default_icons()
    assert icons.error == Icon("X", "red")
    assert icons.help == Icon("?", "cyan")
    assert icons.question == Icon("?", "green+hb")
    assert icons.marked_option == Icon("[x]", "green")
    assert icons.unmarked_option == Icon("[ ]", "default+hb")
    assert icons.select_focus == Icon(">", "cyan+b")
    assert icons.help_input == Icon()


def test_default_icons_match_config_icons():
    assert default_icons() == default_prompt_config().icons == IconSet()


def test_configs_are_independent():
    first = default_prompt_config()
    second = default_prompt_config()
    first.page_size = 3
    first.icons.error.text = "!"
    assert second.page_size == 7
    assert second.icons.error.text == "X"
    assert PromptConfig().icons.error.text == "X"


def test_default_filter_is_case_insensitive():
    assert default_filter("RE", "green", 2) is True
    assert default_filter("re", "RED", 0) is True


def test_default_filter_rejects_non_matching():
    assert default_filter("z", "red", 0) is False
    assert default_filter("blue", "blu", 1) is False


def test_default_filter_empty_matches_everything():
    assert all(default_filter("", value, i) for i, value in enumerate(["red", "", "x"]))