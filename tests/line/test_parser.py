import pytest

from line.parser import (
    USAGE_TEXT,
    CommandParseError,
    CowCommandParser,
    InvalidNumericValue,
    MissingOptionValue,
    Mode,
    OptionKey,
    Options,
    extract_text,
    recognize_command,
    scan_options,
)


@pytest.fixture
def parser():
    return CowCommandParser()


@pytest.mark.parametrize(
    "text",
    ["", "hello", "hello cowsay", " cowsay hi", "Cowsay hi", "fortune hi", "cow say"],
)
def test_non_commands_return_none(parser, text):
    assert parser.parse(text) is None


def test_plain_say(parser):
    options = parser.parse("cowsay hello")
    assert options == Options(mode=Mode.SAY, fortune_requested=False, text="hello")
    assert dict(options.values) == {}


def test_think_with_boolean_flag(parser):
    options = parser.parse("cowthink -b hello there")
    assert options.mode is Mode.THINK
    assert options.fortune_requested is False
    assert dict(options.values) == {OptionKey.BORG: True}
    assert options.text == "hello there"


def test_fortune_prefix_leaves_text_empty(parser):
    options = parser.parse("fortune | cowsay")
    assert options.mode is Mode.SAY
    assert options.fortune_requested is True
    assert dict(options.values) == {}
    assert options.text == ""


def test_fortune_prefix_without_spaces(parser):
    options = parser.parse("fortune|cowthink hi")
    assert options.mode is Mode.THINK
    assert options.fortune_requested is True
    assert options.text == "hi"


def test_recognize_command_reports_consumed_length():
    command = recognize_command("fortune  |  cowthink -b")
    assert command.mode is Mode.THINK
    assert command.fortune_requested is True
    assert command.consumed == len("fortune  |  cowthink")


def test_missing_string_value(parser):
    with pytest.raises(MissingOptionValue) as excinfo:
        parser.parse("cowsay -f")
    assert excinfo.value.letter == "f"
    assert str(excinfo.value) == "Missing value for option: f"


def test_invalid_integer_value(parser):
    with pytest.raises(InvalidNumericValue) as excinfo:
        parser.parse("cowsay -W abc hi")
    assert excinfo.value.letter == "W"
    assert str(excinfo.value) == "-W has to be followed by an integer."


def test_integer_value_with_trailing_letters_is_rejected(parser):
    with pytest.raises(InvalidNumericValue):
        parser.parse("cowsay -W 12abc hi")


def test_signed_integer_value(parser):
    options = parser.parse("cowsay -W +30 hi")
    assert dict(options.values) == {OptionKey.WRAP: 30}
    assert options.text == "hi"


def test_missing_integer_value(parser):
    with pytest.raises(MissingOptionValue) as excinfo:
        parser.parse("cowsay -W")
    assert excinfo.value.letter == "W"
    assert str(excinfo.value) == "Missing value for option: W"


def test_parse_errors_are_value_errors(parser):
    with pytest.raises(ValueError):
        parser.parse("cowsay -e")
    assert issubclass(CommandParseError, ValueError)


def test_integer_flag(parser):
    options = parser.parse("cowsay -W 40 hello")
    assert dict(options.values) == {OptionKey.WRAP: 40}
    assert options.text == "hello"


def test_string_flags(parser):
    options = parser.parse("cowsay -f tux -e Oo -T U hi")
    assert dict(options.values) == {
        OptionKey.FACE: "tux",
        OptionKey.EYES: "Oo",
        OptionKey.TONGUE: "U",
    }
    assert options.text == "hi"


def test_value_must_follow_a_single_space(parser):
    with pytest.raises(MissingOptionValue):
        parser.parse("cowsay -f  tux")


def test_value_may_not_start_with_dash(parser):
    with pytest.raises(MissingOptionValue) as excinfo:
        parser.parse("cowsay -f -b hi")
    assert excinfo.value.letter == "f"


def test_value_must_end_on_word_boundary(parser):
    with pytest.raises(MissingOptionValue):
        parser.parse("cowsay -e ^^ hi")


def test_help_replaces_text(parser):
    options = parser.parse("cowsay -h -b ignored ```block```")
    assert options.text == USAGE_TEXT
    assert options.get(OptionKey.HELP) is True
    assert options.get(OptionKey.BORG) is True


def test_custom_help_text():
    options = CowCommandParser(help_text="HELP").parse("cowthink -h")
    assert options.text == "HELP"


def test_unknown_flag_is_skipped(parser):
    options = parser.parse("cowsay -x hello")
    assert dict(options.values) == {}
    assert options.text == "hello"


def test_flag_after_text_moves_payload(parser):
    options = parser.parse("cowsay hello -b world")
    assert dict(options.values) == {OptionKey.BORG: True}
    assert options.text == "world"


def test_dash_inside_word_is_not_a_flag(parser):
    options = parser.parse("cowsay well-known fact")
    assert dict(options.values) == {}
    assert options.text == "well-known fact"


def test_bare_verb_has_empty_text(parser):
    assert parser.parse("cowsay").text == ""
    assert parser.parse("cowsay -b").text == ""


def test_two_blocks_keep_gap_text(parser):
    options = parser.parse("cowsay ```first``` middle ```second```")
    assert options.text == "first middle \nsecond"


def test_adjacent_blocks_are_newline_separated(parser):
    options = parser.parse("cowsay ```first``````second```")
    assert options.text == "first\nsecond"


def test_text_before_first_block(parser):
    assert parser.parse("cowsay intro ```code```").text == "intro \ncode"


def test_text_after_last_block_is_dropped(parser):
    assert parser.parse("cowsay ```a``` tail").text == "a"


def test_block_spans_lines(parser):
    options = parser.parse("cowsay ```line one\nline two```")
    assert options.text == "line one\nline two"


def test_block_leading_letter_n_is_stripped(parser):
    assert parser.parse("cowsay ```nothing```").text == "othing"
    assert parser.parse("cowsay ```\nreal newline```").text == "\nreal newline"


def test_empty_blocks_fall_back_to_raw_text(parser):
    assert parser.parse("cowsay ``````").text == "``````"


def test_scan_options_returns_cursor_after_last_token():
    values, cursor = scan_options(" -b -f cow rest")
    assert values == {OptionKey.BORG: True, OptionKey.FACE: "cow"}
    assert cursor == 10


def test_scan_options_without_flags_keeps_cursor():
    assert scan_options(" plain text", 0) == ({}, 0)


def test_extract_text_skips_one_separator():
    assert extract_text(" -b  spaced ", 3) == " spaced "
    assert extract_text(" -b ", 3) == ""


def test_options_values_are_read_only(parser):
    options = parser.parse("cowsay -b hi")
    with pytest.raises(TypeError):
        options.values[OptionKey.BORG] = False


def test_parse_is_deterministic(parser):
    text = "fortune | cowthink -d -W 20 -f moose ```a``` b ```c```"
    assert parser.parse(text) == parser.parse(text)
