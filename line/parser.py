import dataclasses
import enum
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

USAGE_TEXT = """\
Usage: {cowsay | cowthink} [options] [message]

Options:

-bdgpstwy modifiers
-h help (this text)
-e eyes
-f face
-l lists faces
-T Tongue
-W wrap"""

_COMMAND_PATTERN = re.compile(r"(?:(fortune)\s*\|\s*cow(say|think)|cow(say|think))")
_FLAG_PATTERN = re.compile(r"-([A-Za-z])\b", re.ASCII)
_VALUE_PATTERN = re.compile(r"\s([^-\s]\S*)\b", re.ASCII)
_BLOCK_PATTERN = re.compile(r"```(.*?)```", re.DOTALL)


class Mode(enum.Enum):
    SAY = "say"
    THINK = "think"


class OptionKey(enum.Enum):
    """Single-letter flags understood after the command verb."""

    FACE = "f"
    EYES = "e"
    TONGUE = "T"
    HELP = "h"
    LIST = "l"
    BORG = "b"
    DEAD = "d"
    GREEDY = "g"
    PARANOID = "p"
    STONED = "s"
    TIRED = "t"
    WIRED = "w"
    YOUTHFUL = "y"
    WRAP = "W"


STRING_KEYS = frozenset({OptionKey.FACE, OptionKey.EYES, OptionKey.TONGUE})
BOOLEAN_KEYS = frozenset(
    {
        OptionKey.HELP,
        OptionKey.LIST,
        OptionKey.BORG,
        OptionKey.DEAD,
        OptionKey.GREEDY,
        OptionKey.PARANOID,
        OptionKey.STONED,
        OptionKey.TIRED,
        OptionKey.WIRED,
        OptionKey.YOUTHFUL,
    }
)
INTEGER_KEYS = frozenset({OptionKey.WRAP})

OptionValue = Union[str, bool, int]


class CommandParseError(ValueError):
    """Raised when a recognized command carries a malformed flag."""

    def __init__(self, letter: str, message: str):
        super().__init__(message)
        self.letter = letter


class MissingOptionValue(CommandParseError):
    def __init__(self, letter: str):
        super().__init__(letter, f"Missing value for option: {letter}")


class InvalidNumericValue(CommandParseError):
    def __init__(self, letter: str):
        super().__init__(letter, f"-{letter} has to be followed by an integer.")


@dataclass(frozen=True)
class CommandMatch:
    mode: Mode
    fortune_requested: bool
    consumed: int


@dataclass(frozen=True)
class Options:
    """Everything the renderer needs for one reply."""

    mode: Mode = Mode.SAY
    fortune_requested: bool = False
    values: Mapping[OptionKey, OptionValue] = field(
        default_factory=lambda: MappingProxyType({})
    )
    text: str = ""

    def get(self, key: OptionKey, default=None):
        return self.values.get(key, default)

    def with_text(self, text: str) -> "Options":
        return dataclasses.replace(self, text=text)


def recognize_command(text: str) -> Optional[CommandMatch]:
    """Match the command verb at the very start of ``text``.

    Returns None when the message is not addressed to the bot.
    """
    match = _COMMAND_PATTERN.match(text)
    if match is None:
        return None
    verb = match.group(2) or match.group(3)
    return CommandMatch(
        mode=Mode.THINK if verb == "think" else Mode.SAY,
        fortune_requested=match.group(1) is not None,
        consumed=match.end(),
    )


def _lookup_key(letter: str) -> Optional[OptionKey]:
    try:
        return OptionKey(letter)
    except ValueError:
        return None


def _scan_value(text: str, cursor: int, letter: str) -> Tuple[str, int]:
    match = _VALUE_PATTERN.match(text, cursor)
    if match is None:
        raise MissingOptionValue(letter)
    return match.group(1), match.end()


def _to_integer(token: str, letter: str) -> int:
    try:
        return int(token, 10)
    except ValueError:
        raise InvalidNumericValue(letter) from None


def scan_options(
    text: str, cursor: int = 0
) -> Tuple[Dict[OptionKey, OptionValue], int]:
    """Collect flags from ``text`` in one forward pass starting at ``cursor``.

    Returns the flag values and the offset just past the last consumed
    flag or value token. The first malformed value aborts the scan.
    """
    values: Dict[OptionKey, OptionValue] = {}
    position = cursor
    while True:
        match = _FLAG_PATTERN.search(text, position)
        if match is None:
            break
        letter = match.group(1)
        key = _lookup_key(letter)
        cursor = max(cursor, match.end())
        if key in STRING_KEYS:
            values[key], cursor = _scan_value(text, match.end(), letter)
        elif key in INTEGER_KEYS:
            token, cursor = _scan_value(text, match.end(), letter)
            values[key] = _to_integer(token, letter)
        elif key in BOOLEAN_KEYS:
            values[key] = True
        # zero-width matches must still move the scan forward
        position = cursor if cursor > match.start() else match.start() + 1
    return values, cursor


def extract_text(text: str, cursor: int) -> str:
    """Return the message payload found after the flags.

    One separator character after ``cursor`` is dropped. When the payload
    holds ```fenced``` blocks, the blocks and the text between them are
    joined with newlines and anything after the last block is discarded.
    """
    raw = text[cursor + 1 :]
    if not raw:
        return ""

    pieces = []
    last_end = 0
    position = 0
    while True:
        match = _BLOCK_PATTERN.search(raw, position)
        if match is None:
            break
        if match.start() != 0:
            pieces.append(raw[last_end : match.start()] + "\n")
        body = match.group(1)
        # NOTE: strips a literal "n", not a newline; kept for compatibility
        pieces.append(body[1:] if body.startswith("n") else body)
        last_end = match.end()
        position = match.end()

    text_out = "".join(pieces)
    return text_out if text_out else raw


def assemble_options(
    command: CommandMatch,
    values: Mapping[OptionKey, OptionValue],
    text: str,
    help_text: str = USAGE_TEXT,
) -> Options:
    if OptionKey.HELP in values:
        text = help_text
    return Options(
        mode=command.mode,
        fortune_requested=command.fortune_requested,
        values=MappingProxyType(dict(values)),
        text=text,
    )


class CowCommandParser:
    """Parse incoming chat text into cowsay render options."""

    def __init__(self, help_text: str = USAGE_TEXT):
        self.help_text = help_text

    def parse(self, text: str) -> Optional[Options]:
        """Return Options for a cowsay command, or None for any other text.

        Raises MissingOptionValue or InvalidNumericValue for malformed flags.
        """
        command = recognize_command(text)
        if command is None:
            return None
        remainder = text[command.consumed :]
        values, cursor = scan_options(remainder)
        body = extract_text(remainder, cursor)
        return assemble_options(command, values, body, self.help_text)
