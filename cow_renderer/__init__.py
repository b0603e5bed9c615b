import logging
import textwrap
from typing import List

from cowpy import cow

from line.parser import Mode, OptionKey, Options

logger = logging.getLogger(__name__)

DEFAULT_FACE = "default"
DEFAULT_EYES = "default"
DEFAULT_WRAP = 40

# Applied in order; a later modifier overrides an earlier one.
# The second value forces the tongue out.
FACE_MODIFIERS = [
    (OptionKey.BORG, "borg", False),
    (OptionKey.DEAD, "dead", True),
    (OptionKey.GREEDY, "greedy", False),
    (OptionKey.PARANOID, "paranoid", False),
    (OptionKey.STONED, "stoned", True),
    (OptionKey.TIRED, "tired", False),
    (OptionKey.WIRED, "wired", False),
    (OptionKey.YOUTHFUL, "young", False),
]


class CowRenderError(ValueError):
    """Raised when options cannot be turned into a drawing."""


def wrap_text(text: str, width: int) -> str:
    """Wrap each line of ``text`` at ``width`` columns, keeping blank lines."""
    lines = []
    for line in text.expandtabs(8).split("\n"):
        wrapped = textwrap.wrap(line, width, replace_whitespace=False)
        lines.extend(wrapped or [""])
    return "\n".join(lines)


class CowRenderer:
    """Draw a cowpy character saying or thinking the given text."""

    def __init__(self, default_wrap: int = DEFAULT_WRAP):
        """Initialize renderer with the wrap width used when -W is absent."""
        self.default_wrap = default_wrap

    def list_faces(self) -> List[str]:
        return sorted(cow.cow_options())

    def list_eyes(self) -> List[str]:
        return sorted(cow.eye_options())

    def render(self, options: Options) -> str:
        """Render options into ASCII art.

        Raises CowRenderError for an unknown face or eye style, or a
        non-positive wrap width.
        """
        if options.get(OptionKey.LIST):
            return "Cow files: " + " ".join(self.list_faces())

        face = options.get(OptionKey.FACE, DEFAULT_FACE)
        if face not in self.list_faces():
            raise CowRenderError(f"Could not find {face} cowfile!")

        width = options.get(OptionKey.WRAP, self.default_wrap)
        if width <= 0:
            raise CowRenderError("Wrap width must be a positive integer.")

        eyes, tongue = self._build_face(options)
        think = options.mode is Mode.THINK
        cowacter = cow.get_cow(face)(eyes=eyes, thoughts=think, tongue=tongue)
        logger.debug("rendered face=%s eyes=%s width=%s think=%s", face, eyes, width, think)
        return cowacter.milk(wrap_text(options.text, width))

    def _build_face(self, options: Options) -> tuple:
        eyes = options.get(OptionKey.EYES, DEFAULT_EYES)
        if eyes not in self.list_eyes():
            raise CowRenderError(
                f"Unknown eyes: {eyes}. Choose from {', '.join(self.list_eyes())}"
            )
        tongue = OptionKey.TONGUE in options.values
        for key, mod_eyes, mod_tongue in FACE_MODIFIERS:
            if not options.get(key):
                continue
            eyes = mod_eyes
            tongue = tongue or mod_tongue
        return eyes, tongue
