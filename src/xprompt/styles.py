from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol


class Color(Enum):
    """
    An enumeration of the supported foreground colors.  Each color's value
    equals its xterm number.
    """

    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_CYAN = 14

    def asfg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        c = self.value
        return c + 30 if c < 8 else c + 82


@dataclass(frozen=True)
class Style:
    color: Color | None = None
    bold: bool = False

    def as_params(self) -> list[str]:
        params = []
        if self.color is not None:
            params.append(str(self.color.asfg()))
        if self.bold:
            params.append("1")
        return params


class Styler(Protocol):
    prompt_suffix: ClassVar[str]

    def __call__(self, s: str, style: Style) -> str: ...

    def style(self, s: str, style: Style) -> str: ...


class BashStyler:
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    #: The actual prompt symbol to show at the end of the prompt, just before
    #: a final space character
    prompt_suffix: ClassVar[str] = r"\$"

    def __call__(self, s: str, style: Style) -> str:
        """Escape ``s`` for use in a PS1 variable and then stylize it"""
        return self.style(self.escape(s), style)

    def style(self, s: str, style: Style) -> str:
        r"""
        Wrap the already-escaped string ``s`` in the escape sequences for the
        given style.  All escape sequences are wrapped in ``\[ ... \]`` so
        that they may be used in a PS1 variable.  A style with no color and
        no weight leaves the string unchanged.

        :param str s: the string to stylize
        :param Style style: the color & weight to stylize the string with
        """
        if params := style.as_params():
            s = rf"\[\e[{';'.join(params)}m\]{s}\[\e[m\]"
        return s

    def escape(self, s: str) -> str:
        """
        Escape characters in the string ``s`` that have special meaning in a
        PS1 variable.  Bash expands parameters & command substitutions in PS1
        every time the prompt is shown, so ``$`` and backticks are escaped so
        as to come out literally.
        """
        s = s.replace("\\", r"\\")
        return s.replace("$", r"\\$").replace("`", r"\\`")


class ANSIStyler:
    """Class for styling strings for display immediately in the terminal"""

    prompt_suffix: ClassVar[str] = "$"

    def __call__(self, s: str, style: Style) -> str:
        return self.style(s, style)

    def style(self, s: str, style: Style) -> str:
        """
        Stylize the string ``s`` with ANSI escape sequences.  If
        ``style.color`` is non-`None`, the string will be stylized with the
        given foreground color.  If ``style.bold`` is true, the string will be
        stylized bold.
        """
        if params := style.as_params():
            s = f"\x1B[{';'.join(params)}m{s}\x1B[m"
        return s


class ZshStyler:
    """Class for escaping & styling strings for use in zsh's PS1 variable"""

    prompt_suffix: ClassVar[str] = "%#"

    def __call__(self, s: str, style: Style) -> str:
        return self.style(self.escape(s), style)

    def style(self, s: str, style: Style) -> str:
        """
        Wrap the already-escaped string ``s`` in zsh prompt sequences for the
        given color & weight
        """
        if style.bold:
            s = f"%B{s}%b"
        if style.color is not None:
            s = f"%F{{{style.color.value}}}{s}%f"
        return s

    def escape(self, s: str) -> str:
        return s.replace("%", "%%")


StyleClass = Enum(
    "StyleClass",
    [
        "SEPARATOR",
        "USER",
        "HOST",
        "CWD",
        "VCS_CLEAN",
        "VCS_DIRTY",
        "VCS_FLAGS",
        "PROMPT_SUCCESS",
        "PROMPT_FAILURE",
        "CONTINUATION",
    ],
)

Theme = dict[StyleClass, Style]

#: The one and only color scheme
THEME: Theme = {
    StyleClass.SEPARATOR: Style(),
    StyleClass.USER: Style(Color.LIGHT_BLUE),
    StyleClass.HOST: Style(Color.LIGHT_RED),
    StyleClass.CWD: Style(Color.LIGHT_CYAN),
    StyleClass.VCS_CLEAN: Style(Color.LIGHT_GREEN),
    StyleClass.VCS_DIRTY: Style(Color.LIGHT_YELLOW),
    StyleClass.VCS_FLAGS: Style(Color.BLUE, bold=True),
    StyleClass.PROMPT_SUCCESS: Style(Color.GREEN, bold=True),
    StyleClass.PROMPT_FAILURE: Style(Color.RED, bold=True),
    StyleClass.CONTINUATION: Style(Color.YELLOW),
}


@dataclass
class Painter:
    styler: Styler
    theme: Theme

    def __call__(self, s: str, klass: StyleClass) -> str:
        return self.styler(s, self.theme[klass])

    def terminator(self, klass: StyleClass) -> str:
        """Paint the shell's own prompt symbol (which must not be escaped)"""
        return self.styler.style(self.styler.prompt_suffix, self.theme[klass])
