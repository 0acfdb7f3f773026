# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Color types. There are four of them: terminal default color, one of 16 basic
named colors, one of 256 indexed colors and 24-bit RGB color. All of them are
immutable value objects and can be compared and hashed.

.. testsetup:: *

    from termchain.color import *

"""
from __future__ import annotations

import re
import typing as t
from abc import abstractmethod, ABC

from .ansi import SequenceSGR, IntCodes
from .common import CDT

if t.TYPE_CHECKING:
    from .style import Style
    from .text import Fragment

CT = t.TypeVar("CT", bound="IColor")
"""
Any non-abstract `IColor` type.

:meta public:
"""


class _ColorRegistry(t.Generic[CT], t.Sized):
    _QUERY_SPLIT_REGEX = re.compile(r"[\W_]+|(?<=[a-z])(?=[A-Z0-9])")

    def __init__(self):
        self._map: t.Dict[t.Tuple[str, ...], CT] = {}

    def register(self, color: CT, name: str):
        tokens = self._tokenize(name)
        if tokens in self._map.keys():
            raise KeyError(f"Color {name!r} is already registered")
        self._map[tokens] = color

    def resolve(self, name: str) -> CT:
        tokens = self._tokenize(name)
        if tokens not in self._map.keys():
            raise LookupError(f"Color {name!r} does not exist")
        return self._map[tokens]

    def _tokenize(self, name: str) -> t.Tuple[str, ...]:
        return tuple(s.lower() for s in self._QUERY_SPLIT_REGEX.split(name) if s)

    def __len__(self) -> int:
        return len(self._map)


_registry = _ColorRegistry["IColor"]()


class IColor(ABC):
    """
    Abstract superclass for other ``Colors``.

    :meta private:
    """

    @abstractmethod
    def to_sgr(self, bg: bool) -> SequenceSGR:
        """
        Make an `SGR sequence<SequenceSGR>` out of `IColor`.

        :param bg: Set to *True* if required SGR should change the background color, or
                   *False* for the foreground (=text) color.
        """
        raise NotImplementedError

    @abstractmethod
    def _key(self) -> t.Tuple:
        raise NotImplementedError

    @abstractmethod
    def repr_attrs(self, verbose: bool = True) -> str:
        raise NotImplementedError

    def codes(self, bg: bool) -> t.List[int]:
        """SGR params setting this color for the selected channel."""
        return list(self.to_sgr(bg).params)

    def as_fg(self) -> Style:
        """Make a style with this color as the foreground and nothing else set."""
        from .style import Style

        return Style(fg=self)

    def as_bg(self) -> Style:
        """Make a style with this color as the background and nothing else set."""
        from .style import Style

        return Style(bg=self)

    def on(self, bg: CDT | IColor) -> Style:
        """
        >>> Colors.YELLOW.on(Colors.BLUE)
        <Style[yellow,bg=blue]>
        """
        return self.as_fg().with_bg(bg)

    def paint(self, content: t.Any) -> Fragment:
        """Shortcut for ``color.as_fg().paint(content)``."""
        return self.as_fg().paint(content)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IColor):
            return False
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}[{self.repr_attrs()}]>"


class ColorDefault(IColor):
    """
    Terminal default color for the channel -- whatever the user's terminal theme
    says it is. Represents SGR codes 39 and 49.
    """

    def to_sgr(self, bg: bool) -> SequenceSGR:
        if bg:
            return SequenceSGR(IntCodes.BG_COLOR_DEFAULT)
        return SequenceSGR(IntCodes.COLOR_DEFAULT)

    def _key(self) -> t.Tuple:
        return (ColorDefault,)

    def repr_attrs(self, verbose: bool = True) -> str:
        return "default"


class Color16(IColor):
    """
    Variant of a `IColor` operating within the most basic color set
    -- **Xterm-16**. Represents basic color-setting SGRs with primary codes
    30-37, 40-47, 90-97 and 100-107.

    :param code_fg:   Int code for a foreground color setup, e.g. 30.
    :param code_bg:   Int code for a background color setup. e.g. 40.
    :param name:      Name of the color, e.g. "red".
    """

    def __init__(self, code_fg: int, code_bg: int, name: str):
        if code_fg not in (*IntCodes.LIST_COLORS, *IntCodes.LIST_HI_COLORS):
            raise ValueError(f"Invalid foreground code: {code_fg}")
        if code_bg not in (*IntCodes.LIST_BG_COLORS, *IntCodes.LIST_BG_HI_COLORS):
            raise ValueError(f"Invalid background code: {code_bg}")
        self._code_fg: int = code_fg
        self._code_bg: int = code_bg
        self._name: str = name

    @property
    def code_fg(self) -> int:
        """Int code for a foreground color setup, e.g. 30."""
        return self._code_fg

    @property
    def code_bg(self) -> int:
        """Int code for a background color setup. e.g. 40."""
        return self._code_bg

    @property
    def name(self) -> str:
        return self._name

    def to_sgr(self, bg: bool) -> SequenceSGR:
        if bg:
            return SequenceSGR(self._code_bg)
        return SequenceSGR(self._code_fg)

    def _key(self) -> t.Tuple:
        return Color16, self._code_fg, self._code_bg

    def repr_attrs(self, verbose: bool = True) -> str:
        if verbose:
            return f"#{self._code_fg},{self._name}"
        return self._name


class Color256(IColor):
    """
    Variant of a `IColor` operating within **Xterm-256** indexed color table.
    Represents SGR complex codes ``38;5;*`` and ``48;5;*``.

    :param code:  Int code for a color setup, e.g. 52.
    """

    def __init__(self, code: int):
        if not 0 <= code <= 255:
            raise ValueError(f"Invalid color index: expected range [0-255], got: {code}")
        self._code: int = code

    @property
    def code(self) -> int:
        """Int code for a color setup, e.g. 52."""
        return self._code

    def to_sgr(self, bg: bool) -> SequenceSGR:
        return SequenceSGR.init_color_indexed(self._code, bg)

    def _key(self) -> t.Tuple:
        return Color256, self._code

    def repr_attrs(self, verbose: bool = True) -> str:
        return f"X{self._code}"


class ColorRGB(IColor):
    """
    Variant of a `IColor` operating within RGB color space. Represents SGR complex
    codes ``38;2;*;*;*`` and ``48;2;*;*;*``.

    >>> ColorRGB(70, 130, 180).codes(False)
    [38, 2, 70, 130, 180]

    :param r:  Red channel value, 0 -- 255.
    :param g:  Green channel value, 0 -- 255.
    :param b:  Blue channel value, 0 -- 255.
    """

    def __init__(self, r: int, g: int, b: int):
        for channel in (r, g, b):
            if not 0 <= channel <= 255:
                raise ValueError(
                    f"Invalid channel value: expected range [0-255], got: {channel}"
                )
        self._r, self._g, self._b = r, g, b

    @classmethod
    def from_hex(cls, hex_value: int) -> ColorRGB:
        if hex_value < 0 or hex_value > 0xFFFFFF:
            raise ValueError(
                f"Out of bounds hex value {hex_value:06X}, "
                "should be: 0x0 <= hex_value <= 0xFFFFFF"
            )
        return cls(*hex_to_rgb(hex_value))

    @property
    def hex_value(self) -> int:
        """Color value, e.g. 0x3AEB0C."""
        return (self._r << 16) + (self._g << 8) + self._b

    def to_rgb(self) -> t.Tuple[int, int, int]:
        return self._r, self._g, self._b

    def lerp(self, other: ColorRGB, t_: float) -> ColorRGB:
        """
        Linear interpolation between this color (``t_`` = 0) and ``other``
        (``t_`` = 1). ``t_`` is clamped to [0; 1].

        >>> ColorRGB(0, 0, 0).lerp(ColorRGB(255, 100, 10), 0.5)
        <ColorRGB[7F3205]>
        """
        t_ = min(1.0, max(0.0, t_))
        return ColorRGB(
            *(
                int(a + (b - a) * t_)
                for a, b in zip(self.to_rgb(), other.to_rgb())
            )
        )

    def to_sgr(self, bg: bool) -> SequenceSGR:
        return SequenceSGR.init_color_rgb(self._r, self._g, self._b, bg)

    def _key(self) -> t.Tuple:
        return ColorRGB, self._r, self._g, self._b

    def format_value(self, prefix: str = "0x") -> str:
        """
        Format color value as "0xFFFFFF".

        :param prefix: Can be customized.
        """
        return f"{prefix:s}{self.hex_value:06X}"

    def repr_attrs(self, verbose: bool = True) -> str:
        return self.format_value("")


class Colors:
    """
    Color presets: terminal default and 16 basic colors.
    """

    DEFAULT = ColorDefault()

    BLACK = Color16(30, 40, "black")
    RED = Color16(31, 41, "red")
    GREEN = Color16(32, 42, "green")
    YELLOW = Color16(33, 43, "yellow")
    BLUE = Color16(34, 44, "blue")
    MAGENTA = Color16(35, 45, "magenta")
    CYAN = Color16(36, 46, "cyan")
    WHITE = Color16(37, 47, "white")
    GRAY = Color16(90, 100, "gray")
    HI_RED = Color16(91, 101, "hi-red")
    HI_GREEN = Color16(92, 102, "hi-green")
    HI_YELLOW = Color16(93, 103, "hi-yellow")
    HI_BLUE = Color16(94, 104, "hi-blue")
    HI_MAGENTA = Color16(95, 105, "hi-magenta")
    HI_CYAN = Color16(96, 106, "hi-cyan")
    HI_WHITE = Color16(97, 107, "hi-white")


_registry.register(Colors.DEFAULT, "default")
for _preset in vars(Colors).values():
    if isinstance(_preset, Color16):
        _registry.register(_preset, _preset.name)


def resolve_color(subject: CDT | IColor) -> IColor:
    """
    Resolve a color descriptor into `IColor` instance. Names are searched
    case-insensitively through presets, so "hi-red", "HI_RED" and "hiRed"
    all resolve to the same color.

    >>> resolve_color('hi-cyan')
    <Color16[#96,hi-cyan]>
    >>> resolve_color('#ff8000')
    <ColorRGB[FF8000]>
    >>> resolve_color(0x00ff00)
    <ColorRGB[00FF00]>

    :param subject: Color name, hex string or hex value. See `CDT`.
    :raises LookupError: If nothing was found.
    :raises ValueError:  If hex value is out of bounds.
    """
    if isinstance(subject, IColor):
        return subject

    if isinstance(subject, int) and not isinstance(subject, bool):
        return ColorRGB.from_hex(subject)

    if isinstance(subject, str):
        if subject.startswith("#"):
            hex_str = subject[1:]
            if len(hex_str) == 3:
                hex_str = "".join(c * 2 for c in hex_str)
            if re.fullmatch(r"[0-9a-fA-F]{6}", hex_str):
                return ColorRGB.from_hex(int(hex_str, 16))
            raise LookupError(f"Invalid hex color: {subject!r}")
        return _registry.resolve(subject)

    from .common import ArgTypeError

    raise ArgTypeError(type(subject), "subject", fn=resolve_color)


def hex_to_rgb(hex_value: int) -> t.Tuple[int, int, int]:
    """
    Transforms ``hex_value`` in *int* form into a tuple of three *int*
    values corresponding to **red**, **blue** and **green** channels.

    >>> hex_to_rgb(0x80ff80)
    (128, 255, 128)

    :param hex_value: Color value.
    :return: R, G, B channel values correspondingly.
    """
    return (hex_value & 0xFF0000) >> 16, (hex_value & 0xFF00) >> 8, hex_value & 0xFF
