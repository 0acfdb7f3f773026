# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Style is a set of format attributes plus optional foreground and background
colors. Styles are immutable values: every builder method returns a new
instance, and two styles are equal when their attributes and colors are equal.

.. testsetup:: *

    from termchain.style import *
    from termchain.color import Colors

"""
from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass

from .ansi import SequenceSGR, IntCodes, RESET_SEQ, NOOP_SEQ
from .color import IColor, resolve_color
from .common import ArgTypeError, FT, CDT

if t.TYPE_CHECKING:
    from .text import Fragment


class FormatFlags(enum.Flag):
    """
    Independent boolean format attributes. Combined with ``|``, compared
    as sets.
    """

    NONE = 0
    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINE = enum.auto()
    BLINK = enum.auto()
    REVERSE = enum.auto()
    HIDDEN = enum.auto()
    STRIKETHROUGH = enum.auto()


_FLAG_CODES: t.List[t.Tuple[FormatFlags, int]] = [
    (FormatFlags.BOLD, IntCodes.BOLD),
    (FormatFlags.DIM, IntCodes.DIM),
    (FormatFlags.ITALIC, IntCodes.ITALIC),
    (FormatFlags.UNDERLINE, IntCodes.UNDERLINED),
    (FormatFlags.BLINK, IntCodes.BLINK),
    (FormatFlags.REVERSE, IntCodes.REVERSED),
    (FormatFlags.HIDDEN, IntCodes.HIDDEN),
    (FormatFlags.STRIKETHROUGH, IntCodes.STRIKETHROUGH),
]

_FLAG_NAMES: t.Dict[str, FormatFlags] = {
    "bold": FormatFlags.BOLD,
    "dim": FormatFlags.DIM,
    "italic": FormatFlags.ITALIC,
    "underlined": FormatFlags.UNDERLINE,
    "blink": FormatFlags.BLINK,
    "reversed": FormatFlags.REVERSE,
    "hidden": FormatFlags.HIDDEN,
    "strikethrough": FormatFlags.STRIKETHROUGH,
}


@dataclass(frozen=True)
class Coloring:
    """Foreground and background colors, each one is optional."""

    fg: IColor | None = None
    bg: IColor | None = None

    def is_empty(self) -> bool:
        return self.fg is None and self.bg is None


class Style:
    """
    Create new text render descriptor.

    Both ``fg`` and ``bg`` can be specified as existing `IColor` instance as well
    as plain *str* or *int* (for the details see `resolve_color()`).

        >>> Style(fg='green', bold=True)
        <Style[green,bold]>
        >>> Style(bg=0x0000ff)
        <Style[bg=0000FF]>
        >>> Style()
        <Style[plain]>

    Attribute merging from ``fallback`` works this way:

        - If constructor argument is *not* empty (``True``, ``False``, `IColor`
          etc.), keep it as attribute value.
        - If constructor argument is empty (*None*), take the value from
          ``fallback``'s corresponding attribute.

    ``resets_before_apply`` marker tells the renderer to emit a hard reset
    before the style codes; it is also what `Sequence.rebase_on()` looks
    for. The marker never participates in comparison:

        >>> Style(bold=True) == Style(bold=True, resets_before_apply=True)
        True

    .. note ::
        All arguments except ``fallback``, ``fg`` and ``bg`` are *kwonly*-type args.

    :param fallback:      Copy unset attributes from specified fallback style.
    :param fg:            Foreground (i.e., text) color.
    :param bg:            Background color.
    :param bold:          Bold or increased intensity.
    :param dim:           Faint, decreased intensity.
    :param italic:        Italic.
    :param underlined:    Underline.
    :param blink:         Blinking effect.
    :param reversed:      Swap foreground and background colors.
    :param hidden:        Invisible text.
    :param strikethrough: Crossed-out text.
    :param resets_before_apply:
                          Precede the style codes with a hard reset.
    """

    __slots__ = ("_flags", "_coloring", "_resets_before_apply")

    def __init__(
        self,
        fallback: Style = None,
        fg: CDT | IColor = None,
        bg: CDT | IColor = None,
        *,
        bold: bool = None,
        dim: bool = None,
        italic: bool = None,
        underlined: bool = None,
        blink: bool = None,
        reversed: bool = None,
        hidden: bool = None,
        strikethrough: bool = None,
        resets_before_apply: bool = False,
    ):
        if fallback is not None and not isinstance(fallback, Style):
            raise ArgTypeError(type(fallback), "fallback", fn=Style.__init__)

        flags = fallback.flags if fallback else FormatFlags.NONE
        attrs = dict(
            bold=bold,
            dim=dim,
            italic=italic,
            underlined=underlined,
            blink=blink,
            reversed=reversed,
            hidden=hidden,
            strikethrough=strikethrough,
        )
        for name, value in attrs.items():
            if value is None:
                continue
            if value:
                flags |= _FLAG_NAMES[name]
            else:
                flags &= ~_FLAG_NAMES[name]

        fg_color = _resolve_optional(fg)
        bg_color = _resolve_optional(bg)
        if fallback is not None:
            fg_color = fg_color or fallback.fg
            bg_color = bg_color or fallback.bg

        self._flags: FormatFlags = flags
        self._coloring: Coloring = Coloring(fg_color, bg_color)
        self._resets_before_apply: bool = bool(resets_before_apply)

    @classmethod
    def _make(
        cls, flags: FormatFlags, coloring: Coloring, resets_before_apply: bool
    ) -> Style:
        inst = cls.__new__(cls)
        inst._flags = flags
        inst._coloring = coloring
        inst._resets_before_apply = resets_before_apply
        return inst

    # -- builders -------------------------------------------------------------

    def set(self, *flags: FormatFlags) -> Style:
        """
        Return new style with specified attributes turned on, everything else
        is kept.

            >>> Style(fg='red').set(FormatFlags.BOLD, FormatFlags.ITALIC)
            <Style[red,bold,italic]>
        """
        result = self._flags
        for flag in flags:
            result |= flag
        return self._make(result, self._coloring, self._resets_before_apply)

    def unset(self, *flags: FormatFlags) -> Style:
        result = self._flags
        for flag in flags:
            result &= ~flag
        return self._make(result, self._coloring, self._resets_before_apply)

    def with_fg(self, color: CDT | IColor | None) -> Style:
        """Overwrite foreground color; *None* removes it."""
        coloring = Coloring(_resolve_optional(color), self._coloring.bg)
        return self._make(self._flags, coloring, self._resets_before_apply)

    def with_bg(self, color: CDT | IColor | None) -> Style:
        """Overwrite background color; *None* removes it."""
        coloring = Coloring(self._coloring.fg, _resolve_optional(color))
        return self._make(self._flags, coloring, self._resets_before_apply)

    def with_reset(self, value: bool = True) -> Style:
        return self._make(self._flags, self._coloring, value)

    def merge_onto(self, parent: Style) -> Style:
        """
        Put this style on top of ``parent``. Format attributes are
        OR-merged (a child never turns off an attribute of the parent), each
        color channel is the child's one if it is set, and the parent's one
        otherwise. The marker is kept from the child.

            >>> Style(bold=True).merge_onto(Style(fg='red', italic=True))
            <Style[red,bold,italic]>

        :param parent: Enclosing (ambient) style.
        """
        coloring = Coloring(
            self._coloring.fg if self._coloring.fg is not None else parent.fg,
            self._coloring.bg if self._coloring.bg is not None else parent.bg,
        )
        return self._make(
            self._flags | parent.flags, coloring, self._resets_before_apply
        )

    # -- queries --------------------------------------------------------------

    @property
    def flags(self) -> FormatFlags:
        return self._flags

    @property
    def coloring(self) -> Coloring:
        return self._coloring

    @property
    def fg(self) -> IColor | None:
        return self._coloring.fg

    @property
    def bg(self) -> IColor | None:
        return self._coloring.bg

    @property
    def resets_before_apply(self) -> bool:
        return self._resets_before_apply

    @property
    def bold(self) -> bool:
        return FormatFlags.BOLD in self._flags

    @property
    def dim(self) -> bool:
        return FormatFlags.DIM in self._flags

    @property
    def italic(self) -> bool:
        return FormatFlags.ITALIC in self._flags

    @property
    def underlined(self) -> bool:
        return FormatFlags.UNDERLINE in self._flags

    @property
    def blink(self) -> bool:
        return FormatFlags.BLINK in self._flags

    @property
    def reversed(self) -> bool:
        return FormatFlags.REVERSE in self._flags

    @property
    def hidden(self) -> bool:
        return FormatFlags.HIDDEN in self._flags

    @property
    def strikethrough(self) -> bool:
        return FormatFlags.STRIKETHROUGH in self._flags

    @property
    def is_plain(self) -> bool:
        """*True* if there are no attributes and no colors set."""
        return self._flags == FormatFlags.NONE and self._coloring.is_empty()

    def lacks_any_of(self, other: Style) -> bool:
        """
        *True* if ``other`` has a format attribute or a color channel that is
        missing in this style, i.e. the terminal cannot get from ``other`` to
        this style without a hard reset.
        """
        if other.flags & ~self._flags:
            return True
        if other.fg is not None and self.fg is None:
            return True
        return other.bg is not None and self.bg is None

    # -- encoding -------------------------------------------------------------

    def codes(self, legacy_underline: bool = False) -> t.List[str]:
        """
        SGR params in fixed order: format attributes first, then foreground
        color, then background color.

            >>> Style(fg='blue', underlined=True).codes()
            ['4', '34']
            >>> Style(fg='blue', underlined=True).codes(legacy_underline=True)
            ['04', '34']
        """
        result = []
        for flag, code in _FLAG_CODES:
            if flag not in self._flags:
                continue
            if flag is FormatFlags.UNDERLINE and legacy_underline:
                result.append(IntCodes.LEGACY_UNDERLINED)
            else:
                result.append(str(code))
        if self.fg is not None:
            result.extend(str(c) for c in self.fg.codes(False))
        if self.bg is not None:
            result.extend(str(c) for c in self.bg.codes(True))
        return result

    def to_sgr(self, legacy_underline: bool = False) -> SequenceSGR:
        return SequenceSGR(*self.codes(legacy_underline))

    def prefix(self, legacy_underline: bool = False) -> str:
        """
        Escape codes that switch the terminal into this style: a hard reset if
        the marker is set, then all the style codes (if any).

            >>> Style(fg='green').prefix()
            '\\x1b[32m'
            >>> Style(resets_before_apply=True).prefix()
            '\\x1b[0m'
        """
        result = self.to_sgr(legacy_underline).assemble()
        if self._resets_before_apply:
            result = RESET_SEQ.assemble() + result
        return result

    def suffix(self) -> str:
        """Hard reset, or nothing for a plain style."""
        if self.is_plain:
            return NOOP_SEQ.assemble()
        return RESET_SEQ.assemble()

    def infix(self, next_style: Style, legacy_underline: bool = False) -> str:
        """
        Minimal escape codes required to switch from this style to
        ``next_style``.

            >>> Style(fg='green').infix(Style(fg='blue', underlined=True))
            '\\x1b[4;34m'
            >>> Style(fg='blue', underlined=True).infix(Style(fg='green'))
            '\\x1b[0m\\x1b[32m'
        """
        from .delta import compute_delta

        return compute_delta(self, next_style).prefix(legacy_underline)

    def paint(self, content: t.Any) -> Fragment:
        """
        Make a `Fragment` out of ``content`` rendered with this style. Nested
        sequences are rebased onto this style.
        """
        from .text import Fragment

        return Fragment(content, self)

    # -- dunders --------------------------------------------------------------

    def __eq__(self, other: Style) -> bool:
        if not isinstance(other, Style):
            return False
        return self._flags == other._flags and self._coloring == other._coloring

    def __hash__(self) -> int:
        return hash((self._flags, self._coloring))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}[{self.repr_attrs(False)}]>"

    def repr_attrs(self, verbose: bool) -> str:
        props_set = []
        if self.fg is not None:
            props_set.append(self.fg.repr_attrs(verbose))
        if self.bg is not None:
            props_set.append("bg=" + self.bg.repr_attrs(verbose))
        for name, flag in _FLAG_NAMES.items():
            if flag in self._flags:
                props_set.append(name)
        if not props_set:
            props_set.append("plain")
        if self._resets_before_apply:
            props_set.append("reset")
        return ",".join(props_set)


def _resolve_optional(arg: CDT | IColor | None) -> IColor | None:
    if arg is None:
        return None
    if isinstance(arg, (str, int, IColor)):
        return resolve_color(arg)
    raise ArgTypeError(type(arg), "arg", fn=_resolve_optional)


PLAIN_STYLE = Style()
""" Style without attributes and colors, renders to no escape codes at all. """


def make_style(fmt: FT = None) -> Style:
    """
    General `Style` constructor. Accepts a variety of argument types:

        - `CDT` (*str* or *int*) or `IColor`
            This argument type implies the creation of basic `Style` with
            the only attribute set being `fg` (i.e., text color). For the
            details on color resolving see `resolve_color()`.

        - `Style`
            Existing style instance. Return it as is.

        - *None*
            Return `PLAIN_STYLE`.

    :param FT fmt: See `FT`.
    """
    if fmt is None:
        return PLAIN_STYLE
    if isinstance(fmt, Style):
        return fmt
    if isinstance(fmt, (str, int, IColor)):
        return Style(fg=fmt)
    raise ArgTypeError(type(fmt), "fmt", fn=make_style)
