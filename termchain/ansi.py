# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Module contains definitions for low-level ANSI escape sequences handling.

There are two kinds of sequences in use: `SequenceSGR`, which changes the way
the text is rendered, and `SequenceOSC`, which carries out-of-band directives
for the terminal emulator (window title, hyperlinks). The latter are used as
*wrappers* -- the opening part goes before the content, the closing one goes
after it:

>>> SequenceSGR(IntCodes.BOLD, IntCodes.RED).assemble()
'\\x1b[1;31m'
>>> TITLE_OPENER.assemble() + 'hello' + ST
'\\x1b]2;hello\\x1b\\\\'

.. testsetup:: *

    from termchain.ansi import *

"""
from __future__ import annotations

import typing as t
from abc import ABCMeta, abstractmethod

ESC = "\x1b"
ST = ESC + "\\"
""" String terminator, closes OSC sequences. """


class Sequence(t.Sized, metaclass=ABCMeta):
    """
    Abstract ancestor of all escape sequences.
    """

    _CONTROL_CHARACTER = ESC
    _SEPARATOR = ";"

    def __init__(self, *params: int | str):
        self._params: t.List[int | str] = list(params)

    @abstractmethod
    def assemble(self) -> str:
        """
        Build up actual byte sequence and return
        as an ASCII-encoded string.
        """
        raise NotImplementedError

    @property
    def params(self) -> t.List[int | str]:
        """Return internal params as array."""
        return self._params

    @classmethod
    @abstractmethod
    def _short_class_name(cls):
        raise NotImplementedError

    def __str__(self) -> str:
        return self.assemble()

    def __len__(self) -> int:
        return len(self.assemble())

    def __bool__(self) -> bool:
        return len(self._params) > 0

    def __eq__(self, other: Sequence):
        if type(self) != type(other):
            return False
        return self._params == other._params

    def __hash__(self) -> int:
        return hash((self._short_class_name(), tuple(self._params)))

    def __repr__(self):
        params = ";".join([str(p) for p in self._params])
        if len(self._params) == 0:
            params = "~"
        return f"{self._short_class_name()}[{params}]"


class SequenceSGR(Sequence):
    """
    Class representing SGR-type escape sequence with varying amount of parameters.

    `SequenceSGR` with zero params was specifically implemented to
    translate into empty string and not into :kbd:`\\e[m`, which would have
    made sense, but also would be very entangling, as this sequence is
    equivalent of :kbd:`\\e[0m` -- hard reset sequence. The empty-string-sequence
    is predefined as `NOOP_SEQ`.

    Params are integer codes, or pre-formatted numeric strings which are kept
    verbatim (e.g. zero-padded ``"04"`` in legacy underline mode).

    It's possible to add of one SGR sequence to another:

    >>> SequenceSGR(31) + SequenceSGR(1) == SequenceSGR(31, 1)
    True

    """

    _INTRODUCER = "["
    _TERMINATOR = "m"

    def __init__(self, *args: int | str | SequenceSGR):
        result: t.List[int | str] = []

        for arg in args:
            if isinstance(arg, SequenceSGR):
                result.extend(arg.params)
            elif isinstance(arg, int):
                result.append(max(0, arg))
            elif isinstance(arg, str) and arg.isdigit():
                result.append(arg)
            else:
                raise TypeError(f"Invalid argument type: {arg!r})")

        super().__init__(*result)

    @classmethod
    def init_color_indexed(cls, idx: int, bg: bool = False) -> SequenceSGR:
        """
        Wrapper for creation of `SequenceSGR` that sets foreground
        (or background) to one of 256-color pallete value.

        :param idx:  Index of the color in the pallete, 0 -- 255.
        :param bg:    Set to *True* to change the background color
                      (default is foreground).
        :return:      `SequenceSGR` with required params.
        """
        cls._validate_extended_color(idx)
        key_code = IntCodes.BG_COLOR_EXTENDED if bg else IntCodes.COLOR_EXTENDED
        return SequenceSGR(key_code, IntCodes.EXTENDED_MODE_256, idx)

    @classmethod
    def init_color_rgb(cls, r: int, g: int, b: int, bg: bool = False) -> SequenceSGR:
        """
        Wrapper for creation of `SequenceSGR` operating in True Color mode (16M).
        Valid values for *r*, *g* and *b* are in range [0; 255].

        :param r:  Red channel value, 0 -- 255.
        :param g:  Green channel value, 0 -- 255.
        :param b:  Blue channel value, 0 -- 255.
        :param bg: Set to *True* to change the background color
                   (default is foreground).
        :return:   `SequenceSGR` with required params.
        """
        [cls._validate_extended_color(color) for color in [r, g, b]]
        key_code = IntCodes.BG_COLOR_EXTENDED if bg else IntCodes.COLOR_EXTENDED
        return SequenceSGR(key_code, IntCodes.EXTENDED_MODE_RGB, r, g, b)

    def assemble(self) -> str:
        if len(self._params) == 0:  # NOOP
            return ""

        return (
            self._CONTROL_CHARACTER
            + self._INTRODUCER
            + self._SEPARATOR.join([str(param) for param in self._params])
            + self._TERMINATOR
        )

    def __add__(self, other: SequenceSGR) -> SequenceSGR:
        self._ensure_sequence(other)
        return SequenceSGR(*self._params, *other._params)

    def __radd__(self, other: SequenceSGR) -> SequenceSGR:
        return other.__add__(self)

    def __hash__(self) -> int:
        return super().__hash__()

    @staticmethod
    def _ensure_sequence(subject: t.Any):
        if not isinstance(subject, SequenceSGR):
            raise TypeError(f"Expected SequenceSGR, got {type(subject)}")

    @staticmethod
    def _validate_extended_color(value: int):
        if value < 0 or value > 255:
            raise ValueError(f"Invalid color value: expected range [0-255], got: {value}")

    @classmethod
    def _short_class_name(cls) -> str:
        return "SGR"


class SequenceOSC(Sequence):
    """
    Operating System Command sequence, :kbd:`\\e]` followed by ``;``-separated
    params and finished with string terminator :kbd:`\\e\\\\`.

    Unterminated instances are openers: the payload (title text, link URL) is
    written right after them and is followed by `ST`.

    >>> SequenceOSC(8, '', '').assemble()
    '\\x1b]8;;\\x1b\\\\'
    >>> SequenceOSC(2, '', terminated=False).assemble()
    '\\x1b]2;'
    """

    _INTRODUCER = "]"

    def __init__(self, *params: int | str, terminated: bool = True):
        super().__init__(*params)
        self._terminated = terminated

    def assemble(self) -> str:
        return (
            self._CONTROL_CHARACTER
            + self._INTRODUCER
            + self._SEPARATOR.join([str(param) for param in self._params])
            + (ST if self._terminated else "")
        )

    def __eq__(self, other: Sequence):
        return super().__eq__(other) and self._terminated == other._terminated

    def __hash__(self) -> int:
        return hash((super().__hash__(), self._terminated))

    @classmethod
    def _short_class_name(cls) -> str:
        return "OSC"


class IntCodes:
    """
    SGR param integer codes used by the library. Attribute switching-off codes
    (22, 23 etc.) are deliberately absent: the renderer always resets the terminal
    state completely and reapplies the required style instead.
    """

    # -- Default attributes and colors --------------------------------------------

    RESET = 0  # hard reset code
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINED = 4
    BLINK = 5
    REVERSED = 7
    HIDDEN = 8
    STRIKETHROUGH = 9

    COLOR_DEFAULT = 39
    BG_COLOR_DEFAULT = 49

    COLOR_EXTENDED = 38
    BG_COLOR_EXTENDED = 48

    # -- Default colors lists -----------------------------------------------------

    LIST_COLORS = list(range(30, 38))
    LIST_BG_COLORS = list(range(40, 48))
    LIST_HI_COLORS = list(range(90, 98))
    LIST_BG_HI_COLORS = list(range(100, 108))

    # -- EXTENDED modifiers -------------------------------------------------------

    EXTENDED_MODE_256 = 5
    EXTENDED_MODE_RGB = 2

    OSC_TITLE = 2
    OSC_HYPERLINK = 8

    LEGACY_UNDERLINED = "04"


NOOP_SEQ = SequenceSGR()
"""
Special sequence in case you *have to* provide one or another SGR, but do
not want any control sequences to be actually included in the output.
``NOOP_SEQ.assemble()`` returns empty string, ``NOOP_SEQ.params``
returns empty list.
"""

RESET_SEQ = SequenceSGR(IntCodes.RESET)
""" Hard reset sequence, :kbd:`\\e[0m`. """

TITLE_OPENER = SequenceOSC(IntCodes.OSC_TITLE, "", terminated=False)
HYPERLINK_OPENER = SequenceOSC(IntCodes.OSC_HYPERLINK, "", "", terminated=False)
HYPERLINK_CLOSER = SequenceOSC(IntCodes.OSC_HYPERLINK, "", "")
