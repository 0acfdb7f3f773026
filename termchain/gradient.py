# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Linear color gradients. Text is split into one fragment per character, so
the usual transition rules apply: neighbouring characters of the same color
do not get separate codes, and there is exactly one reset at the end.

    >>> g = Gradient(ColorRGB(255, 0, 0), ColorRGB(0, 0, 255))
    >>> g.build('ab').render()
    '\\x1b[38;2;255;0;0ma\\x1b[38;2;127;0;127mb\\x1b[0m'

.. testsetup:: *

    from termchain.gradient import *
    from termchain.color import ColorRGB

"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass

from .color import ColorRGB, IColor
from .sequence import Sequence
from .style import Style
from .text import Fragment

_BLACK = ColorRGB(0, 0, 0)


@dataclass(frozen=True)
class Gradient:
    """
    Gradient between two color stops.

    :param start: Color at ``t`` = 0.
    :param end:   Color at ``t`` = 1.
    """

    start: ColorRGB
    end: ColorRGB

    @classmethod
    def from_colors(cls, start: IColor, end: IColor) -> Gradient:
        """Any color which is not `ColorRGB` is replaced with black."""
        return cls(
            start if isinstance(start, ColorRGB) else _BLACK,
            end if isinstance(end, ColorRGB) else _BLACK,
        )

    def at(self, t_: float) -> ColorRGB:
        return self.start.lerp(self.end, t_)

    def reverse(self) -> Gradient:
        return Gradient(self.end, self.start)

    def build(self, text: str, bg: bool = False) -> Sequence:
        """
        Paint every character of ``text`` with the color at its relative
        position.

        :param text: Source string.
        :param bg:   Apply gradient to background instead of foreground.
        """
        return Sequence.from_iterable(
            Fragment(char, Style(bg=color) if bg else Style(fg=color))
            for char, color in zip(text, self._steps(len(text)))
        )

    def _steps(self, length: int) -> t.Iterator[ColorRGB]:
        for i in range(length):
            yield self.at(i / length)


def build_all(text: str, fg: Gradient, bg: Gradient) -> Sequence:
    """Apply two gradients to ``text`` at once: one to the text and one to the background."""
    return Sequence.from_iterable(
        Fragment(char, Style(fg=fg_color, bg=bg_color))
        for char, fg_color, bg_color in zip(text, fg._steps(len(text)), bg._steps(len(text)))
    )
