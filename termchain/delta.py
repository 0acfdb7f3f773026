# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Transitions between consecutive styles.

Terminal attribute-disabling codes (22, 24 etc.) are not portable, so instead
of patching individual attributes the transition is either nothing at all
(`EMPTY_DELTA`, the next fragment keeps the current terminal state) or the full
description of the next style (`ExtraStyles`), preceded by a hard reset when
the terminal would otherwise keep something the next style does not have.

    >>> compute_delta(Style(fg='green'), Style(fg='green'))
    <Empty>
    >>> compute_delta(Style(fg='green'), Style(fg='blue', underlined=True))
    <ExtraStyles[blue,underlined]>
    >>> compute_delta(Style(fg='blue', underlined=True), Style(fg='green'))
    <ExtraStyles[green,reset]>

.. testsetup:: *

    from termchain.delta import *
    from termchain.style import Style

"""
from __future__ import annotations

import typing as t
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass

from .common import LogicError
from .style import Style


class StyleDelta(metaclass=ABCMeta):
    """
    Decision of what (if anything) has to be emitted before a fragment.
    """

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def prefix(self, legacy_underline: bool = False) -> str:
        raise NotImplementedError


class Empty(StyleDelta):
    """Nothing to emit. Use the `EMPTY_DELTA` instance."""

    def is_empty(self) -> bool:
        return True

    def prefix(self, legacy_underline: bool = False) -> str:
        return ""

    def __eq__(self, other) -> bool:
        return isinstance(other, Empty)

    def __hash__(self) -> int:
        return hash(Empty)

    def __repr__(self) -> str:
        return "<Empty>"


EMPTY_DELTA = Empty()


class ExtraStyles(StyleDelta):
    """
    Full style to emit.

    :param style: Style the terminal is switched into. Its marker decides
                  whether a hard reset precedes the codes.
    """

    def __init__(self, style: Style):
        self._style = style

    @property
    def style(self) -> Style:
        return self._style

    def is_empty(self) -> bool:
        return False

    def prefix(self, legacy_underline: bool = False) -> str:
        return self._style.prefix(legacy_underline)

    def rebased_on(self, base: Style) -> ExtraStyles:
        """
        Merge the style onto ``base``, but only if it requests a reset:
        the others stack upon whatever ``base`` already set up.
        """
        if not self._style.resets_before_apply:
            return self
        return ExtraStyles(self._style.merge_onto(base))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExtraStyles):
            return False
        return self._style == other._style

    def __hash__(self) -> int:
        return hash((ExtraStyles, self._style))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}[{self._style.repr_attrs(False)}]>"


def compute_delta(previous: Style, next_style: Style) -> StyleDelta:
    """
    Transition from ``previous`` to ``next_style``.

    :return: `EMPTY_DELTA` if the styles are equal, `ExtraStyles` otherwise.
             Its style is marked with ``resets_before_apply`` if ``next_style``
             asks for it, or if ``previous`` has an attribute or a color that
             ``next_style`` lacks.
    """
    if previous == next_style:
        return EMPTY_DELTA
    if next_style.resets_before_apply or next_style.lacks_any_of(previous):
        return ExtraStyles(next_style.with_reset())
    return ExtraStyles(next_style)


@dataclass(frozen=True)
class StyleUpdate:
    """
    Delta that becomes active at fragment ``begins_at`` and holds until the
    next update.
    """

    delta: StyleDelta
    begins_at: int

    def with_delta(self, delta: StyleDelta) -> StyleUpdate:
        return StyleUpdate(delta, self.begins_at)


def style_after(prev: Style, delta: StyleDelta) -> Style:
    """Terminal style after ``delta`` is applied on top of ``prev``."""
    if delta.is_empty():
        return prev
    style = t.cast(ExtraStyles, delta).style
    if style.resets_before_apply:
        return style.with_reset(False)
    return style.merge_onto(prev)


class DeltaCursor(t.Iterator[StyleDelta]):
    """
    Forward-only decoder of sparse `StyleUpdate` list. Yields, for each
    fragment index in turn, the delta most recently declared at or before it;
    indices before the first update (and all of them if there are no updates)
    get `EMPTY_DELTA`.

        >>> updates = [StyleUpdate(ExtraStyles(Style(bold=True)), 1)]
        >>> [d.is_empty() for d in DeltaCursor(updates, 3)]
        [True, False, False]

    :param updates:  Updates with non-decreasing ``begins_at``.
    :param length:   Amount of indices to yield when iterating; unlimited if
                     omitted.
    """

    def __init__(self, updates: t.Sequence[StyleUpdate], length: int = None):
        self._updates = updates
        self._length = length
        self._position = -1
        self._current: StyleDelta = EMPTY_DELTA
        self._next_ix = 0

    @property
    def position(self) -> int:
        return self._position

    def advance_to(self, ix: int) -> StyleDelta:
        """
        Move the cursor to fragment ``ix`` and return the active delta.

        :raises LogicError: If ``ix`` is behind the current position.
        """
        if ix < self._position:
            raise LogicError(f"Cursor cannot move backwards: {self._position} -> {ix}")

        while (
            self._next_ix < len(self._updates)
            and self._updates[self._next_ix].begins_at <= ix
        ):
            self._current = self._updates[self._next_ix].delta
            self._next_ix += 1

        self._position = ix
        return self._current

    def __iter__(self) -> DeltaCursor:
        return self

    def __next__(self) -> StyleDelta:
        ix = self._position + 1
        if self._length is not None and ix >= self._length:
            raise StopIteration
        return self.advance_to(ix)
