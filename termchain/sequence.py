# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Ordered fragments rendered together with a minimum of control codes.

Along with the fragments, `Sequence` keeps the list of `StyleUpdate` -- one
transition per fragment, computed against the style of the previous fragment.
The list is built lazily and reused as long as possible: appending computes
a single transition, and bulk edits via `Sequence.update_many()` recompute only
the tail starting at the first changed fragment.

    >>> seq = Sequence(Fragment('one', 'red'), Fragment('two', 'red'), 'three')
    >>> seq.render()
    '\\x1b[31monetwo\\x1b[0mthree'

.. testsetup:: *

    from termchain.sequence import *
    from termchain.text import Fragment

"""
from __future__ import annotations

import typing as t

from .common import ArgTypeError, logger
from .delta import (
    DeltaCursor,
    ExtraStyles,
    StyleDelta,
    StyleUpdate,
    compute_delta,
)
from .renderer import IRenderer, RendererManager
from .style import PLAIN_STYLE, Style
from .text import Fragment

EditsT = t.Union[t.Mapping[int, t.Any], t.Iterable[t.Tuple[int, t.Any]]]


class Sequence(t.Sized):
    """
    Container of `Fragment` instances. Strings are converted to plain
    fragments on the way in.

    :param fragments: Initial content.
    :param context:   Style the sequence is nested into. Transitions that
                      require a hard reset are merged onto it.
    """

    def __init__(self, *fragments: Fragment | str, context: Style = None):
        self._fragments: t.List[Fragment] = [self._as_fragment(f) for f in fragments]
        self._updates: t.List[StyleUpdate] = []
        self._context: Style | None = context

    @classmethod
    def from_iterable(cls, fragments: t.Iterable[Fragment | str]) -> Sequence:
        return cls(*fragments)

    @staticmethod
    def _as_fragment(subject: Fragment | str) -> Fragment:
        if isinstance(subject, Fragment):
            return subject
        if isinstance(subject, (str, bytes)):
            return Fragment(subject)
        raise ArgTypeError(type(subject), "subject", fn=Sequence._as_fragment)

    # -- cache ----------------------------------------------------------------

    @property
    def context(self) -> Style | None:
        return self._context

    @property
    def style_updates(self) -> t.Tuple[StyleUpdate, ...]:
        """Transitions, one for each fragment; up to date on every access."""
        return tuple(self._fresh_updates())

    def _fresh_updates(self) -> t.List[StyleUpdate]:
        # length mismatch is the only staleness signal; every edit goes
        # through push() or update_many(), which keep the cache in sync
        if len(self._updates) != len(self._fragments):
            self.recompute_all()
        return self._updates

    def _make_update(self, prev: Style, next_style: Style, begins_at: int) -> StyleUpdate:
        delta = compute_delta(prev, next_style)
        if self._context is not None and isinstance(delta, ExtraStyles):
            delta = delta.rebased_on(self._context)
        return StyleUpdate(delta, begins_at)

    def _walk(self, start: int, prev: Style) -> t.Iterator[StyleUpdate]:
        for ix in range(start, len(self._fragments)):
            style = self._fragments[ix].style
            yield self._make_update(prev, style, ix)
            prev = style

    def _style_before(self, ix: int) -> Style:
        if ix == 0:
            return PLAIN_STYLE
        return self._fragments[ix - 1].style

    def recompute_all(self):
        """Rebuild all transitions starting from the plain style."""
        self._updates = list(self._walk(0, PLAIN_STYLE))
        logger.debug(f"Recomputed {len(self._updates)} style updates")

    # -- editing --------------------------------------------------------------

    def push(self, fragment: Fragment | str) -> Sequence:
        """
        Append a fragment. If the cache is up to date, only one transition
        is computed.
        """
        fragment = self._as_fragment(fragment)
        if len(self._updates) == len(self._fragments):
            update = self._make_update(
                self._style_before(len(self._fragments)),
                fragment.style,
                len(self._fragments),
            )
            self._updates.append(update)
        self._fragments.append(fragment)
        return self

    def extend(self, fragments: t.Iterable[Fragment | str]) -> Sequence:
        """
        Append all the ``fragments``. If that is another sequence (or this
        one), its fragments are taken with the styles they inherit from its
        context.
        """
        if isinstance(fragments, Sequence):
            fragments = fragments._inherited_fragments()
        for fragment in list(fragments):
            self.push(fragment)
        return self

    def _inherited_fragments(self) -> t.List[Fragment]:
        if self._context is None:
            return list(self._fragments)
        return [fragment.rebase_on(self._context) for fragment in self._fragments]

    def update_many(self, edits: EditsT) -> Sequence:
        """
        Replace fragments at specified indices. Indices equal to or greater
        than the current length are appended in ascending order; for repeated
        indices the last one wins.

        Transitions of the fragments before the first changed index are kept
        as is (the same objects), the rest is recomputed; if all the edits are
        appends, this is the same as calling `push()` for each of them.

            >>> seq = Sequence(Fragment('a', 'red'), Fragment('b', 'red'))
            >>> seq.update_many({1: Fragment('b', 'blue'), 5: 'c'}).render()
            '\\x1b[31ma\\x1b[34mb\\x1b[0mc'

        :param edits: Mapping from index to a new fragment, or iterable of
                      ``(index, fragment)`` pairs.
        :raises IndexError: On negative index.
        :return: self
        """
        items = edits.items() if isinstance(edits, t.Mapping) else edits
        resolved: t.Dict[int, Fragment] = {}
        for ix, fragment in items:
            if ix < 0:
                raise IndexError(f"Negative indices are not supported: {ix}")
            resolved[ix] = self._as_fragment(fragment)
        if not resolved:
            return self

        updates = self._fresh_updates()
        original_len = len(self._fragments)
        min_changed_ix = min(resolved.keys())
        appended = [resolved[ix] for ix in sorted(resolved.keys()) if ix >= original_len]

        if min_changed_ix >= original_len:
            return self.extend(appended)

        for ix, fragment in resolved.items():
            if ix < original_len:
                self._fragments[ix] = fragment
        self._fragments.extend(appended)

        kept = updates[:min_changed_ix]
        kept.extend(self._walk(min_changed_ix, self._style_before(min_changed_ix)))
        self._updates = kept
        logger.debug(
            f"Reused {min_changed_ix} style updates, "
            f"recomputed {len(self._fragments) - min_changed_ix}"
        )
        return self

    def rebase_on(self, base: Style) -> Sequence:
        """
        Make the sequence inherit ``base`` style. Only the transitions which
        start with a hard reset are merged onto ``base``; the others are
        applied on top of the previous state, which already includes it.
        The merged context is kept, so that fragments added later are
        rebased as well.

        :return: self
        """
        updates = []
        for update in self._fresh_updates():
            if isinstance(update.delta, ExtraStyles):
                delta = update.delta.rebased_on(base)
                if delta is not update.delta:
                    update = update.with_delta(delta)
            updates.append(update)
        self._updates = updates
        if self._context is None:
            self._context = base
        else:
            self._context = self._context.merge_onto(base)
        logger.debug(f"Rebased {len(self._updates)} style updates on {base!r}")
        return self

    def deltas(self) -> t.Iterator[StyleDelta]:
        """Per-fragment transitions, decoded from the cached updates."""
        return DeltaCursor(self._fresh_updates(), len(self._fragments))

    def clone(self) -> Sequence:
        result = Sequence(context=self._context)
        result._fragments = list(self._fragments)
        result._updates = list(self._updates)
        return result

    __copy__ = clone

    # -- rendering ------------------------------------------------------------

    def render(self, renderer: IRenderer | t.Type[IRenderer] = None) -> str:
        return RendererManager.resolve(renderer).render(self)

    def render_bytes(self, renderer: IRenderer | t.Type[IRenderer] = None) -> bytes:
        return RendererManager.resolve(renderer).render_bytes(self)

    def write_to(self, io: t.IO, renderer: IRenderer | t.Type[IRenderer] = None):
        RendererManager.resolve(renderer).write_to(self, io)

    # -- dunders --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> t.Iterator[Fragment]:
        return iter(self._fragments)

    @t.overload
    def __getitem__(self, item: int) -> Fragment:
        ...

    @t.overload
    def __getitem__(self, item: slice) -> Sequence:
        ...

    def __getitem__(self, item: int | slice) -> Fragment | Sequence:
        if isinstance(item, slice):
            return Sequence(*self._fragments[item], context=self._context)
        return self._fragments[item]

    def __eq__(self, o: t.Any) -> bool:
        if not isinstance(o, Sequence):
            return False
        return self._fragments == o._fragments and self._context == o._context

    __hash__ = None

    def __add__(self, other: str | Fragment | Sequence) -> Sequence:
        return self.clone().__iadd__(other)

    def __iadd__(self, other: str | Fragment | Sequence) -> Sequence:
        if isinstance(other, Sequence):
            return self.extend(other)
        return self.push(other)

    def __radd__(self, other: str | Fragment) -> Sequence:
        return Sequence(other).extend(self)

    def __str__(self) -> str:
        return self.render()

    def __format__(self, format_spec: str) -> str:
        return self.render().__format__(format_spec)

    def __repr__(self) -> str:
        props = [repr(f) for f in self._fragments]
        if self._context is not None:
            props.append(f"context={self._context!r}")
        return f"<{self.__class__.__name__}[{', '.join(props)}]>"

