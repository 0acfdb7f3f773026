# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
"Front-end" module of the library. `Fragment` is a piece of content painted
with a `Style`, optionally wrapped into an out-of-band terminal directive
(window title or hyperlink).

    >>> Fragment('Link', 'red').with_link('https://example.com').render()
    '\\x1b[31m\\x1b]8;;https://example.com\\x1b\\\\Link\\x1b]8;;\\x1b\\\\\\x1b[0m'

.. testsetup:: *

    from termchain.text import *

"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass

from .common import ArgTypeError, FT
from .renderer import IRenderer, RendererManager
from .style import Style, make_style

if t.TYPE_CHECKING:
    from .sequence import Sequence


class Formatted:
    """
    Deferred ``str.format()`` call, evaluated every time the content is
    rendered.

        >>> Fragment(Formatted('{}/{total}', 3, total=5)).render()
        '3/5'

    :param template: Format string.
    :param args:     Positional arguments for the template.
    :param kwargs:   Keyword arguments for the template.
    """

    def __init__(self, template: str, *args: t.Any, **kwargs: t.Any):
        self._template = template
        self._args = args
        self._kwargs = kwargs

    def evaluate(self) -> str:
        return self._template.format(*self._args, **self._kwargs)

    def __str__(self) -> str:
        return self.evaluate()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Formatted):
            return False
        return (self._template, self._args, self._kwargs) == (
            other._template,
            other._args,
            other._kwargs,
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}[{self._template!r}]>"


ContentT = t.Union[str, bytes, Formatted, "Sequence"]
""" Anything that can be a fragment content. """

UrlT = t.Union[str, bytes, Formatted]


class OSControl:
    """
    Out-of-band terminal directive wrapping fragment content instead of
    affecting the way it looks.
    """


@dataclass(frozen=True)
class Title(OSControl):
    """Set terminal window title to the fragment content."""

    def __repr__(self) -> str:
        return "<Title>"


@dataclass(frozen=True)
class Link(OSControl):
    """Make the fragment content a hyperlink to ``url``."""

    url: UrlT

    def __post_init__(self):
        if not isinstance(self.url, (str, bytes, Formatted)):
            raise ArgTypeError(type(self.url), "url")

    def __repr__(self) -> str:
        return f"<Link[{self.url!r}]>"


def _normalize_content(content: t.Any, style: Style) -> t.Tuple[t.Any, ContentT]:
    """Return content as given (nested one copied) and content to render."""
    from .sequence import Sequence

    if isinstance(content, (str, bytes, Formatted)):
        return content, content
    if isinstance(content, Fragment):
        content = Sequence(content)
    if isinstance(content, Sequence):
        source = content.clone()
        return source, source.clone().rebase_on(style)
    raise ArgTypeError(type(content), "content", fn=Fragment.__init__)


class Fragment:
    """
    <Immutable>

    Piece of content with a style and an optional `OSControl`. Every
    ``with_*`` method returns a new fragment.

    Nested `Sequence` (or another `Fragment`, which is wrapped into a one-element
    sequence) as content inherits this fragment's style: its attributes are
    OR-merged onto it and colors fall back to it.

        >>> inner = Fragment('bold', Style(bold=True))
        >>> Fragment(inner, Style(fg='red', italic=True)).render()
        '\\x1b[3;31m\\x1b[1mbold\\x1b[0m'

    Can be formatted with f-strings, format spec is applied to the rendered
    result:

        >>> f"{Fragment('1234'):*^8s}"
        '**1234**'

    :param content:   `str`, `bytes`, `Formatted`, `Sequence` or `Fragment`.
    :param fmt:       Style or color, see `make_style()`.
    :param oscontrol: Out-of-band wrapper for the content.
    """

    def __init__(self, content: t.Any = "", fmt: FT = None, oscontrol: OSControl = None):
        if oscontrol is not None and not isinstance(oscontrol, OSControl):
            raise ArgTypeError(type(oscontrol), "oscontrol", fn=Fragment.__init__)
        self._style: Style = make_style(fmt)
        # nested content is kept as given as well, to be rebased onto another style
        self._source_content, self._content = _normalize_content(content, self._style)
        self._oscontrol: OSControl | None = oscontrol

    @classmethod
    def title(cls, content: t.Any, fmt: FT = None) -> Fragment:
        """
        Make a fragment setting the terminal window title. Title content is
        never styled.

            >>> Fragment.title('hello').render()
            '\\x1b]2;hello\\x1b\\\\'
        """
        return cls(content, fmt, Title())

    @property
    def content(self) -> ContentT:
        return self._content

    @property
    def style(self) -> Style:
        return self._style

    @property
    def oscontrol(self) -> OSControl | None:
        return self._oscontrol

    @property
    def is_title(self) -> bool:
        return isinstance(self._oscontrol, Title)

    def with_link(self, url: UrlT) -> Fragment:
        return Fragment(self._source_content, self._style, Link(url))

    hyperlink = with_link

    def with_style(self, fmt: FT) -> Fragment:
        return Fragment(self._source_content, fmt, self._oscontrol)

    def rebase_on(self, base: Style) -> Fragment:
        """Put fragment style on top of ``base``, see `Style.merge_onto()`."""
        return Fragment(self._source_content, self._style.merge_onto(base), self._oscontrol)

    def render(self, renderer: IRenderer | t.Type[IRenderer] = None) -> str:
        return RendererManager.resolve(renderer).render(self)

    def render_bytes(self, renderer: IRenderer | t.Type[IRenderer] = None) -> bytes:
        return RendererManager.resolve(renderer).render_bytes(self)

    def write_to(self, io: t.IO, renderer: IRenderer | t.Type[IRenderer] = None):
        RendererManager.resolve(renderer).write_to(self, io)

    def __eq__(self, o: t.Any) -> bool:
        if not isinstance(o, Fragment):
            return False
        return (
            self._content == o._content
            and self._style == o._style
            and self._oscontrol == o._oscontrol
        )

    def __hash__(self) -> int:
        return hash((self._style, self._oscontrol))

    def __repr__(self) -> str:
        props = [repr(self._content), self._style.repr_attrs(False)]
        if self._oscontrol is not None:
            props.append(repr(self._oscontrol))
        return f"<{self.__class__.__name__}[{', '.join(props)}]>"

    def __str__(self) -> str:
        return self.render()

    def __format__(self, format_spec: str) -> str:
        return self.render().__format__(format_spec)

    def __add__(self, other: str | Fragment | Sequence) -> Sequence:
        from .sequence import Sequence

        return Sequence(self) + other

    def __radd__(self, other: str | Fragment) -> Sequence:
        from .sequence import Sequence

        return Sequence(other, self)

