# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Output formatters. Default global renderer type is `SgrRenderer`.

Renderer walks the fragments of a sequence together with their transitions,
emits the style prefixes, wraps the content into OSC directives if required
and finally decides whether the trailing hard reset is needed.

.. testsetup:: *

    from termchain.renderer import *
    from termchain.sequence import Sequence
    from termchain.style import Style
    from termchain.text import Fragment

"""
from __future__ import annotations

import enum
import io
import typing as t
from abc import abstractmethod, ABCMeta

from .ansi import RESET_SEQ, TITLE_OPENER, HYPERLINK_OPENER, HYPERLINK_CLOSER, ST
from .common import ArgTypeError, logger, measure
from .delta import StyleDelta, ExtraStyles, style_after
from .settings import SettingsManager
from .style import Style, PLAIN_STYLE

if t.TYPE_CHECKING:
    from .sequence import Sequence
    from .text import Fragment, ContentT

T = t.TypeVar("T", bound="IRenderer")

RenderableT = t.Union["Sequence", "Fragment", str]


class RendererManager:
    """
    Class for global rendering mode setup.

    All the methods with the ``renderer`` argument (e.g., `Sequence.render()`)
    use the global default one if said argument is omitted or set to *None*.

        >>> RendererManager.set_default(SgrRenderer(OutputMode.NO_ANSI))
        >>> Fragment('text', 'red').render()
        'text'
        >>> RendererManager.set_default()

    """

    _default: IRenderer = None

    @classmethod
    def set_default(cls, renderer: IRenderer | t.Type[IRenderer] = None):
        """
        Select a global renderer.

        :param renderer:
            Default renderer to use globally. Calling this method without arguments
            will result in library default renderer `SgrRenderer` being set as default.

            You can specify either the renderer class, in which case manager will
            instantiate it with the default parameters, or provide already instantiated
            and set up renderer, which will be registred as global.
        """
        if isinstance(renderer, type):
            renderer = renderer()
        cls._default = renderer or SgrRenderer()

    @classmethod
    def get_default(cls) -> IRenderer:
        """
        Get global renderer instance (`SgrRenderer`, or the one provided earlier with
        `set_default()`).
        """
        if cls._default is None:
            cls.set_default()
        return cls._default

    @classmethod
    def resolve(cls, renderer: IRenderer | t.Type[IRenderer] = None) -> IRenderer:
        """Instantiate renderer class, or pick the default one if it is *None*."""
        if isinstance(renderer, type):
            return renderer()
        if renderer is None:
            return cls.get_default()
        return renderer


class ISink(metaclass=ABCMeta):
    """
    Output destination. Control sequences and content are written separately,
    so that the sink could handle them differently.
    """

    @abstractmethod
    def write_control(self, seq: str):
        raise NotImplementedError

    @abstractmethod
    def write_content(self, content: str | bytes):
        raise NotImplementedError


class TextSink(ISink):
    """
    Sink writing into text stream.

    :param io: Text stream, e.g. `sys.stdout` or `io.StringIO`.
    :raises ArgTypeError: On attempt to write *bytes* content.
    """

    def __init__(self, io: t.TextIO):
        self._io = io

    def write_control(self, seq: str):
        self._io.write(seq)

    def write_content(self, content: str | bytes):
        if isinstance(content, bytes):
            raise ArgTypeError(type(content), "content", fn=self.write_content)
        self._io.write(content)


class BytesSink(ISink):
    """
    Sink writing into binary stream. Text content and control sequences are
    encoded on the way.

    :param io:       Binary stream, e.g. `sys.stdout.buffer` or `io.BytesIO`.
    :param encoding: Text encoding.
    """

    def __init__(self, io: t.BinaryIO, encoding: str = "utf-8"):
        self._io = io
        self._encoding = encoding

    def write_control(self, seq: str):
        self._io.write(seq.encode(self._encoding))

    def write_content(self, content: str | bytes):
        if isinstance(content, str):
            content = content.encode(self._encoding)
        self._io.write(content)


class IRenderer(metaclass=ABCMeta):
    """Renderer interface."""

    @abstractmethod
    def write(self, subject: RenderableT, sink: ISink):
        """
        Write ``subject`` into the ``sink``. Errors of the underlying stream are
        propagated as is, the part of output written before the failure stays
        in the stream.
        """

    @abstractmethod
    def clone(self: T, *args: t.Any, **kwargs: t.Any) -> T:
        """
        Make a copy of the renderer with the same setup.

        :rtype: self
        """

    def render(self, subject: RenderableT) -> str:
        buffer = io.StringIO()
        self.write(subject, TextSink(buffer))
        return buffer.getvalue()

    def render_bytes(self, subject: RenderableT) -> bytes:
        buffer = io.BytesIO()
        self.write(subject, BytesSink(buffer, self._get_encoding()))
        return buffer.getvalue()

    def write_to(self, subject: RenderableT, stream: t.IO | ISink):
        """Pick a sink depending on ``stream`` type and write ``subject`` into it."""
        if isinstance(stream, ISink):
            sink = stream
        elif isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
            sink = BytesSink(stream, self._get_encoding())
        else:
            sink = TextSink(stream)
        self.write(subject, sink)

    def _get_encoding(self) -> str:
        return SettingsManager.get().encoding

    def __repr__(self):
        return self.__class__.__qualname__ + "[]"


class OutputMode(enum.Enum):
    """
    Determines whether control sequences are allowed in the output.
    """

    ANSI = "ansi"
    """
    Styles, hyperlinks and titles are rendered as escape sequences.
    """
    NO_ANSI = "no_ansi"
    """
    The renderer discards all format information completely and writes content
    only. Title fragments are skipped, links become plain text.
    """


class _TrailState(enum.Enum):
    NO_STYLE_YET = enum.auto()
    LAST_WAS_PLAIN = enum.auto()
    LAST_WAS_STYLED = enum.auto()


class _Walk:
    """
    State of one rendering pass. Keeps track of what the terminal is showing
    right now, which can differ from what the transitions of the current
    level assume, if the previous fragment contained a nested sequence.
    """

    def __init__(self, sink: ISink, legacy_underline: bool):
        self.sink = sink
        self.legacy_underline = legacy_underline
        self.trail = _TrailState.NO_STYLE_YET
        self.term: Style = PLAIN_STYLE

    def emit(self, style: Style, target: Style):
        self.sink.write_control(style.prefix(self.legacy_underline))
        self.term = target
        if self.term.is_plain:
            self.trail = _TrailState.LAST_WAS_PLAIN
        else:
            self.trail = _TrailState.LAST_WAS_STYLED

    def apply(self, delta: StyleDelta, expected: Style, ambient: Style | None) -> Style:
        """
        Switch the terminal to the next fragment style.

        :param delta:    Transition from the previous fragment of the same level.
        :param expected: Style the previous fragment of the same level was
                         rendered with.
        :param ambient:  Style of the enclosing fragment, if any.
        :return: Style of the next fragment.
        """
        if ambient is not None and isinstance(delta, ExtraStyles):
            delta = delta.rebased_on(ambient)
        target = style_after(expected, delta)

        if self.term == expected:
            if isinstance(delta, ExtraStyles):
                self.emit(delta.style, target)
        elif self.term != target:
            # nested content left the terminal in some other state
            self.emit(target.with_reset(), target)
        return target


class SgrRenderer(IRenderer):
    """
    Default renderer. Transforms the transitions between fragments into
    SGR sequences and wraps titles and hyperlinks into OSC sequences.

        >>> seq = Sequence(Fragment('Before link. ', 'green'),
        ...                Fragment('Link', Style(fg='blue', underlined=True))
        ...                    .with_link('https://example.com'))
        >>> SgrRenderer().render(seq)
        '\\x1b[32mBefore link. \\x1b[4;34m\\x1b]8;;https://example.com\\x1b\\\\Link\\x1b]8;;\\x1b\\\\\\x1b[0m'
        >>> SgrRenderer(OutputMode.NO_ANSI).render(seq)
        'Before link. Link'

    A hard reset is appended to the output only if the last style emitted was
    not plain, so that unstyled text at the end never gets reset artifacts.

    :param output_mode:      See `OutputMode`. Default value is taken from settings.
    :param legacy_underline: Render underline as ``04`` instead of ``4`` for old
                             terminal profiles. Default value is taken from settings.
    :param encoding:         Encoding for `render_bytes()`. Default value is
                             taken from settings.
    """

    def __init__(
        self,
        output_mode: OutputMode | str = None,
        legacy_underline: bool = None,
        encoding: str = None,
    ):
        settings = SettingsManager.get()
        if output_mode is None:
            output_mode = settings.output_mode
        if legacy_underline is None:
            legacy_underline = settings.legacy_underline
        if encoding is None:
            encoding = settings.encoding

        self._output_mode: OutputMode = OutputMode(output_mode)
        self._legacy_underline: bool = bool(legacy_underline)
        self._encoding: str = encoding

        logger.debug(
            f"Instantiated {self.__class__.__qualname__}"
            f"[{self._output_mode.name}, legacy_underline={self._legacy_underline}]"
        )

    @property
    def output_mode(self) -> OutputMode:
        return self._output_mode

    @property
    def is_format_allowed(self) -> bool:
        return self._output_mode is not OutputMode.NO_ANSI

    def clone(self) -> SgrRenderer:
        return SgrRenderer(self._output_mode, self._legacy_underline, self._encoding)

    def _get_encoding(self) -> str:
        return self._encoding

    @measure("Rendered")
    def write(self, subject: RenderableT, sink: ISink):
        seq = self._as_sequence(subject)

        if not self.is_format_allowed:
            self._write_plain(seq, sink)
            return

        walk = _Walk(sink, self._legacy_underline)
        self._write_sequence(walk, seq, None)
        if walk.trail is _TrailState.LAST_WAS_STYLED:
            sink.write_control(RESET_SEQ.assemble())

    def _as_sequence(self, subject: RenderableT) -> Sequence:
        from .sequence import Sequence
        from .text import Fragment

        if isinstance(subject, Sequence):
            return subject
        if isinstance(subject, (Fragment, str)):
            return Sequence(subject)
        raise ArgTypeError(type(subject), "subject", fn=self.write)

    def _write_sequence(self, walk: _Walk, seq: Sequence, ambient: Style | None):
        from .text import Link

        expected = ambient or PLAIN_STYLE
        for fragment, delta in zip(seq, seq.deltas()):
            expected = walk.apply(delta, expected, ambient)
            oscontrol = fragment.oscontrol

            if fragment.is_title:
                walk.sink.write_control(TITLE_OPENER.assemble())
                self._write_content_plain(fragment.content, walk.sink)
                walk.sink.write_control(ST)
            elif isinstance(oscontrol, Link):
                walk.sink.write_control(HYPERLINK_OPENER.assemble())
                self._write_content_plain(oscontrol.url, walk.sink)
                walk.sink.write_control(ST)
                self._write_content(walk, fragment.content, expected)
                walk.sink.write_control(HYPERLINK_CLOSER.assemble())
            else:
                self._write_content(walk, fragment.content, expected)

    def _write_content(self, walk: _Walk, content: ContentT, ambient: Style):
        from .sequence import Sequence

        if isinstance(content, Sequence):
            self._write_sequence(walk, content, ambient)
            return
        self._write_content_plain(content, walk.sink)

    def _write_content_plain(self, content: ContentT, sink: ISink, with_titles: bool = True):
        from .sequence import Sequence
        from .text import Formatted

        if isinstance(content, Sequence):
            self._write_plain(content, sink, with_titles)
        elif isinstance(content, Formatted):
            sink.write_content(content.evaluate())
        else:
            sink.write_content(content)

    def _write_plain(self, seq: Sequence, sink: ISink, with_titles: bool = False):
        for fragment in seq:
            if fragment.is_title and not with_titles:
                continue
            self._write_content_plain(fragment.content, sink, with_titles)

    def __repr__(self):
        return f"{self.__class__.__qualname__}[{self._output_mode.name}]"
