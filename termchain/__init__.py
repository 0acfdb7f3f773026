# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from .ansi import IntCodes, SequenceSGR, SequenceOSC, NOOP_SEQ, RESET_SEQ
from .color import IColor, ColorDefault, Color16, Color256, ColorRGB, Colors, resolve_color
from .common import LogicError, ArgTypeError
from .style import FormatFlags, Coloring, Style, PLAIN_STYLE, make_style
from .delta import StyleDelta, EMPTY_DELTA, ExtraStyles, StyleUpdate, DeltaCursor, compute_delta
from .renderer import ISink, TextSink, BytesSink, OutputMode, IRenderer, SgrRenderer, RendererManager
from .text import Formatted, OSControl, Title, Link, Fragment
from .sequence import Sequence
from .gradient import Gradient, build_all
from .settings import Settings, SettingsManager

__version__ = "0.1.0"
