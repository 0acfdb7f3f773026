# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
String filtering module.

Main idea is to provide a common interface for string filtering, that can make
possible working with filters like with objects rather than with functions/lambdas.
Mostly used for inspecting the rendered output.

.. testsetup:: *

    from termchain.util.string_filter import apply_filters, ReplaceSGR, ReplaceOSC, strip_ansi

"""
from __future__ import annotations

import re
from functools import reduce
from re import Match, Pattern
from typing import Generic, AnyStr, Type, Callable


SGR_REGEXP = re.compile(r'(\x1b)(\[)(([0-9;])*)(m)')
OSC_REGEXP = re.compile(r'(\x1b)(\])([^\x1b\x07]*)(\x1b\\|\x07)?')


def apply_filters(s: AnyStr, *args: StringFilter|Type[StringFilter]) -> AnyStr:
    """
    Method for applying dynamic filter list to a target string.
    Example (will replace all :kbd:`ESC` control characters to :kbd:`E` and
    thus make SGR params visible):

    >>> apply_filters('\\x1b[31mtest\\x1b[0m', ReplaceSGR(r'E\\2\\3\\5'))
    'E[31mtestE[0m'

    :param AnyStr s: String to filter.
    :param args:     `StringFilter` instance(s) or ``StringFilter`` class(es).
    :return:         Filtered ``s``.
    """
    filters = map(lambda t: t() if isinstance(t, type) else t, args)
    return reduce(lambda s_, f: f.apply(s_), filters, s)


class StringFilter(Generic[AnyStr]):
    """
    Common string modifier interface.
    """
    def __init__(
        self,
        pattern: AnyStr|Pattern[AnyStr],
        repl: AnyStr|Callable[[Match], AnyStr]
    ):
        if isinstance(pattern, (str, bytes)):
            self._regex = re.compile(pattern)
        else:
            self._regex = pattern
        self._repl = repl

    def __call__(self, s: AnyStr) -> AnyStr:
        """ Can be used instead of `apply()` """
        return self.apply(s)

    def apply(self, s: AnyStr) -> AnyStr:
        """ Apply filter to ``s`` string. """
        return self._regex.sub(self._repl, s)


class ReplaceSGR(StringFilter[str]):
    """
    Find all SGR seqs (e.g. :kbd:`ESC[1;4m`) and replace with given string.

    :param repl:
        Replacement, can contain regexp groups (see :meth:`apply_filters()`).
    """
    def __init__(self, repl: str = ''):
        super().__init__(SGR_REGEXP, repl)


class ReplaceOSC(StringFilter[str]):
    """
    Find all OSC seqs (e.g. :kbd:`ESC]8;;url ESC\\\\`) and replace with given
    string. Title payload is a part of the sequence, so it is removed as well:

    >>> ReplaceOSC().apply('\\x1b]2;title\\x1b\\\\text')
    'text'

    :param repl:
        Replacement, can contain regexp groups (see :meth:`apply_filters()`).
    """
    def __init__(self, repl: str = ''):
        super().__init__(OSC_REGEXP, repl)


def strip_ansi(s: str) -> str:
    """
    Remove all SGR and OSC sequences from ``s``.

    >>> strip_ansi('\\x1b[31m\\x1b]8;;https://example.com\\x1b\\\\link\\x1b]8;;\\x1b\\\\\\x1b[0m')
    'link'
    """
    return apply_filters(s, ReplaceOSC, ReplaceSGR)
