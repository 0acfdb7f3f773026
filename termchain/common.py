# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
from __future__ import annotations

import inspect
import time
import typing as t
import logging
from functools import update_wrapper

logger = logging.getLogger(__package__)
logger.addHandler(logging.NullHandler())

### catching library logs "from the outside":
# logger = logging.getLogger('termchain')
# handler = logging.StreamHandler()
# fmt = '[%(levelname)5.5s][%(name)s.%(module)s] %(message)s'
# handler.setFormatter(logging.Formatter(fmt))
# logger.addHandler(handler)
# logger.setLevel(logging.WARNING)
########


CDT = t.TypeVar("CDT", int, str)
"""
:abbr:`CDT (Color descriptor type)` represents a color value. Primary handler
is `resolve_color()`. Valid values include:

    - *str* with a color name, e.g. "red", "hi-cyan" or "default";
    - *str* starting with a "#" and consisting of 6 more hexadecimal characters, case
      insensitive (RGB regular form), e.g.: "#0B0CCA";
    - *str* starting with a "#" and consisting of 3 more hexadecimal characters, case
      insensitive (RGB short form), e.g.: "#666";
    - *int* in a [0; 0xFFFFFF] range.
"""

FT = t.TypeVar("FT", int, str, "IColor", "Style", None)
"""
:abbr:`FT (Format type)` is a style descriptor. Used as a shortcut precursor for actual
styles. Primary handler is `make_style()`.
"""

F = t.TypeVar("F", bound=t.Callable[..., t.Any])


def measure(msg: str = "Done"):
    def wrapper(origin: F) -> F:
        def new_func(*args, **kwargs):
            before_s = time.perf_counter()
            result = origin(*args, **kwargs)
            after_s = time.perf_counter()

            from .settings import SettingsManager

            if SettingsManager.get().debug:
                logger.debug(msg + f" in {(after_s - before_s) * 1e6:.1f}us")

            return result

        return update_wrapper(t.cast(F, new_func), origin)

    return wrapper


class LogicError(Exception):
    pass


class ArgTypeError(TypeError):
    """ """

    def __init__(self, actual_type: t.Type, arg_name: str = None, fn: t.Callable = None):
        arg_name_str = f'"{arg_name}"' if arg_name else "argument"

        if fn is not None:
            signature = inspect.signature(fn)
            param_desc = signature.parameters.get(arg_name, None)
            expected_type = "?"
            if param_desc:
                expected_type = param_desc.annotation
            msg = (
                f"Expected {arg_name_str} type: <{expected_type}>, "
                f"got: <{actual_type.__qualname__}>"
            )
        else:
            msg = f"Unexpected {arg_name_str} type: <{actual_type.__qualname__}>"

        super().__init__(msg)
