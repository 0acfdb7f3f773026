# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
.. testsetup:: *

    from termchain.util import strip_ansi

"""
from __future__ import annotations

from .string_filter import apply_filters, StringFilter, ReplaceSGR, ReplaceOSC, strip_ansi
