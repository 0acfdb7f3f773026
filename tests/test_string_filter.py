# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
import unittest

from termchain.util import ReplaceOSC, ReplaceSGR, StringFilter, apply_filters, strip_ansi


class StringFilterTestCase(unittest.TestCase):
    def test_replace_sgr(self):
        self.assertEqual(ReplaceSGR("*").apply("\x1b[1;31ma\x1b[0mb"), "*a*b")

    def test_replace_sgr_groups(self):
        self.assertEqual(apply_filters("\x1b[4;34mx", ReplaceSGR(r"E\2\3\5")), "E[4;34mx")

    def test_replace_osc_terminated_with_st(self):
        self.assertEqual(ReplaceOSC().apply("\x1b]8;;https://a.b\x1b\\a\x1b]8;;\x1b\\"), "a")

    def test_replace_osc_terminated_with_bel(self):
        self.assertEqual(ReplaceOSC().apply("\x1b]2;title\x07text"), "text")

    def test_filter_classes_are_instantiated(self):
        self.assertEqual(apply_filters("\x1b]2;t\x1b\\\x1b[1mx", ReplaceOSC, ReplaceSGR), "x")

    def test_custom_filter(self):
        upper = StringFilter(r"[a-z]+", lambda m: m.group(0).upper())
        self.assertEqual(upper("ab1c"), "AB1C")

    def test_strip_ansi_keeps_plain_text(self):
        self.assertEqual(strip_ansi("plain [text]"), "plain [text]")
