# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
import unittest

from termchain.color import ColorRGB, Colors
from termchain.gradient import Gradient, build_all
from termchain.renderer import SgrRenderer
from termchain.settings import SettingsManager

RED = ColorRGB(255, 0, 0)
BLUE = ColorRGB(0, 0, 255)
BLACK = ColorRGB(0, 0, 0)


class GradientTestCase(unittest.TestCase):
    def setUp(self) -> None:
        SettingsManager.init(environ={})
        self.renderer = SgrRenderer()
        self.gradient = Gradient(RED, BLUE)

    def test_stops(self):
        self.assertEqual(self.gradient.at(0), RED)
        self.assertEqual(self.gradient.at(1), BLUE)

    def test_out_of_range_is_clamped(self):
        self.assertEqual(self.gradient.at(-2), RED)
        self.assertEqual(self.gradient.at(1.5), BLUE)

    def test_reverse(self):
        reversed_ = self.gradient.reverse()
        self.assertEqual(reversed_.start, BLUE)
        self.assertEqual(reversed_.end, RED)

    def test_from_colors_replaces_non_rgb(self):
        gradient = Gradient.from_colors(Colors.RED, BLUE)
        self.assertEqual(gradient.start, BLACK)
        self.assertEqual(gradient.end, BLUE)

    def test_build(self):
        self.assertEqual(
            self.renderer.render(self.gradient.build("ab")),
            "\x1b[38;2;255;0;0ma\x1b[38;2;127;0;127mb\x1b[0m",
        )

    def test_build_bg(self):
        self.assertEqual(
            self.renderer.render(self.gradient.build("a", bg=True)),
            "\x1b[48;2;255;0;0ma\x1b[0m",
        )

    def test_same_color_is_not_repeated(self):
        color = ColorRGB(10, 20, 30)
        seq = Gradient(color, color).build("abc")
        self.assertEqual(len(seq), 3)
        self.assertEqual(self.renderer.render(seq), "\x1b[38;2;10;20;30mabc\x1b[0m")

    def test_empty_text(self):
        seq = self.gradient.build("")
        self.assertEqual(len(seq), 0)
        self.assertEqual(self.renderer.render(seq), "")

    def test_build_all(self):
        seq = build_all("a", self.gradient, Gradient(BLACK, BLUE))
        self.assertEqual(
            self.renderer.render(seq),
            "\x1b[38;2;255;0;0;48;2;0;0;0ma\x1b[0m",
        )
