# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
import io
import unittest

from termchain import ArgTypeError
from termchain.color import Colors
from termchain.renderer import BytesSink, OutputMode, RendererManager, SgrRenderer, TextSink
from termchain.sequence import Sequence
from termchain.settings import SettingsManager
from termchain.style import FormatFlags, Style
from termchain.text import Formatted, Fragment
from termchain.util import strip_ansi

URL = "https://example.com"
LINK_TEXT = "Link to example.com."
LINK = f"\x1b]8;;{URL}\x1b\\{LINK_TEXT}\x1b]8;;\x1b\\"


def make_link() -> Fragment:
    return Colors.BLUE.as_fg().set(FormatFlags.UNDERLINE).paint(LINK_TEXT).with_link(URL)


class RendererTestCase(unittest.TestCase):
    def setUp(self) -> None:
        SettingsManager.init(environ={})
        self.renderer = SgrRenderer()

    def render(self, *fragments) -> str:
        return self.renderer.render(Sequence(*fragments))


class PlainOutputTestCase(RendererTestCase):
    def test_no_control_codes_for_plain(self):
        self.assertEqual(self.render(Style().paint("one"), Style().paint("two")), "onetwo")

    def test_empty_sequence(self):
        self.assertEqual(self.render(), "")

    def test_stripping_codes_gives_content(self):
        for content in ["", "text", "multi\nline", "ünicode █"]:
            with self.subTest(content=content):
                for fmt in [None, "red", Style(bold=True, bg="blue")]:
                    output = self.renderer.render(Fragment(content, fmt))
                    self.assertEqual(strip_ansi(output), content)


class TrailingResetTestCase(RendererTestCase):
    def test_same_style_single_prefix(self):
        output = self.render(Fragment("a", "red"), Fragment("b", "red"), Fragment("c", "red"))
        self.assertEqual(output, "\x1b[31mabc\x1b[0m")

    def test_ends_with_plain(self):
        output = self.render(Fragment("a", "red"), Fragment("b", Style(bold=True)), "c")
        self.assertEqual(output, "\x1b[31ma\x1b[0m\x1b[1mb\x1b[0mc")

    def test_starts_with_plain(self):
        self.assertEqual(self.render("a", Fragment("b", "red")), "a\x1b[31mb\x1b[0m")

    def test_styled_in_middle(self):
        self.assertEqual(
            self.render("a", Fragment("b", "red"), "c"), "a\x1b[31mb\x1b[0mc"
        )

    def test_empty_styled_fragment_before_plain(self):
        self.assertEqual(self.render(Fragment("", "red"), "x"), "\x1b[31m\x1b[0mx")

    def test_empty_plain_fragment_at_end(self):
        self.assertEqual(self.render(Fragment("x", "red"), ""), "\x1b[31mx\x1b[0m")


class TitleTestCase(RendererTestCase):
    TITLE = "\x1b]2;hello\x1b\\"

    def setUp(self) -> None:
        super().setUp()
        self.title = Fragment.title("hello")
        self.before = Style().paint("Before is Plain. ")
        self.after = Style().paint(" After is Plain.")
        self.before_g = Colors.GREEN.paint("Before is Green.")
        self.after_g = Colors.GREEN.paint(" After is Green.")

    def test_title_solo(self):
        self.assertEqual(self.render(self.title), self.TITLE)

    def test_title_pre_plain(self):
        self.assertEqual(self.render(self.title, self.after), self.TITLE + " After is Plain.")

    def test_title_post_plain(self):
        self.assertEqual(self.render(self.before, self.title), "Before is Plain. " + self.TITLE)

    def test_title_middle_plain(self):
        self.assertEqual(
            self.render(self.before, self.title, self.after),
            "Before is Plain. " + self.TITLE + " After is Plain.",
        )

    def test_title_pre_styled(self):
        self.assertEqual(
            self.render(self.title, self.after_g),
            self.TITLE + "\x1b[32m After is Green.\x1b[0m",
        )

    def test_title_post_styled(self):
        self.assertEqual(
            self.render(self.before_g, self.title),
            "\x1b[32mBefore is Green.\x1b[0m" + self.TITLE,
        )

    def test_title_middle_styled(self):
        self.assertEqual(
            self.render(self.before_g, self.title, self.after_g),
            "\x1b[32mBefore is Green.\x1b[0m" + self.TITLE + "\x1b[32m After is Green.\x1b[0m",
        )

    def test_title_with_nested_content(self):
        title = Fragment.title(Sequence(Fragment("he", "red"), "llo"))
        self.assertEqual(self.render(title), self.TITLE)


class HyperlinkTestCase(RendererTestCase):
    def test_hyperlink(self):
        fragment = Colors.RED.paint(LINK_TEXT).hyperlink(URL)
        self.assertEqual(
            fragment.render(self.renderer),
            "\x1b[31m\x1b]8;;https://example.com\x1b\\Link to example.com.\x1b]8;;\x1b\\\x1b[0m",
        )

    def test_link_only(self):
        self.assertEqual(self.render(make_link()), "\x1b[4;34m" + LINK + "\x1b[0m")

    def test_link_first(self):
        self.assertEqual(
            self.render(make_link(), Colors.GREEN.paint(" After link.")),
            "\x1b[4;34m" + LINK + "\x1b[0m\x1b[32m After link.\x1b[0m",
        )

    def test_link_last(self):
        self.assertEqual(
            self.render(Colors.GREEN.paint("Before link. "), make_link()),
            "\x1b[32mBefore link. \x1b[4;34m" + LINK + "\x1b[0m",
        )

    def test_link_in_middle(self):
        self.assertEqual(
            self.render(
                Colors.GREEN.paint("Before link. "),
                make_link(),
                Colors.GREEN.paint(" After link."),
            ),
            "\x1b[32mBefore link. \x1b[4;34m" + LINK + "\x1b[0m\x1b[32m After link.\x1b[0m",
        )

    def test_legacy_underline(self):
        renderer = SgrRenderer(legacy_underline=True)
        seq = Sequence(
            Colors.GREEN.paint("Before link. "), make_link(), Colors.GREEN.paint(" After link.")
        )
        self.assertEqual(
            renderer.render(seq),
            "\x1b[32mBefore link. \x1b[04;34m" + LINK + "\x1b[0m\x1b[32m After link.\x1b[0m",
        )

    def test_legacy_underline_from_settings(self):
        SettingsManager.init(environ={}, legacy_underline=True)
        self.assertEqual(SgrRenderer().render(make_link()), "\x1b[04;34m" + LINK + "\x1b[0m")

    def test_plain_link(self):
        self.assertEqual(self.render(Fragment("x").with_link(URL)), f"\x1b]8;;{URL}\x1b\\x\x1b]8;;\x1b\\")

    def test_formatted_url(self):
        fragment = Fragment("x").with_link(Formatted("https://{}/{}", "example.com", 1))
        self.assertIn("\x1b]8;;https://example.com/1\x1b\\", self.render(fragment))


class NestingTestCase(RendererTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.parent = Style(fg="red", italic=True)

    def test_child_inherits_parent(self):
        fragment = Fragment(Fragment("x", Style(bold=True)), self.parent)
        self.assertEqual(self.renderer.render(fragment), "\x1b[3;31m\x1b[1mx\x1b[0m")

    def test_rebased_fragment(self):
        fragment = Fragment("x", Style(bold=True)).rebase_on(self.parent)
        self.assertEqual(fragment.style, Style(fg="red", bold=True, italic=True))
        self.assertEqual(self.renderer.render(fragment), "\x1b[1;3;31mx\x1b[0m")

    def test_reset_inside_nested_is_rebased(self):
        nested = Sequence(Fragment("a", Style(bold=True)), Fragment("b", "blue"))
        output = self.renderer.render(self.parent.paint(nested))
        self.assertEqual(output, "\x1b[3;31m\x1b[1ma\x1b[0m\x1b[3;34mb\x1b[0m")

    def test_parent_style_is_restored(self):
        output = self.render(
            self.parent.paint(Fragment("x", Style(bold=True))),
            self.parent.paint("y"),
        )
        self.assertEqual(output, "\x1b[3;31m\x1b[1mx\x1b[0m\x1b[3;31my\x1b[0m")

    def test_plain_after_nested(self):
        output = self.render(self.parent.paint(Fragment("x", Style(bold=True))), "y")
        self.assertEqual(output, "\x1b[3;31m\x1b[1mx\x1b[0my")

    def test_nested_plain_keeps_parent(self):
        output = self.renderer.render(self.parent.paint(Sequence("x", "y")))
        self.assertEqual(output, "\x1b[3;31mxy\x1b[0m")

    def test_restyling_drops_previous_style(self):
        nested = Sequence(Fragment("a", Style(bold=True)), Fragment("b", "blue"))
        restyled = Fragment(nested, Style(italic=True)).with_style(Style())
        self.assertEqual(self.renderer.render(restyled), self.renderer.render(Fragment(nested)))
        self.assertEqual(self.renderer.render(restyled), "\x1b[1ma\x1b[0m\x1b[34mb\x1b[0m")

    def test_link_keeps_nested_style(self):
        nested = Sequence(Fragment("a", Style(bold=True)))
        linked = Fragment(nested, self.parent).with_link(URL)
        self.assertEqual(linked.content, Fragment(nested, self.parent).content)

    def test_nested_source_is_copied(self):
        nested = Sequence(Fragment("a", Style(bold=True)))
        fragment = Fragment(nested, self.parent)
        nested.push("b")
        self.assertEqual(len(fragment.with_style(Style()).content), 1)

    def test_painting_does_not_change_nested(self):
        nested = Sequence(Fragment("a", Style(bold=True)), Fragment("b", "blue"))
        self.parent.paint(nested)
        self.assertIsNone(nested.context)


class ContentTypesTestCase(RendererTestCase):
    def test_formatted(self):
        fragment = Fragment(Formatted("{}-{n}", 1, n=2), "red")
        self.assertEqual(self.renderer.render(fragment), "\x1b[31m1-2\x1b[0m")

    def test_formatted_is_deferred(self):
        values = []
        fragment = Fragment(Formatted("{}", values))
        values.append(1)
        self.assertEqual(self.renderer.render(fragment), "[1]")

    def test_bytes_into_text_sink(self):
        self.assertRaises(ArgTypeError, self.renderer.render, Fragment(b"x"))

    def test_render_bytes(self):
        seq = Sequence(Fragment(b"\xff", "red"), "ü")
        self.assertEqual(self.renderer.render_bytes(seq), b"\x1b[31m\xff\x1b[0m\xc3\xbc")

    def test_render_bytes_encoding(self):
        renderer = SgrRenderer(encoding="latin-1")
        self.assertEqual(renderer.render_bytes(Fragment("ü")), b"\xfc")

    def test_render_str(self):
        self.assertEqual(self.renderer.render("text"), "text")

    def test_invalid_subject(self):
        self.assertRaises(ArgTypeError, self.renderer.render, 42)


class NoAnsiTestCase(RendererTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.renderer = SgrRenderer(OutputMode.NO_ANSI)

    def test_content_only(self):
        output = self.render(
            Colors.GREEN.paint("Before link. "), make_link(), Colors.GREEN.paint(" After link.")
        )
        self.assertEqual(output, "Before link. Link to example.com. After link.")

    def test_titles_are_dropped(self):
        self.assertEqual(self.render("a", Fragment.title("t"), "b"), "ab")

    def test_nested(self):
        self.assertEqual(self.renderer.render(Style(bold=True).paint(Sequence("x", "y"))), "xy")

    def test_nested_titles_are_dropped(self):
        nested = Sequence("x", Fragment.title("t"), "y")
        self.assertEqual(self.renderer.render(Style(bold=True).paint(nested)), "xy")

    def test_from_settings(self):
        SettingsManager.init(environ={"TERMCHAIN_OUTPUT_MODE": "no_ansi"})
        self.assertIs(SgrRenderer().output_mode, OutputMode.NO_ANSI)


class _FailingStream(io.StringIO):
    def __init__(self, fail_on: int):
        super().__init__()
        self._calls = 0
        self._fail_on = fail_on

    def write(self, s: str) -> int:
        self._calls += 1
        if self._calls >= self._fail_on:
            raise BrokenPipeError("pipe closed")
        return super().write(s)


class SinkTestCase(RendererTestCase):
    def test_write_error_propagates(self):
        stream = _FailingStream(fail_on=3)
        seq = Sequence(Fragment("a", "red"), Fragment("b", "blue"))
        with self.assertRaises(BrokenPipeError):
            self.renderer.write_to(seq, stream)
        self.assertEqual(stream.getvalue(), "\x1b[31ma")

    def test_write_to_text_stream(self):
        stream = io.StringIO()
        Fragment("a", "red").write_to(stream, self.renderer)
        self.assertEqual(stream.getvalue(), "\x1b[31ma\x1b[0m")

    def test_write_to_binary_stream(self):
        stream = io.BytesIO()
        Sequence(Fragment("a", "red")).write_to(stream, self.renderer)
        self.assertEqual(stream.getvalue(), b"\x1b[31ma\x1b[0m")

    def test_explicit_sinks(self):
        text, binary = io.StringIO(), io.BytesIO()
        self.renderer.write(Fragment("a", "red"), TextSink(text))
        self.renderer.write(Fragment("a", "red"), BytesSink(binary))
        self.assertEqual(text.getvalue().encode(), binary.getvalue())


class RendererManagerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        SettingsManager.init(environ={})

    def tearDown(self) -> None:
        RendererManager.set_default()

    def test_default_is_sgr(self):
        RendererManager.set_default()
        self.assertIsInstance(RendererManager.get_default(), SgrRenderer)

    def test_set_default_instance(self):
        RendererManager.set_default(SgrRenderer(OutputMode.NO_ANSI))
        self.assertEqual(Fragment("a", "red").render(), "a")
        self.assertEqual(format(Sequence(Fragment("a", "red"))), "a")

    def test_set_default_class(self):
        RendererManager.set_default(SgrRenderer)
        self.assertIsInstance(RendererManager.get_default(), SgrRenderer)

    def test_format_spec(self):
        RendererManager.set_default(SgrRenderer(OutputMode.NO_ANSI))
        self.assertEqual(f"{Fragment('ab', 'red'):*^6s}", "**ab**")
