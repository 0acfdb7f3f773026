# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
import unittest

from termchain.settings import Settings, SettingsManager


class SettingsTestCase(unittest.TestCase):
    def tearDown(self) -> None:
        SettingsManager.init(environ={})

    def test_defaults(self):
        settings = Settings()
        self.assertFalse(settings.legacy_underline)
        self.assertEqual(settings.output_mode, "ansi")
        self.assertEqual(settings.encoding, "utf-8")
        self.assertFalse(settings.debug)

    def test_kwargs_override_defaults(self):
        self.assertTrue(Settings(debug=True).debug)

    def test_env(self):
        settings = SettingsManager.init(
            environ={
                "TERMCHAIN_LEGACY_UNDERLINE": "yes",
                "TERMCHAIN_ENCODING": " latin-1 ",
                "TERMCHAIN_DEBUG": "0",
                "OTHER_VAR": "1",
            }
        )
        self.assertTrue(settings.legacy_underline)
        self.assertEqual(settings.encoding, "latin-1")
        self.assertFalse(settings.debug)

    def test_overrides_beat_env(self):
        settings = SettingsManager.init(
            environ={"TERMCHAIN_OUTPUT_MODE": "no_ansi"}, output_mode="ansi"
        )
        self.assertEqual(settings.output_mode, "ansi")

    def test_unknown_override(self):
        self.assertRaises(KeyError, SettingsManager.init, environ={}, colorful=True)

    def test_get_returns_initialized(self):
        settings = SettingsManager.init(environ={}, debug=True)
        self.assertIs(SettingsManager.get(), settings)

    def test_get_initializes_lazily(self):
        SettingsManager.app_settings = None
        self.assertIsInstance(SettingsManager.get(), Settings)
