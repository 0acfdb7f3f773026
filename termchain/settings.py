# -----------------------------------------------------------------------------
#  termchain [ANSI styled sequences with minimal transitions]
#  (c) 2022-2023. A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
"""
Library-wide settings. Defaults can be changed either by environment variables
(read once on `SettingsManager.init()`) or by explicit overrides:

    >>> SettingsManager.init(legacy_underline=True).legacy_underline
    True

Renderers created without explicit arguments pick their setup from here.
"""
from __future__ import annotations

import os
from argparse import Namespace
from typing import Any

from .common import logger

ENV_PREFIX = "TERMCHAIN_"


class Settings(Namespace):
    def __init__(self, **kwargs: Any):
        self.legacy_underline: bool = False  # "04" instead of "4" for old terminal profiles
        self.output_mode: str = "ansi"
        self.encoding: str = "utf-8"  # for byte sinks
        self.debug: bool = False

        super().__init__(**kwargs)

    def update_from_env(self, environ: dict = None) -> Settings:
        environ = os.environ if environ is None else environ
        for attr, default in vars(self).items():
            raw = environ.get(ENV_PREFIX + attr.upper())
            if raw is None:
                continue
            if isinstance(default, bool):
                setattr(self, attr, raw.strip().lower() in ("1", "true", "yes", "on"))
            else:
                setattr(self, attr, raw.strip())
        return self


class SettingsManager:
    app_settings: Settings | None = None

    @staticmethod
    def init(environ: dict = None, **overrides: Any) -> Settings:
        settings = Settings().update_from_env(environ)
        for attr, value in overrides.items():
            if not hasattr(settings, attr):
                raise KeyError(f"Unknown setting: {attr!r}")
            setattr(settings, attr, value)

        SettingsManager.app_settings = settings
        logger.debug(f"Settings initialized: {settings}")
        return settings

    @staticmethod
    def get() -> Settings:
        if SettingsManager.app_settings is None:
            return SettingsManager.init()
        return SettingsManager.app_settings
