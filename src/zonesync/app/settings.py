"""
Persisted display preferences.

Only the theme survives a restart. Two keys are stored through QSettings:
the theme itself and whether the user picked it explicitly. While the choice
is not explicit, the theme follows the system colour scheme.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Qt, Signal

from zonesync.config import (
    DEFAULT_THEME, THEME_DARK, THEME_EXPLICIT_KEY, THEME_KEY, THEME_LIGHT,
)

logger = logging.getLogger(__name__)

_THEMES = (THEME_DARK, THEME_LIGHT)


def theme_for_scheme(scheme: Qt.ColorScheme) -> str:
    if scheme == Qt.ColorScheme.Light:
        return THEME_LIGHT
    if scheme == Qt.ColorScheme.Dark:
        return THEME_DARK
    return DEFAULT_THEME


def system_theme() -> str:
    """Theme matching the platform colour scheme; the default when it is unknown."""
    from PySide6.QtGui import QGuiApplication

    if not isinstance(QGuiApplication.instance(), QGuiApplication):
        return DEFAULT_THEME
    return theme_for_scheme(QGuiApplication.styleHints().colorScheme())


def _as_bool(value: object) -> bool:
    # INI-backed QSettings hands booleans back as strings
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


class ThemePreferences(QObject):
    theme_changed = Signal(str)

    def __init__(self, settings: Optional[QSettings] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings()

        stored = self._settings.value(THEME_KEY, None)
        self._explicit = _as_bool(self._settings.value(THEME_EXPLICIT_KEY, False))
        if stored in _THEMES:
            self._theme = str(stored)
        else:
            self._theme = system_theme()
        logger.debug(f"Theme loaded: {self._theme} (explicit={self._explicit})")

    @property
    def theme(self) -> str:
        return self._theme

    @property
    def is_explicit(self) -> bool:
        return self._explicit

    def set_theme(self, theme: str, explicit: bool = True) -> None:
        if theme not in _THEMES:
            raise ValueError(f"Unknown theme '{theme}', expected one of {_THEMES}")
        self._theme = theme
        if explicit:
            self._explicit = True
            self._settings.setValue(THEME_EXPLICIT_KEY, True)
        self._settings.setValue(THEME_KEY, theme)
        self._settings.sync()
        self.theme_changed.emit(theme)

    def toggle(self) -> str:
        """Switch dark <-> light and remember that the user chose it."""
        self.set_theme(THEME_LIGHT if self._theme == THEME_DARK else THEME_DARK, explicit=True)
        return self._theme

    def follow_system(self, theme: str) -> None:
        """Apply a system colour-scheme change unless the user chose a theme."""
        if self._explicit or theme == self._theme:
            return
        self.set_theme(theme, explicit=False)
