from __future__ import annotations

import os
import tempfile
import unittest
from unittest import mock

from PySide6.QtCore import QCoreApplication, QSettings, Qt

from zonesync.app import settings as settings_module
from zonesync.app.settings import ThemePreferences, theme_for_scheme
from zonesync.config import THEME_DARK, THEME_EXPLICIT_KEY, THEME_KEY, THEME_LIGHT


class TestThemeForScheme(unittest.TestCase):
    def test_mapping(self) -> None:
        self.assertEqual(theme_for_scheme(Qt.ColorScheme.Light), THEME_LIGHT)
        self.assertEqual(theme_for_scheme(Qt.ColorScheme.Dark), THEME_DARK)
        self.assertEqual(theme_for_scheme(Qt.ColorScheme.Unknown), THEME_DARK)


class TestThemePreferences(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "zonesync.ini")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _settings(self) -> QSettings:
        return QSettings(self.path, QSettings.Format.IniFormat)

    def test_defaults_to_dark_without_gui(self) -> None:
        prefs = ThemePreferences(self._settings())
        self.assertEqual(prefs.theme, THEME_DARK)
        self.assertFalse(prefs.is_explicit)

    def test_stored_theme_is_loaded(self) -> None:
        s = self._settings()
        s.setValue(THEME_KEY, THEME_LIGHT)
        s.sync()
        self.assertEqual(ThemePreferences(self._settings()).theme, THEME_LIGHT)

    def test_garbage_stored_theme_falls_back(self) -> None:
        s = self._settings()
        s.setValue(THEME_KEY, "sepia")
        s.sync()
        with mock.patch.object(settings_module, "system_theme", return_value=THEME_LIGHT):
            self.assertEqual(ThemePreferences(self._settings()).theme, THEME_LIGHT)

    def test_toggle_persists_across_instances(self) -> None:
        seen: list[str] = []
        prefs = ThemePreferences(self._settings())
        prefs.theme_changed.connect(seen.append)
        self.assertEqual(prefs.toggle(), THEME_LIGHT)
        self.assertEqual(seen, [THEME_LIGHT])

        reloaded = ThemePreferences(self._settings())
        self.assertEqual(reloaded.theme, THEME_LIGHT)
        self.assertTrue(reloaded.is_explicit)
        self.assertEqual(str(self._settings().value(THEME_EXPLICIT_KEY)).lower(), "true")

    def test_follow_system_when_not_explicit(self) -> None:
        prefs = ThemePreferences(self._settings())
        prefs.follow_system(THEME_LIGHT)
        self.assertEqual(prefs.theme, THEME_LIGHT)
        self.assertFalse(prefs.is_explicit)

    def test_explicit_choice_ignores_system(self) -> None:
        prefs = ThemePreferences(self._settings())
        prefs.set_theme(THEME_LIGHT)
        prefs.follow_system(THEME_DARK)
        self.assertEqual(prefs.theme, THEME_LIGHT)

    def test_unknown_theme_rejected(self) -> None:
        prefs = ThemePreferences(self._settings())
        with self.assertRaises(ValueError):
            prefs.set_theme("sepia")


if __name__ == "__main__":
    unittest.main(verbosity=2)
