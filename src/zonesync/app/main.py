"""
Application Initialization
==========================
Wires the Store, the persisted preferences and the main window together and
starts the Qt event loop.

Run with: python -m zonesync
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from zonesync.app.application import create_app
from zonesync.app.settings import ThemePreferences, theme_for_scheme
from zonesync.app.state import Store
from zonesync.app.ui.main_window import MainWindow
from zonesync.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zonesync", description="Compare office times across time zones.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args, qt_args = build_parser().parse_known_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    app = create_app([sys.argv[0], *qt_args])

    # 1. Model: source state seeded from the detected zone
    store = Store()
    # 2. Persisted theme (needs the QSettings identity set in create_app)
    preferences = ThemePreferences()
    app.styleHints().colorSchemeChanged.connect(
        lambda scheme: preferences.follow_system(theme_for_scheme(scheme))
    )
    # 3. View
    win = MainWindow(store, preferences)
    win.show()

    logger.info(f"Started with source location '{store.source_id()}'.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
