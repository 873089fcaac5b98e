"""
Configuration & Global Constants
================================
This module serves as the central registry for the constants shared between
the model, the controllers and the Qt layer.

Why is this file needed?
------------------------
1. Abstraction: The work window, the fallback location and the settings keys
   are referenced from several modules; keeping them here prevents magic
   numbers and string keys from drifting apart.
2. Tests: Test modules import the same values the application uses.

Exports:
    DEFAULT_LOCATION_ID (str): Location used when the user's zone is unknown.
    ANCHOR_LOCATION_ID (str): Home location pinned at the top of the window.
    WORK_START_HOUR / WORK_END_HOUR / STARTING_SOON_HOUR (int): Work window.
    TICK_INTERVAL_MS (int): Period of the live clock.
    THEME_KEY / THEME_EXPLICIT_KEY (str): QSettings keys for the theme.
"""

# Locations
DEFAULT_LOCATION_ID: str = "saopaulo"
ANCHOR_LOCATION_ID: str = "saopaulo"

# Work window, half-open hour ranges: [STARTING_SOON_HOUR, WORK_START_HOUR) and
# [WORK_START_HOUR, WORK_END_HOUR)
STARTING_SOON_HOUR: int = 7
WORK_START_HOUR: int = 9
WORK_END_HOUR: int = 18

# Live clock
TICK_INTERVAL_MS: int = 1000

# Persisted display preferences
THEME_KEY: str = "ui/theme"
THEME_EXPLICIT_KEY: str = "ui/theme_explicit"
THEME_DARK: str = "dark"
THEME_LIGHT: str = "light"
DEFAULT_THEME: str = THEME_DARK

# Application identity (used by QSettings)
ORG_ID: str = "zonesync"
APP_ID: str = "zonesync"
VISIBLE_APP_NAME: str = "Zone Sync"
