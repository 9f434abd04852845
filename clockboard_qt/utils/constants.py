# clockboard_qt/utils/constants.py
"""
Constants for the clock board
Paths, sizes, default clocks, time zone aliases
"""

from pathlib import Path

# ========== PATHS ==========
BASE_DIR = Path(__file__).parent.parent  # clockboard_qt
ASSETS_DIR = BASE_DIR / "assets"
FONTS_DIR = ASSETS_DIR / "fonts"
THEMES_DIR = ASSETS_DIR / "themes"

APP_NAME = "World Clock Board"
ORGANIZATION_NAME = "WorldClockBoard"
SETTINGS_DIR_WINDOWS = "WorldClockBoard"
SETTINGS_DIR_UNIX = "world_clock_board"
SETTINGS_FILE = "settings.json"
SETTINGS_VERSION = "1.0.0"

FILE_DIALOG_FILTER = "JSON Files (*.json);;All Files (*)"

# ========== WINDOW ==========
WINDOW_DEFAULT_WIDTH = 800
WINDOW_DEFAULT_HEIGHT = 600
WINDOW_DEFAULT_TOP = 100
WINDOW_DEFAULT_LEFT = 100
WINDOW_MIN_VALID_SIZE = 100  # saved width/height must exceed this

# ========== CLOCK WIDGET ==========
CLOCK_WIDGET_WIDTH = 350
CLOCK_WIDGET_HEIGHT = 180
CLOCK_GRID_SPACING = 5
TICK_INTERVAL_MS = 1000

TIME_FORMAT_24H = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"
DST_ACTIVE_TEXT = "DST Active"
DST_INACTIVE_TEXT = "DST Inactive"

CLOCK_MIME_TYPE = "application/x-clockboard-clock-id"

# ========== FONTS ==========
PACKAGED_FONT_ROOT = "pack://application:,,,/"
FILE_FONT_ROOT = "file:///"
DEFAULT_TIME_FONT = PACKAGED_FONT_ROOT + "DS-DIGI.TTF#DS-Digital"
DEFAULT_UI_FONT = "Arial"
UNIVERSAL_DEFAULT_FONT = "Arial"

TIME_FONT_CHOICES = [
    ("DS-Digital (packaged)", DEFAULT_TIME_FONT),
    ("Segoe UI", "Segoe UI"),
    ("Arial", "Arial"),
    ("Consolas", "Consolas"),
    ("Courier New", "Courier New"),
]

# ========== DEFAULT CLOCKS ==========
DEFAULT_CLOCKS = [
    ("US - East Coast", ["New York, NY", "East Coast"], "America/New_York"),
    ("US - Central", ["Chicago, IL"], "America/Chicago"),
]

# Windows zone names found in documents written by the Windows build
WINDOWS_ZONE_ALIASES = {
    "UTC": "UTC",
    "GMT Standard Time": "Europe/London",
    "W. Europe Standard Time": "Europe/Berlin",
    "Romance Standard Time": "Europe/Paris",
    "Central Europe Standard Time": "Europe/Budapest",
    "E. Europe Standard Time": "Europe/Chisinau",
    "Russian Standard Time": "Europe/Moscow",
    "India Standard Time": "Asia/Kolkata",
    "SE Asia Standard Time": "Asia/Bangkok",
    "China Standard Time": "Asia/Shanghai",
    "Singapore Standard Time": "Asia/Singapore",
    "Tokyo Standard Time": "Asia/Tokyo",
    "Korea Standard Time": "Asia/Seoul",
    "AUS Eastern Standard Time": "Australia/Sydney",
    "New Zealand Standard Time": "Pacific/Auckland",
    "Hawaiian Standard Time": "Pacific/Honolulu",
    "Alaskan Standard Time": "America/Anchorage",
    "Pacific Standard Time": "America/Los_Angeles",
    "Mountain Standard Time": "America/Denver",
    "US Mountain Standard Time": "America/Phoenix",
    "Central Standard Time": "America/Chicago",
    "Eastern Standard Time": "America/New_York",
    "Atlantic Standard Time": "America/Halifax",
    "Newfoundland Standard Time": "America/St_Johns",
    "E. South America Standard Time": "America/Sao_Paulo",
}
