import os
from pathlib import Path

#########################
##### DEFAULT PATHS #####
#########################

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG = CONFIG_DIR / "config.yaml"

XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
XDG_CACHE_HOME = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
USER_CONFIG = XDG_CONFIG_HOME / "zerofetch" / "config.yaml"
LOG_DIR = XDG_CACHE_HOME / "zerofetch" / "logs"
LOG_FILE = LOG_DIR / "zerofetch.log"
LOG_BACKUP_COUNT = 3

## fact sources ##
OS_RELEASE_PATH = Path("/etc/os-release")
PROC_VERSION_PATH = Path("/proc/version")
PROC_UPTIME_PATH = Path("/proc/uptime")
HOSTNAME_PATH = Path("/proc/sys/kernel/hostname")


##########################
##### LAYOUT TUNING ######
##########################
# tuned by eye, keep literal
TEXT_GUTTER_X = 4
TEXT_GUTTER_Y = 1
VERTICAL_CENTER_DIVISOR = 2.3
HEADER_ROWS = 2

# image art
IMAGE_WIDTH_DIVISOR = 2
IMAGE_HEIGHT_COMPRESSION = 1.2

UNIT_PIXEL = "px"
UNIT_CELL = "cell"


########################
##### TEXT PANEL #######
########################

FACT_SEPARATOR = " ->"
UNDERLINE_CHAR = "\u2014"
SWATCH_SEGMENT = "\u2588" * 3
SWATCH_COLORS = ("red", "yellow", "green", "cyan", "blue", "magenta", "black", "white")

STYLES = {
    "user": "bold red",
    "at": "bold cyan",
    "host": "bold red",
    "underline": "bold magenta",
    "label": "bold magenta",
    "value": "bold white",
}

DEFAULT_FIGLET_FONT = "slant"

DEFAULT_SETTINGS = {
    "icons": True,
    "image": None,
    "art": None,
    "figlet": None,
    "figlet_font": DEFAULT_FIGLET_FONT,
    "image_fallback": False,
    "debug": False,
}
