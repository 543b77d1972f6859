import os
import time
import logging
from pathlib import Path
from typing import Mapping, Optional

import psutil

# local
from config.constants import OS_RELEASE_PATH, PROC_VERSION_PATH, PROC_UPTIME_PATH, HOSTNAME_PATH
from facts.registry import register_fact

logger = logging.getLogger(__name__)

#####################
##### PARSERS #######
#####################

def parse_pretty_name(os_release: str) -> str:
    """
    Extracts PRETTY_NAME from /etc/os-release content.
    Example: 'PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"' -> 'Debian GNU/Linux 12 (bookworm)'
    """
    pretty_name = ""
    for line in os_release.splitlines():
        if line.startswith("PRETTY_NAME="):
            pretty_name = line[len("PRETTY_NAME="):].strip().strip('"\'')
    return pretty_name


def parse_kernel_release(proc_version: str) -> str:
    """
    Returns the release between 'version ' and ' (' in /proc/version.
    Example: 'Linux version 6.1.0-13-amd64 (debian-kernel@...' -> '6.1.0-13-amd64'
    """
    start = proc_version.index("version ") + len("version ")
    end = proc_version.index(" (", start)
    return proc_version[start:end]


def format_uptime(seconds: int) -> str:
    days = seconds // (3600 * 24)
    hours = seconds % (3600 * 24) // 3600
    minutes = seconds % 3600 // 60
    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def shell_name(shell_path: str) -> str:
    return shell_path.rstrip("/").split("/")[-1]


def term_name(term: str) -> str:
    # xterm-kitty -> kitty
    if "xterm-" in term:
        return term.split("-")[-1]
    return term


def read_last_line(path: Path) -> str:
    lines = Path(path).read_text().splitlines()
    return lines[-1] if lines else ""


def uptime_seconds(path: Path = PROC_UPTIME_PATH) -> int:
    try:
        return int(float(Path(path).read_text().split()[0]))
    except (OSError, ValueError, IndexError) as e:
        logger.debug(f"{path} unreadable ({e}), falling back to psutil boot time")
        return int(time.time() - psutil.boot_time())


def _env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    value = environ.get(name)
    if value is None:
        logger.debug(f"Environment variable {name} is not set")
        return ""
    return value


######################
##### COLLECTORS #####
######################
# registration order is display order

@register_fact("User", "\uf17c", identity=True)
def get_username() -> str:
    return _env("USER")


@register_fact("Hostname", "\uf17c", identity=True)
def get_hostname() -> str:
    return read_last_line(HOSTNAME_PATH)


@register_fact("OS", "\uf17c")
def get_distro() -> str:
    return parse_pretty_name(OS_RELEASE_PATH.read_text())


@register_fact("Kernel", "\ue266")
def get_kernel() -> str:
    return parse_kernel_release(PROC_VERSION_PATH.read_text())


@register_fact("Uptime", "\uf017")
def get_uptime() -> str:
    return format_uptime(uptime_seconds())


@register_fact("Shell", "\ue795")
def get_shell() -> str:
    return shell_name(_env("SHELL"))


@register_fact("WM", "\uf878")
def get_wm() -> str:
    return _env("DESKTOP_SESSION")


@register_fact("Term", "\uf44f")
def get_term() -> str:
    return term_name(_env("TERM"))
