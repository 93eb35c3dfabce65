import json
import logging
import os
import signal
from pathlib import Path

import psutil

from netspeed import glyphs

logger = logging.getLogger(__name__)


def error_exit(icon: str, message: str):
    print(
        json.dumps(
            {
                "text": f"{icon} {message}",
                "class": "error",
            }
        )
    )


def get_cache_directory() -> Path:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "netspeed"
    else:
        cache_dir = Path.home() / ".cache/netspeed"

    if not os.path.exists(cache_dir):
        try:
            os.makedirs(cache_dir, mode=0o700)
        except OSError:
            error_exit(icon=glyphs.md_alert, message=f'Couldn\'t create "{cache_dir}"')

    return cache_dir


def get_config_directory() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "netspeed"
    return Path.home() / ".config" / "netspeed"


def pidfile_path(name: str) -> Path:
    return get_cache_directory() / f"{name}.pid"


def write_pidfile(name: str) -> Path:
    """
    Record the current PID so that other invocations can signal this process.
    """
    path = pidfile_path(name)
    path.write_text(f"{os.getpid()}\n", encoding="utf-8")
    logger.debug(f"wrote pid {os.getpid()} to {path}")
    return path


def remove_pidfile(name: str):
    path = pidfile_path(name)
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def find_running_monitors(name: str | None = None) -> list[psutil.Process]:
    """
    Return the live processes registered in the cache directory, or only the
    one registered under name. Stale pidfiles
    (dead process or a recycled PID owned by something else) are removed.
    """
    processes: list[psutil.Process] = []
    pattern = f"{name}.pid" if name else "*.pid"
    for path in sorted(get_cache_directory().glob(pattern)):
        try:
            pid = int(path.read_text(encoding="utf-8").strip())
        except (OSError, ValueError):
            continue

        try:
            proc = psutil.Process(pid)
            cmdline = " ".join(proc.cmdline())
            if proc.is_running() and (
                "netspeed" in cmdline or "network-speed" in cmdline
            ):
                processes.append(proc)
                continue
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            pass

        logger.info(f"removing stale pidfile {path}")
        path.unlink(missing_ok=True)

    return processes


def signal_monitors(signum: signal.Signals, name: str | None = None) -> list[int]:
    """
    Send a signal to every running monitor (or only the one registered under
    name) and return the PIDs reached.
    """
    pids: list[int] = []
    for proc in find_running_monitors(name):
        if proc.pid == os.getpid():
            continue
        try:
            proc.send_signal(signum)
            pids.append(proc.pid)
            logger.info(f"sent {signum.name} to pid {proc.pid}")
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.warning(f"failed to signal pid {proc.pid}: {e}")
    return pids
