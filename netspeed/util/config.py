import json
import logging
import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Callable

from dacite import Config, from_dict

from netspeed.data import network_speed as ns
from netspeed.util import system

logger = logging.getLogger(__name__)

MODE_COUNT = len(ns.DisplayMode)
FONT_MODE_COUNT = 5
MAX_REFRESH_INTERVAL = 60


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def valid_mode(value: Any) -> bool:
    return _is_int(value) and 0 <= value < MODE_COUNT


def valid_font_mode(value: Any) -> bool:
    return _is_int(value) and 0 <= value < FONT_MODE_COUNT


def valid_refresh_interval(value: Any) -> bool:
    return _is_int(value) and 0 < value <= MAX_REFRESH_INTERVAL


VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "mode": valid_mode,
    "font_mode": valid_font_mode,
    "refresh_interval": valid_refresh_interval,
}


def default_config_path() -> Path:
    override = os.environ.get("NETSPEED_CONFIG")
    if override:
        return Path(override)
    return system.get_config_directory() / "config.json"


def merge_with_defaults(data: dict[str, Any]) -> ns.Config:
    """
    Build a Config from raw JSON data, replacing each missing or invalid field
    with its default.
    """
    defaults = asdict(ns.Config())
    merged: dict[str, Any] = {}
    for item in fields(ns.Config):
        value = data.get(item.name)
        if VALIDATORS[item.name](value):
            merged[item.name] = value
        else:
            if item.name in data:
                logger.warning(
                    f"invalid value {value!r} for {item.name}, using {defaults[item.name]!r}"
                )
            merged[item.name] = defaults[item.name]

    return from_dict(
        data_class=ns.Config,
        data=merged,
        config=Config(cast=[ns.DisplayMode], strict=True),
    )


class ConfigStore:
    """
    The persisted display settings. Every mutation is written to disk before the
    call returns; a failed write is logged and the in-memory value is kept.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else default_config_path()
        self._config = self.load()

    @property
    def config(self) -> ns.Config:
        return ns.Config(**asdict(self._config))

    @property
    def mode(self) -> ns.DisplayMode:
        return self._config.mode

    @property
    def font_mode(self) -> int:
        return self._config.font_mode

    @property
    def refresh_interval(self) -> int:
        return self._config.refresh_interval

    def load(self) -> ns.Config:
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as fh:
                    data = json.load(fh)
                if isinstance(data, dict):
                    self._config = merge_with_defaults(data)
                    logger.debug(f"loaded {self._config} from {self.path}")
                    return self._config
                logger.warning(f"{self.path} does not hold a JSON object, using defaults")
        except (OSError, ValueError) as e:
            logger.warning(f"failed to load config from {self.path}, using defaults: {e}")

        self._config = ns.Config()
        self.save()
        return self._config

    def save(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(asdict(self._config), fh, indent=2)
                fh.write("\n")
        except OSError as e:
            logger.error(f"failed to save config to {self.path}: {e}")
            return False
        return True

    def set_mode(self, mode: int) -> bool:
        """
        Change the display mode. Returns False when the new value could not be
        persisted; it is applied in memory either way.
        """
        if not valid_mode(mode):
            raise ValueError(f"invalid mode {mode!r}, must be 0-{MODE_COUNT - 1}")
        self._config.mode = ns.DisplayMode(mode)
        return self.save()

    def set_font_mode(self, font_mode: int) -> bool:
        if not valid_font_mode(font_mode):
            raise ValueError(
                f"invalid font mode {font_mode!r}, must be 0-{FONT_MODE_COUNT - 1}"
            )
        self._config.font_mode = font_mode
        return self.save()

    def set_interval(self, interval: int) -> bool:
        if not valid_refresh_interval(interval):
            raise ValueError(
                f"invalid interval {interval!r}, must be 1-{MAX_REFRESH_INTERVAL} seconds"
            )
        self._config.refresh_interval = interval
        return self.save()

    def cycle_mode(self) -> ns.DisplayMode:
        if not self.set_mode((self._config.mode + 1) % MODE_COUNT):
            logger.warning(f"mode {self._config.mode} is only kept for this session")
        return self._config.mode

    def cycle_font_mode(self) -> int:
        if not self.set_font_mode((self._config.font_mode + 1) % FONT_MODE_COUNT):
            logger.warning(
                f"font mode {self._config.font_mode} is only kept for this session"
            )
        return self._config.font_mode

    def reset_to_defaults(self) -> bool:
        self._config = ns.Config()
        return self.save()
