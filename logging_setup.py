import json, logging.config, pathlib, copy
from functools import lru_cache

_DEFAULT = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s [%(levelname)s] %(name)s - %(message)s"}
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
            "level": "INFO",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": "teleop_client.log",
            "maxBytes": 500_000,
            "backupCount": 5,
            "formatter": "plain",
            "level": "DEBUG",
        },
    },
    "loggers": {
        # per-frame DEBUG lines, 20 a second; opt in with frame_level="DEBUG"
        "teleop_client.control": {"level": "INFO"},
    },
    "root": {"handlers": ["console", "file"], "level": "INFO"},
}

@lru_cache(maxsize=1)
def setup_logging(cfg_path: str | None = "log_config.json",
                  *,                                   # force kw-only overrides
                  logfile: str | None = None,
                  console_level: str | None = None,
                  frame_level: str | None = None):
    """Set up console and rotating-file logging for the teleop client.

    Runs once per process; later calls return the cached result. A JSON file
    at *cfg_path* replaces the matching top-level sections of the defaults.
    The dispatcher logs one DEBUG line per control frame (20 a second), so
    ``teleop_client.control`` stays at INFO unless *frame_level* lowers it.
    *logfile* and *console_level* override the file and console handlers.
    """
    config = copy.deepcopy(_DEFAULT)
    if cfg_path and pathlib.Path(cfg_path).exists():
        user = json.loads(pathlib.Path(cfg_path).read_text())
        config.update(user)

    if logfile:
        config["handlers"]["file"]["filename"] = logfile
    if console_level:
        config["handlers"]["console"]["level"] = console_level
    if frame_level:
        config.setdefault("loggers", {})["teleop_client.control"] = {"level": frame_level}

    logging.config.dictConfig(config)
