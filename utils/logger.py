import logging
import os

from colorlog import ColoredFormatter

from config.settings import settings


def setup_logging():
    """Set up global logging with color in console and optional file output."""
    # ───────────────────────────────
    # 🎨 Define color format for console
    # ───────────────────────────────
    color_formatter = ColoredFormatter(
        fmt="%(log_color)s%(asctime)s [%(levelname)s] %(name)s:%(reset)s %(message_log_color)s%(message)s",
        datefmt="%H:%M:%S",
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
        secondary_log_colors={
            "message": {
                "ERROR": "red",
                "CRITICAL": "bold_red",
                "WARNING": "yellow",
                "INFO": "white",
                "DEBUG": "cyan",
            }
        },
        style="%",
    )

    # ───────────────────────────────
    # 🧱 Base config
    # ───────────────────────────────
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL)

    # Warm serverless containers re-run setup; don't stack handlers
    for h in list(root_logger.handlers):
        if getattr(h, "_fleetfaults", False):
            root_logger.removeHandler(h)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(color_formatter)
    console_handler._fleetfaults = True
    root_logger.addHandler(console_handler)

    # File handler (plain text); read-only filesystems on serverless hosts keep it off
    if settings.LOG_TO_FILE:
        log_dir = "logs"
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, "fleetfaults.log"), encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        file_handler._fleetfaults = True
        root_logger.addHandler(file_handler)

    root_logger.info("🌿 Logging initialized")


def get_logger(name: str):
    """Return a namespaced logger."""
    return logging.getLogger(name)
