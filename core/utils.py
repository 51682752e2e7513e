import datetime
import logging
import re
from typing import Optional

import config

BACKUP_NAME_PATTERN = re.compile(r"^[A-Za-z0-9 _-]+$")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configures the root logger once for the whole application.
    Logs go to the console, and to config.LOG_FILE when the data folder is known.
    """
    handlers = [logging.StreamHandler()]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE, encoding="utf-8"))

    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def format_price(value: float) -> str:
    """
    Formats a plan price for display.
    Example: 1500 -> '1,500.00 DA'.
    """
    return f"{value:,.2f} {config.CURRENCY}"


def format_duration(days: int) -> str:
    """
    Example: 1 -> '1 day', 30 -> '30 days'.
    """
    return f"{days} day" if days == 1 else f"{days} days"


def default_backup_name(now: Optional[datetime.datetime] = None) -> str:
    """Timestamped name suggested in the backup dialog."""
    now = now or datetime.datetime.now()
    return f"GymProDesk_Backup_{now.strftime('%Y-%m-%d_%H-%M')}"


def is_valid_backup_name(name: str) -> bool:
    return bool(BACKUP_NAME_PATTERN.match(name))
