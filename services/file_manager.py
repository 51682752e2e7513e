import json
import logging
import os
from pathlib import Path
from typing import Optional

from PySide6 import QtCore

import config
from models.app_state import AppState

logger = logging.getLogger(__name__)


def ensure_folder(p: Path) -> None:
    """Creates the folder if it does not exist."""
    p.mkdir(parents=True, exist_ok=True)


def init_paths(base_path: Path) -> None:
    """
    Initialize all global paths based on the selected base path.
    Sets up the database, backups, UI state and log file locations.
    """
    config.BASE_FOLDER = Path(base_path)
    ensure_folder(config.BASE_FOLDER)

    config.DB_FILE = config.BASE_FOLDER / config.DB_NAME

    config.BACKUP_FOLDER = config.BASE_FOLDER / "Backups"
    ensure_folder(config.BACKUP_FOLDER)

    config.STATE_FILE = config.BASE_FOLDER / "app_state.json"
    config.LOG_FILE = config.BASE_FOLDER / "gymprodesk.log"


def default_data_path() -> Path:
    """Per-user application config folder (e.g. ~/.config/GymProDesk on Linux)."""
    location = QtCore.QStandardPaths.writableLocation(QtCore.QStandardPaths.AppConfigLocation)
    if not location:
        return Path.home() / f".{config.APP_NAME.lower()}"
    path = Path(location)
    # Without an application name Qt returns the generic config folder
    if path.name != config.APP_NAME:
        path = path / config.APP_NAME
    return path


def load_or_setup_paths(pointer_file: Optional[Path] = None) -> Path:
    """
    Resolves the data folder and initialises the global paths.

    Order: the GYMPRODESK_HOME environment variable, then the folder stored in
    the pointer file in the user's home, then the default config location.
    The chosen folder is remembered in the pointer file.
    """
    pointer_file = pointer_file or Path.home() / config.POINTER_FILE_NAME

    # 1. Explicit override
    env_path = os.environ.get(config.HOME_ENV_VAR)
    if env_path:
        init_paths(Path(env_path))
        return config.BASE_FOLDER

    # 2. Saved choice
    if pointer_file.exists():
        try:
            content = pointer_file.read_text(encoding="utf-8").strip()
            if content and Path(content).exists():
                init_paths(Path(content))
                return config.BASE_FOLDER
        except OSError as e:
            logger.warning(f"Could not read {pointer_file}: {e}")

    # 3. Default location, saved for next time
    data_path = default_data_path()
    init_paths(data_path)
    try:
        pointer_file.write_text(str(data_path), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not save data folder to {pointer_file}: {e}")
    return config.BASE_FOLDER


# --- UI STATE ---

def load_state() -> AppState:
    """
    Reads the saved UI state. A missing or corrupt file gives the defaults.
    """
    if not config.STATE_FILE or not config.STATE_FILE.exists():
        return AppState()
    try:
        data = json.loads(config.STATE_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable state file {config.STATE_FILE}: {e}")
        return AppState()
    return AppState.from_dict(data)


def save_state(state: AppState) -> bool:
    """Writes the UI state as JSON. Returns False if it could not be written."""
    if not config.STATE_FILE:
        return False
    try:
        config.STATE_FILE.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
        return True
    except OSError as e:
        logger.error(f"Failed to save UI state: {e}")
        return False
