from pathlib import Path
from typing import Optional

# Global Config (filled by services.file_manager.init_paths)
BASE_FOLDER: Optional[Path] = None
DB_FILE: Optional[Path] = None
BACKUP_FOLDER: Optional[Path] = None
STATE_FILE: Optional[Path] = None
LOG_FILE: Optional[Path] = None

APP_NAME = "GymProDesk"
DB_NAME = "GymProDesk.db"

# Environment variable that overrides the data folder
HOME_ENV_VAR = "GYMPRODESK_HOME"
POINTER_FILE_NAME = ".gymprodesk_config"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = "INFO"

LANGUAGES = ["English", "Spanish", "French"]

BACKUP_EXTENSION = ".backup"
MIN_PASSWORD_LENGTH = 4

# Prices are kept in Algerian dinar
CURRENCY = "DA"

PAGES = ["dashboard", "members", "subscriptions", "statistics", "settings"]
