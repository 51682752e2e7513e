import logging
import sqlite3
from typing import List, Optional
from PySide6 import QtWidgets

import config
from core.database import init_db, close_db
from core.utils import setup_logging
from services.file_manager import load_or_setup_paths, load_state
from ui.dashboards.main_dashboard import MainDashboard

logger = logging.getLogger(__name__)


class GymApp(QtWidgets.QApplication):
    """
    The main Application class that manages the application lifecycle.
    1. Resolves the data folder and configures logging.
    2. Opens the database (the one handle kept until exit).
    3. Restores the saved UI state and shows the main window.
    """
    def __init__(self, args: List[str]):
        super().__init__(args)
        self.setApplicationName(config.APP_NAME)
        self.setOrganizationName(config.APP_NAME)
        self.main_window: Optional[MainDashboard] = None
        self.aboutToQuit.connect(close_db)

    def start(self) -> None:
        """Initializes the environment and shows the main window."""
        # 1. Setup File System + Logging
        load_or_setup_paths()
        setup_logging()
        logger.info(f"Data folder: {config.BASE_FOLDER}")

        # 2. Initialize Database
        # A failure is not fatal to the process: the pages show the error
        # and keep their controls disabled.
        try:
            init_db()
        except (sqlite3.Error, RuntimeError) as e:
            logger.error(f"Could not open database {config.DB_FILE}: {e}")

        # 3. Show Main Window
        self.main_window = MainDashboard(load_state())
        self.main_window.show()
