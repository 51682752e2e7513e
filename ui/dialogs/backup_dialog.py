import sqlite3
from pathlib import Path
from typing import Optional
from PySide6 import QtWidgets, QtCore

from core.utils import default_backup_name
from services.backup_service import create_backup


class BackupDialog(QtWidgets.QDialog):
    """
    Asks for a backup name and writes a copy of the database to the Backups folder.
    """
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Create New Backup")
        self.setFixedSize(400, 220)
        self.backup_path: Optional[Path] = None
        self.init_ui()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        title = QtWidgets.QLabel("💾 Secure Your Data")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: bold; color: #ffcc00;")
        layout.addWidget(title)

        info = QtWidgets.QLabel("Regular backups help protect your data.")
        info.setAlignment(QtCore.Qt.AlignCenter)
        info.setStyleSheet("color: #aaa;")
        layout.addWidget(info)

        self.name_inp = QtWidgets.QLineEdit(default_backup_name())
        self.name_inp.setPlaceholderText("Backup name")
        layout.addWidget(self.name_inp)

        btns = QtWidgets.QHBoxLayout()
        b_cancel = QtWidgets.QPushButton("Cancel")
        b_cancel.clicked.connect(self.reject)
        b_ok = QtWidgets.QPushButton("Create Backup")
        b_ok.setStyleSheet("background: #006600; font-weight: bold;")
        b_ok.clicked.connect(self.start_backup)
        btns.addWidget(b_cancel)
        btns.addWidget(b_ok)
        layout.addLayout(btns)

    def start_backup(self) -> None:
        try:
            self.backup_path = create_backup(self.name_inp.text())
        except (ValueError, sqlite3.Error, RuntimeError) as e:
            QtWidgets.QMessageBox.warning(self, "Backup Failed", str(e))
            return

        QtWidgets.QMessageBox.information(self, "Success", f"✅ Backup saved to:\n{self.backup_path}")
        self.accept()
