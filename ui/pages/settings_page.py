import sqlite3
from typing import Optional
from PySide6 import QtWidgets, QtCore

import config
from models.app_state import AppState
from services.backup_service import restore_backup
from services.settings_service import change_admin_password, has_admin_password
from ui import theme
from ui.dialogs.backup_dialog import BackupDialog


class SettingsPage(QtWidgets.QWidget):
    """
    System preferences, admin password and database backup/restore.
    """
    # Emitted after a restore replaced the data
    data_changed = QtCore.Signal()

    def __init__(self, state: AppState, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.state = state
        self.init_ui()

    def init_ui(self) -> None:
        outer = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel("⚙ Settings")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        outer.addWidget(title)

        cols = QtWidgets.QHBoxLayout()
        left = QtWidgets.QVBoxLayout()

        # --- System Preferences ---
        prefs = QtWidgets.QGroupBox("System Preferences")
        pf = QtWidgets.QFormLayout(prefs)
        self.lang = QtWidgets.QComboBox()
        self.lang.addItems(config.LANGUAGES)
        self.lang.setCurrentText(self.state.language)
        self.lang.currentTextChanged.connect(self.on_language)
        pf.addRow("Language", self.lang)
        left.addWidget(prefs)

        # --- Admin Settings ---
        admin = QtWidgets.QGroupBox("Admin Settings")
        af = QtWidgets.QFormLayout(admin)
        self.cur_pw = QtWidgets.QLineEdit()
        self.cur_pw.setEchoMode(QtWidgets.QLineEdit.Password)
        self.new_pw = QtWidgets.QLineEdit()
        self.new_pw.setEchoMode(QtWidgets.QLineEdit.Password)
        self.conf_pw = QtWidgets.QLineEdit()
        self.conf_pw.setEchoMode(QtWidgets.QLineEdit.Password)
        af.addRow("Current Password", self.cur_pw)
        af.addRow("New Password", self.new_pw)
        af.addRow("Confirm New Password", self.conf_pw)
        self.b_pw = QtWidgets.QPushButton("Change Password")
        self.b_pw.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_pw.clicked.connect(self.on_change_password)
        af.addRow(self.b_pw)
        left.addWidget(admin)
        left.addStretch()

        # --- Data Management ---
        data = QtWidgets.QGroupBox("Data Management")
        dv = QtWidgets.QVBoxLayout(data)
        note = QtWidgets.QLabel(
            "Regular backups help protect your data. We recommend creating backups "
            "before making significant changes or periodically for safety."
        )
        note.setWordWrap(True)
        note.setStyleSheet("color:#60a5fa")
        dv.addWidget(note)

        dv.addWidget(QtWidgets.QLabel("Backup Database"))
        self.b_bkp = QtWidgets.QPushButton("Create Backup")
        self.b_bkp.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_bkp.clicked.connect(self.on_backup)
        dv.addWidget(self.b_bkp)

        dv.addSpacing(15)
        dv.addWidget(QtWidgets.QLabel("Restore Database"))
        self.b_pick = QtWidgets.QPushButton("Choose Backup File")
        self.b_pick.clicked.connect(self.on_pick)
        self.b_restore = QtWidgets.QPushButton("Restore Backup")
        self.b_restore.setEnabled(False)
        self.b_restore.clicked.connect(self.on_restore)
        dv.addWidget(self.b_pick)
        dv.addWidget(self.b_restore)
        dv.addStretch()

        cols.addLayout(left, 1)
        cols.addWidget(data, 1)
        outer.addLayout(cols)

        self.selected_file: Optional[str] = None

    def load(self) -> None:
        try:
            first_time = not has_admin_password()
        except (sqlite3.Error, RuntimeError):
            first_time = False
        self.cur_pw.setEnabled(not first_time)
        self.cur_pw.setPlaceholderText("Not set yet" if first_time else "")

    # --- ACTIONS ---

    def on_language(self, lang: str) -> None:
        self.state.language = lang

    def on_change_password(self) -> None:
        try:
            change_admin_password(self.cur_pw.text(), self.new_pw.text(), self.conf_pw.text())
        except ValueError as e:
            QtWidgets.QMessageBox.warning(self, "Error", str(e))
            return
        except (sqlite3.Error, RuntimeError) as e:
            QtWidgets.QMessageBox.critical(self, "Error", f"Could not save password: {e}")
            return

        for w in (self.cur_pw, self.new_pw, self.conf_pw):
            w.clear()
        QtWidgets.QMessageBox.information(self, "Success", "Password changed.")
        self.load()

    def on_backup(self) -> None:
        BackupDialog(self).exec()

    def on_pick(self) -> None:
        start = str(config.BACKUP_FOLDER) if config.BACKUP_FOLDER else ""
        f, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Choose Backup File", start, f"Backups (*{config.BACKUP_EXTENSION})"
        )
        if f:
            self.selected_file = f
            self.b_pick.setText(QtCore.QFileInfo(f).fileName())
            self.b_restore.setEnabled(True)

    def on_restore(self) -> None:
        if not self.selected_file:
            return
        if QtWidgets.QMessageBox.question(
            self, "Confirm Restore",
            "Replace all current data with this backup?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
        ) != QtWidgets.QMessageBox.Yes:
            return

        try:
            restore_backup(self.selected_file)
        except (ValueError, sqlite3.Error, RuntimeError) as e:
            QtWidgets.QMessageBox.critical(self, "Restore Failed", str(e))
            return

        QtWidgets.QMessageBox.information(self, "Success", "Database restored.")
        self.selected_file = None
        self.b_pick.setText("Choose Backup File")
        self.b_restore.setEnabled(False)
        self.data_changed.emit()
        self.load()
