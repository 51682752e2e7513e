from typing import Dict, Optional
from PySide6 import QtWidgets, QtCore

import config
from models.app_state import AppState
from services.file_manager import save_state
from ui import theme
from ui.pages.members_page import MembersPage
from ui.pages.settings_page import SettingsPage
from ui.pages.statistics_page import DashboardPage, StatisticsPage
from ui.pages.subscriptions_page import SubscriptionsPage

NAV_ITEMS = [
    ("dashboard", "🏠 Dashboard"),
    ("members", "👤 Members"),
    ("subscriptions", "💳 Subscriptions"),
    ("statistics", "📊 Statistics"),
    ("settings", "⚙ Settings"),
]


class MainDashboard(QtWidgets.QMainWindow):
    """
    The main window: a collapsible sidebar on the left, the active page on the right.
    All UI flags (sidebar, dark mode, active page, language) live in one AppState,
    written back to disk when the window closes.
    """
    def __init__(self, state: Optional[AppState] = None):
        super().__init__()
        self.state = state or AppState()
        self.setWindowTitle(f"💪 {config.APP_NAME}")
        self.resize(1300, 850)

        self.nav_buttons: Dict[str, QtWidgets.QPushButton] = {}
        self.pages: Dict[str, QtWidgets.QWidget] = {}

        self.init_ui()
        self.apply_state()

    def init_ui(self) -> None:
        cw = QtWidgets.QWidget()
        self.setCentralWidget(cw)
        layout = QtWidgets.QHBoxLayout(cw)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- SIDEBAR ---
        sidebar = QtWidgets.QVBoxLayout()
        sidebar.setContentsMargins(10, 10, 10, 10)
        head = QtWidgets.QLabel("💪 Gym Dashboard")
        head.setStyleSheet("font-size:18px;font-weight:bold")
        sidebar.addWidget(head)
        sidebar.addSpacing(10)

        for key, label in NAV_ITEMS:
            b = QtWidgets.QPushButton(label)
            b.setMinimumHeight(40)
            b.setCheckable(True)
            b.setCursor(QtCore.Qt.PointingHandCursor)
            b.clicked.connect(lambda _c, k=key: self.show_page(k))
            sidebar.addWidget(b)
            self.nav_buttons[key] = b

        sidebar.addStretch()
        self.b_dark = QtWidgets.QPushButton()
        self.b_dark.clicked.connect(self.toggle_dark_mode)
        sidebar.addWidget(self.b_dark)

        self.sidebar = QtWidgets.QWidget()
        self.sidebar.setLayout(sidebar)
        self.sidebar.setFixedWidth(240)
        layout.addWidget(self.sidebar)

        # --- CONTENT ---
        content = QtWidgets.QVBoxLayout()
        bar = QtWidgets.QHBoxLayout()
        self.b_menu = QtWidgets.QPushButton("☰")
        self.b_menu.setFixedWidth(44)
        self.b_menu.setToolTip("Show/Hide sidebar")
        self.b_menu.clicked.connect(self.toggle_sidebar)
        bar.addWidget(self.b_menu)
        bar.addStretch()
        content.addLayout(bar)

        self.stacked = QtWidgets.QStackedWidget()
        content.addWidget(self.stacked, 1)
        layout.addLayout(content, 1)

        self.p_dash = DashboardPage()
        self.p_mem = MembersPage()
        self.p_sub = SubscriptionsPage()
        self.p_stats = StatisticsPage()
        self.p_set = SettingsPage(self.state)
        self.pages = {
            "dashboard": self.p_dash,
            "members": self.p_mem,
            "subscriptions": self.p_sub,
            "statistics": self.p_stats,
            "settings": self.p_set,
        }
        for p in self.pages.values():
            self.stacked.addWidget(p)

        # Member or plan changes feed the read-only summaries
        self.p_mem.data_changed.connect(self.reload_summaries)
        self.p_sub.data_changed.connect(self.reload_summaries)
        # A restore swaps all data under the CRUD pages: re-read them
        self.p_set.data_changed.connect(self.reload_data_pages)

    # --- STATE ---

    def apply_state(self) -> None:
        self.setStyleSheet(theme.stylesheet(self.state.dark_mode))
        self.sidebar.setStyleSheet(theme.sidebar_style(self.state.dark_mode))
        self.b_dark.setText("☀️ Light Mode" if self.state.dark_mode else "🌙 Dark Mode")
        self.sidebar.setVisible(self.state.sidebar_open)

        # Pages hold their own controllers; load them once
        self.p_mem.load()
        self.p_sub.load()
        self.reload_summaries()
        self.show_page(self.state.active_page)

    def show_page(self, key: str) -> None:
        if key not in self.pages:
            key = "dashboard"
        self.state.active_page = key
        for k, b in self.nav_buttons.items():
            b.setChecked(k == key)

        page = self.pages[key]
        # Data pages re-read after each mutation and summaries follow data_changed.
        # Settings re-reads whether an admin password exists.
        if key == "settings":
            page.load()
        self.stacked.setCurrentWidget(page)

    def toggle_sidebar(self) -> None:
        self.state.sidebar_open = not self.state.sidebar_open
        self.sidebar.setVisible(self.state.sidebar_open)

    def toggle_dark_mode(self) -> None:
        self.state.dark_mode = not self.state.dark_mode
        self.setStyleSheet(theme.stylesheet(self.state.dark_mode))
        self.sidebar.setStyleSheet(theme.sidebar_style(self.state.dark_mode))
        self.b_dark.setText("☀️ Light Mode" if self.state.dark_mode else "🌙 Dark Mode")

    def reload_summaries(self) -> None:
        self.p_dash.load()
        self.p_stats.load()

    def reload_data_pages(self) -> None:
        self.p_mem.controller.refresh()
        self.p_mem.refresh_view()
        self.p_sub.controller.refresh()
        self.p_sub.refresh_view()
        self.reload_summaries()

    def closeEvent(self, event) -> None:
        save_state(self.state)
        super().closeEvent(event)
