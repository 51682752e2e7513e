import logging
import sqlite3
from typing import Optional
from PySide6 import QtWidgets, QtCore

from core.utils import format_price, format_duration
from services.statistics_service import GymStatistics, get_statistics, generate_overview

logger = logging.getLogger(__name__)


class StatCard(QtWidgets.QFrame):
    """Small titled box showing one figure."""
    def __init__(self, title: str, color: str, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setStyleSheet(f"QFrame {{ background:{color}; border-radius:8px; }} QLabel {{ background: transparent; }}")
        v = QtWidgets.QVBoxLayout(self)
        t = QtWidgets.QLabel(title)
        t.setStyleSheet("font-size:13px;color:#ddd")
        self.value = QtWidgets.QLabel("-")
        self.value.setStyleSheet("font-size:24px;font-weight:bold;color:white")
        v.addWidget(t)
        v.addWidget(self.value)

    def set_value(self, text: str) -> None:
        self.value.setText(text)


def _load_stats() -> tuple:
    """Returns (stats, error message)."""
    try:
        return get_statistics(), None
    except (sqlite3.Error, RuntimeError) as e:
        logger.error(f"Error computing statistics: {e}")
        return GymStatistics(), f"Failed to load statistics: {e}"


class StatisticsPage(QtWidgets.QWidget):
    """Analytics & Reports: member and plan figures computed from the store."""
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.init_ui()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel("📊 Analytics & Reports")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)
        sub = QtWidgets.QLabel("Overview of your gym's members and subscription plans")
        sub.setStyleSheet("color:#888")
        layout.addWidget(sub)

        self.err = QtWidgets.QLabel()
        self.err.setStyleSheet("color:#f55")
        self.err.hide()
        layout.addWidget(self.err)

        grid = QtWidgets.QGridLayout()
        self.c_members = StatCard("Total Members", "#1e3a8a")
        self.c_contact = StatCard("Contact Rate", "#581c87")
        self.c_plans = StatCard("Subscription Plans", "#14532d")
        self.c_avg = StatCard("Average Price", "#713f12")
        self.c_range = StatCard("Price Range", "#374151")
        self.c_dur = StatCard("Average Duration", "#374151")
        cards = [self.c_members, self.c_contact, self.c_plans, self.c_avg, self.c_range, self.c_dur]
        for i, card in enumerate(cards):
            grid.addWidget(card, i // 3, i % 3)
        layout.addLayout(grid)
        layout.addStretch()

    def load(self) -> None:
        stats, error = _load_stats()
        self.err.setText(error or "")
        self.err.setVisible(bool(error))

        self.c_members.set_value(str(stats.total_members))
        self.c_contact.set_value(f"{stats.contact_rate}% with phone")
        self.c_plans.set_value(str(stats.total_plans))
        if stats.total_plans:
            self.c_avg.set_value(format_price(stats.average_price))
            self.c_range.set_value(f"{format_price(stats.min_price)} - {format_price(stats.max_price)}")
            self.c_dur.set_value(format_duration(round(stats.average_duration_days)))
        else:
            for card in (self.c_avg, self.c_range, self.c_dur):
                card.set_value("-")


class DashboardPage(QtWidgets.QWidget):
    """Landing page with a short written overview."""
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel("🏠 Dashboard")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)

        self.brief = QtWidgets.QTextEdit()
        self.brief.setReadOnly(True)
        layout.addWidget(self.brief, 1)

        b = QtWidgets.QPushButton("🔄 Refresh")
        b.clicked.connect(self.load)
        layout.addWidget(b, alignment=QtCore.Qt.AlignRight)

    def load(self) -> None:
        stats, error = _load_stats()
        if error:
            self.brief.setPlainText(error)
        else:
            self.brief.setMarkdown(generate_overview(stats))
