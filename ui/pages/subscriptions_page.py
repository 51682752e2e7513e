from typing import Optional
from PySide6 import QtWidgets, QtCore

import config
from controllers.subscription_controller import SubscriptionController
from core.utils import format_price, format_duration
from ui import theme
from ui.dialogs.subscription_dialog import SubscriptionDialog


class SubscriptionsPage(QtWidgets.QWidget):
    """Subscription plans table with Add/Edit/Delete."""
    data_changed = QtCore.Signal()

    def __init__(self, controller: Optional[SubscriptionController] = None, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.controller = controller or SubscriptionController()
        self.init_ui()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        title = QtWidgets.QLabel("💳 Subscription Plans")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)

        err_row = QtWidgets.QHBoxLayout()
        self.err = QtWidgets.QLabel()
        self.err.setWordWrap(True)
        self.err.setStyleSheet(theme.ERROR_STYLE)
        self.b_dismiss = QtWidgets.QPushButton("✖")
        self.b_dismiss.setFixedWidth(36)
        self.b_dismiss.clicked.connect(self.on_dismiss)
        err_row.addWidget(self.err, 1)
        err_row.addWidget(self.b_dismiss)
        self.err_box = QtWidgets.QWidget()
        self.err_box.setLayout(err_row)
        layout.addWidget(self.err_box)

        top = QtWidgets.QHBoxLayout()
        top.addStretch()
        self.b_add = QtWidgets.QPushButton("➕ Add New Plan")
        self.b_add.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_add.clicked.connect(self.on_add)
        top.addWidget(self.b_add)
        layout.addLayout(top)

        self.table = QtWidgets.QTableWidget()
        self.table.setColumnCount(5)
        self.table.setHorizontalHeaderLabels(["Name", "Description", "Duration", f"Price ({config.CURRENCY})", "Actions"])
        self.table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table, 1)

        self.empty = QtWidgets.QLabel()
        self.empty.setAlignment(QtCore.Qt.AlignCenter)
        self.empty.setStyleSheet("color:#888")
        layout.addWidget(self.empty)

    def load(self) -> None:
        self.controller.load()
        self.refresh_view()

    def refresh_view(self) -> None:
        c = self.controller
        self.err.setText(c.page_error or "")
        self.err_box.setVisible(bool(c.page_error))
        self.b_dismiss.setVisible(not c.is_fatal)

        enabled = c.controls_enabled
        self.b_add.setEnabled(enabled)

        self.table.setRowCount(0)
        for i, s in enumerate(c.records):
            self.table.insertRow(i)
            self.table.setItem(i, 0, QtWidgets.QTableWidgetItem(s.name))
            self.table.setItem(i, 1, QtWidgets.QTableWidgetItem(s.description or "-"))
            self.table.setItem(i, 2, QtWidgets.QTableWidgetItem(format_duration(s.duration_days)))
            self.table.setItem(i, 3, QtWidgets.QTableWidgetItem(format_price(s.price)))

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)

            b_ed = QtWidgets.QPushButton("Edit")
            b_ed.setEnabled(enabled)
            b_ed.clicked.connect(lambda _c, x=s.id: self.on_edit(x))

            b_del = QtWidgets.QPushButton("Delete")
            b_del.setStyleSheet(theme.DANGER_BUTTON)
            b_del.setEnabled(enabled)
            b_del.clicked.connect(lambda _c, x=s.id: self.on_delete(x))

            h.addWidget(b_ed)
            h.addWidget(b_del)
            self.table.setCellWidget(i, 4, w)

        if c.is_loading and not c.records:
            self.empty.setText("Loading subscriptions...")
        elif not c.records and not c.page_error:
            self.empty.setText("No subscription plans yet. Add one using the button above!")
        else:
            self.empty.setText("")

    def on_add(self) -> None:
        self.controller.open_for_add()
        self._open_dialog()

    def on_edit(self, plan_id: int) -> None:
        if self.controller.open_for_edit(plan_id):
            self._open_dialog()
        else:
            self.refresh_view()

    def _open_dialog(self) -> None:
        if not self.controller.is_modal_open:
            return
        if SubscriptionDialog(self.controller, self).exec() == QtWidgets.QDialog.Accepted:
            self.data_changed.emit()
        self.refresh_view()

    def on_delete(self, plan_id: int) -> None:
        def confirm(prompt: str) -> bool:
            return QtWidgets.QMessageBox.question(
                self, "Confirm Delete", prompt,
                QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
            ) == QtWidgets.QMessageBox.Yes

        if self.controller.delete(plan_id, confirm):
            self.data_changed.emit()
        self.refresh_view()

    def on_dismiss(self) -> None:
        self.controller.dismiss_error()
        self.refresh_view()
