from typing import Optional
from PySide6 import QtWidgets, QtCore

from controllers.member_controller import MemberController
from ui import theme
from ui.dialogs.member_dialog import MemberDialog


class MembersPage(QtWidgets.QWidget):
    """
    Members page: search bar, add button and the members table.
    Everything shown here is read back from the controller after each action.
    """
    data_changed = QtCore.Signal()

    def __init__(self, controller: Optional[MemberController] = None, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.controller = controller or MemberController()
        self.init_ui()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        title = QtWidgets.QLabel("👤 Members")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(title)

        # Page-level error banner
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

        # Search + Add
        top = QtWidgets.QHBoxLayout()
        self.q = QtWidgets.QLineEdit()
        self.q.setPlaceholderText("Search by name or email...")
        self.q.returnPressed.connect(self.on_search)
        self.b_src = QtWidgets.QPushButton("🔍 Search")
        self.b_src.setStyleSheet("background:#0044cc;color:white;font-weight:bold")
        self.b_src.clicked.connect(self.on_search)
        self.b_add = QtWidgets.QPushButton("➕ Add New Member")
        self.b_add.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_add.clicked.connect(self.on_add)
        top.addWidget(self.q, 1)
        top.addWidget(self.b_src)
        top.addWidget(self.b_add)
        layout.addLayout(top)

        self.table = QtWidgets.QTableWidget()
        self.table.setColumnCount(5)
        self.table.setHorizontalHeaderLabels(["ID", "Name", "Email", "Phone", "Actions"])
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

    # --- RENDER ---

    def refresh_view(self) -> None:
        c = self.controller
        self.err.setText(c.page_error or "")
        self.err_box.setVisible(bool(c.page_error))
        self.b_dismiss.setVisible(not c.is_fatal)

        enabled = c.controls_enabled
        for w in (self.q, self.b_src, self.b_add):
            w.setEnabled(enabled)

        self.table.setRowCount(0)
        for i, m in enumerate(c.records):
            self.table.insertRow(i)
            self.table.setItem(i, 0, QtWidgets.QTableWidgetItem(str(m.id)))
            self.table.setItem(i, 1, QtWidgets.QTableWidgetItem(m.name))
            self.table.setItem(i, 2, QtWidgets.QTableWidgetItem(m.email))
            self.table.setItem(i, 3, QtWidgets.QTableWidgetItem(m.phone or "-"))

            w = QtWidgets.QWidget()
            h = QtWidgets.QHBoxLayout(w)
            h.setContentsMargins(0, 0, 0, 0)

            b_ed = QtWidgets.QPushButton("Edit")
            b_ed.setToolTip(f"Edit {m.name}")
            b_ed.setEnabled(enabled)
            b_ed.clicked.connect(lambda _c, x=m.id: self.on_edit(x))

            b_del = QtWidgets.QPushButton("Delete")
            b_del.setStyleSheet(theme.DANGER_BUTTON)
            b_del.setToolTip(f"Delete {m.name}")
            b_del.setEnabled(enabled)
            b_del.clicked.connect(lambda _c, x=m.id: self.on_delete(x))

            h.addWidget(b_ed)
            h.addWidget(b_del)
            self.table.setCellWidget(i, 4, w)

        if c.is_loading and not c.records:
            self.empty.setText("Loading members...")
        elif not c.records and not c.page_error:
            self.empty.setText("No members found. Add one using the button above!")
        else:
            self.empty.setText("")

    # --- ACTIONS ---

    def on_search(self) -> None:
        self.controller.search(self.q.text())
        self.refresh_view()

    def on_add(self) -> None:
        self.controller.open_for_add()
        self._open_dialog()

    def on_edit(self, member_id: int) -> None:
        if self.controller.open_for_edit(member_id):
            self._open_dialog()
        else:
            self.refresh_view()

    def _open_dialog(self) -> None:
        if not self.controller.is_modal_open:
            return
        if MemberDialog(self.controller, self).exec() == QtWidgets.QDialog.Accepted:
            self.data_changed.emit()
        self.refresh_view()

    def on_delete(self, member_id: int) -> None:
        def confirm(prompt: str) -> bool:
            return QtWidgets.QMessageBox.question(
                self, "Confirm Delete", prompt,
                QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
            ) == QtWidgets.QMessageBox.Yes

        if self.controller.delete(member_id, confirm):
            self.data_changed.emit()
        self.refresh_view()

    def on_dismiss(self) -> None:
        self.controller.dismiss_error()
        self.refresh_view()
