from typing import Optional
from PySide6 import QtWidgets, QtCore

from controllers.member_controller import MemberController
from ui import theme


class MemberDialog(QtWidgets.QDialog):
    """
    Add/Edit form for a member.
    Edits go straight into the controller; the dialog only closes when
    controller.save() succeeds, otherwise the error is shown under the form.
    """
    def __init__(self, controller: MemberController, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.controller = controller
        editing = controller.editing_id is not None
        self.setWindowTitle("✏️ Edit Member" if editing else "➕ Add New Member")
        self.setModal(True)
        self.setFixedWidth(420)

        self.init_ui(editing)

    def init_ui(self, editing: bool) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()

        self.nm = QtWidgets.QLineEdit(self.controller.form["name"])
        self.nm.setPlaceholderText("Enter full name")
        self.em = QtWidgets.QLineEdit(self.controller.form["email"])
        self.em.setPlaceholderText("Enter email address")
        self.ph = QtWidgets.QLineEdit(self.controller.form["phone"])
        self.ph.setPlaceholderText("Enter phone number")

        form.addRow("Name*", self.nm)
        form.addRow("Email*", self.em)
        form.addRow("Phone", self.ph)
        layout.addLayout(form)

        self.err = QtWidgets.QLabel()
        self.err.setWordWrap(True)
        self.err.setStyleSheet(theme.ERROR_STYLE)
        self.err.hide()
        layout.addWidget(self.err)

        btns = QtWidgets.QHBoxLayout()
        self.b_cancel = QtWidgets.QPushButton("Cancel")
        self.b_cancel.clicked.connect(self.reject)
        self.save_label = "Update Member" if editing else "Add Member"
        self.b_save = QtWidgets.QPushButton(self.save_label)
        self.b_save.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_save.setDefault(True)
        self.b_save.clicked.connect(self.on_save)
        btns.addWidget(self.b_cancel)
        btns.addWidget(self.b_save)
        layout.addLayout(btns)

    def set_busy(self, busy: bool) -> None:
        for w in (self.nm, self.em, self.ph, self.b_cancel, self.b_save):
            w.setEnabled(not busy)
        self.b_save.setText("Saving..." if busy else self.save_label)
        QtWidgets.QApplication.processEvents()

    def on_save(self) -> None:
        c = self.controller
        c.set_field("name", self.nm.text())
        c.set_field("email", self.em.text())
        c.set_field("phone", self.ph.text())

        self.set_busy(True)
        ok = c.save()
        self.set_busy(False)

        if ok:
            self.accept()
        else:
            self.err.setText(c.modal_error)
            self.err.show()

    def reject(self) -> None:
        if self.controller.is_saving:
            return
        self.controller.close_editor()
        super().reject()

    def keyPressEvent(self, event) -> None:
        if event.key() == QtCore.Qt.Key_Escape and self.controller.is_saving:
            return
        super().keyPressEvent(event)
