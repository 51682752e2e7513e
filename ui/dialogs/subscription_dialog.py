from typing import Optional
from PySide6 import QtWidgets, QtCore

import config
from controllers.subscription_controller import SubscriptionController
from ui import theme


class SubscriptionDialog(QtWidgets.QDialog):
    """
    Add/Edit form for a subscription plan.
    Duration and price are typed as text and checked by the controller.
    """
    def __init__(self, controller: SubscriptionController, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.controller = controller
        editing = controller.editing_id is not None
        self.setWindowTitle("✏️ Edit Plan" if editing else "➕ Add New Plan")
        self.setModal(True)
        self.setFixedWidth(440)

        self.save_label = "Update Plan" if editing else "Add Plan"
        self.init_ui()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()
        f = self.controller.form

        self.nm = QtWidgets.QLineEdit(f["name"])
        self.nm.setPlaceholderText("e.g. Monthly")
        self.desc = QtWidgets.QPlainTextEdit(f["description"])
        self.desc.setMaximumHeight(90)
        self.dur = QtWidgets.QLineEdit(f["duration_days"])
        self.dur.setPlaceholderText("e.g. 30")
        self.price = QtWidgets.QLineEdit(f["price"])
        self.price.setPlaceholderText("e.g. 2500.00")

        form.addRow("Name*", self.nm)
        form.addRow("Description", self.desc)
        form.addRow("Duration (days)*", self.dur)
        form.addRow(f"Price ({config.CURRENCY})*", self.price)
        layout.addLayout(form)

        self.err = QtWidgets.QLabel()
        self.err.setWordWrap(True)
        self.err.setStyleSheet(theme.ERROR_STYLE)
        self.err.hide()
        layout.addWidget(self.err)

        btns = QtWidgets.QHBoxLayout()
        self.b_cancel = QtWidgets.QPushButton("Cancel")
        self.b_cancel.clicked.connect(self.reject)
        self.b_save = QtWidgets.QPushButton(self.save_label)
        self.b_save.setStyleSheet(theme.PRIMARY_BUTTON)
        self.b_save.clicked.connect(self.on_save)
        btns.addWidget(self.b_cancel)
        btns.addWidget(self.b_save)
        layout.addLayout(btns)

    def set_busy(self, busy: bool) -> None:
        for w in (self.nm, self.desc, self.dur, self.price, self.b_cancel, self.b_save):
            w.setEnabled(not busy)
        self.b_save.setText("Saving..." if busy else self.save_label)
        QtWidgets.QApplication.processEvents()

    def on_save(self) -> None:
        c = self.controller
        c.set_field("name", self.nm.text())
        c.set_field("description", self.desc.toPlainText())
        c.set_field("duration_days", self.dur.text())
        c.set_field("price", self.price.text())

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
