"""
Stylesheets for the two colour schemes.
The dark one keeps the black/yellow look of the rest of the app.
"""

DARK_STYLE = """
    QMainWindow, QDialog, QWidget { background: #0c0c0c; color: white; font-family: 'Segoe UI'; }
    QLabel { color: white; }
    QLineEdit, QComboBox, QSpinBox, QTextEdit, QPlainTextEdit {
        padding: 8px; background: #222; color: white; border: 1px solid #444; border-radius: 4px;
    }
    QPushButton { background: #333; color: white; padding: 8px; border-radius: 4px; }
    QPushButton:hover { background: #fc0; color: black; }
    QPushButton:disabled { background: #1b1b1b; color: #555; }
    QTableWidget { gridline-color: #444; background: #111; }
    QHeaderView::section { background-color: #333; color: white; padding: 5px; }
    QGroupBox { border: 1px solid #444; margin-top: 10px; padding-top: 15px; font-weight: bold; }
    QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; }
"""

LIGHT_STYLE = """
    QMainWindow, QDialog, QWidget { background: #f3f4f6; color: #111; font-family: 'Segoe UI'; }
    QLabel { color: #111; }
    QLineEdit, QComboBox, QSpinBox, QTextEdit, QPlainTextEdit {
        padding: 8px; background: white; color: #111; border: 1px solid #ccc; border-radius: 4px;
    }
    QPushButton { background: #e5e7eb; color: #111; padding: 8px; border-radius: 4px; }
    QPushButton:hover { background: #16a34a; color: white; }
    QPushButton:disabled { background: #f3f4f6; color: #aaa; }
    QTableWidget { gridline-color: #ddd; background: white; }
    QHeaderView::section { background-color: #e5e7eb; color: #111; padding: 5px; }
    QGroupBox { border: 1px solid #ccc; margin-top: 10px; padding-top: 15px; font-weight: bold; }
    QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; }
"""

SIDEBAR_DARK = "border-right:2px solid #333;background:#111"
SIDEBAR_LIGHT = "border-right:2px solid #ddd;background:#fff"

ERROR_STYLE = "background:#500;color:white;padding:8px;border:1px solid red;border-radius:4px"
PRIMARY_BUTTON = "background:#006600;color:white;font-weight:bold"
DANGER_BUTTON = "background:#b71c1c;color:white;font-size:11px"


def stylesheet(dark_mode: bool) -> str:
    return DARK_STYLE if dark_mode else LIGHT_STYLE


def sidebar_style(dark_mode: bool) -> str:
    return SIDEBAR_DARK if dark_mode else SIDEBAR_LIGHT
