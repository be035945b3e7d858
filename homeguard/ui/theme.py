from __future__ import annotations

COLOR_OK = "#10b981"          # emerald-500
COLOR_WARN = "#f97316"        # orange-500
COLOR_CRIT = "#dc2626"        # red-600
COLOR_TEXT = "#e4e4e7"        # zinc-200
COLOR_TEXT_MUTED = "#a1a1aa"  # zinc-400

_BG = "#18181b"       # zinc-900
_CARD = "#27272a"     # zinc-800
_BORDER = "#3f3f46"   # zinc-700
_INPUT = "#1f1f23"
_ACCENT = "#4f46e5"   # indigo-600
_ACCENT_HI = "#6366f1"  # indigo-500

APP_QSS = f"""
QMainWindow, QMessageBox {{
    background: {_BG};
    font-family: "Segoe UI", "Helvetica Neue", Arial;
    font-size: 12px;
}}

QLabel {{
    color: {COLOR_TEXT};
}}

QFrame#Card {{
    background: {_CARD};
    border: 1px solid {_BORDER};
    border-radius: 10px;
}}

QTableWidget, QLineEdit, QComboBox {{
    background: {_INPUT};
    color: {COLOR_TEXT};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    padding: 4px;
    gridline-color: {_BORDER};
}}
QTableWidget::item:selected {{
    background: {_ACCENT};
}}

QHeaderView::section {{
    background: {_CARD};
    color: {COLOR_TEXT_MUTED};
    border: none;
    padding: 5px;
    font-weight: 600;
}}

QPushButton {{
    background: {_ACCENT};
    color: white;
    border: none;
    border-radius: 6px;
    padding: 7px 14px;
    font-weight: 600;
}}
QPushButton:hover {{
    background: {_ACCENT_HI};
}}
QPushButton:checked {{
    background: {COLOR_OK};
}}
QPushButton:disabled {{
    background: {_BORDER};
    color: {COLOR_TEXT_MUTED};
}}
"""

LEVEL_COLORS = {
    "OK": COLOR_OK,
    "WARNING": COLOR_WARN,
    "CRITICAL": COLOR_CRIT,
}
