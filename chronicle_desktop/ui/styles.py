"""
Application stylesheet for Chronicle Desktop, layered over the qt-material light theme.
"""

ACCENT = "#a5cd39"

STYLESHEET = f"""
QMainWindow {{
    background-color: #FFFFFF;
}}

QTabWidget::pane {{
    border: 1px solid #E5E7EB;
    background-color: #FFFFFF;
}}

QTabBar::tab {{
    padding: 8px 15px;
    min-width: 80px;
}}

QTabBar::tab:selected {{
    border-bottom: 2px solid {ACCENT};
}}

QTableWidget {{
    gridline-color: #E5E7EB;
    selection-background-color: {ACCENT};
    selection-color: #111827;
}}

QHeaderView::section {{
    background-color: #F3F4F6;
    padding: 4px;
    border: none;
    font-weight: bold;
}}

QPushButton:disabled {{
    color: #9CA3AF;
}}
"""
