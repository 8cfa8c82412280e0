"""
Colors, spacing tokens and the QSS stylesheet for the App Guard window.
"""

from __future__ import annotations

SPACING = {
    "xs": "4px",
    "sm": "8px",
    "md": "12px",
    "xl": "24px",
}

FONT_FAMILY = "Segoe UI, -apple-system, BlinkMacSystemFont, sans-serif"

ACCENTS = {
    "blue": "#007AFF",
    "green": "#34C759",
    "red": "#FF3B30",
}

DARK_COLORS = {
    "background": "#000000",
    "surface": "#1C1C1E",
    "text_primary": "#FFFFFF",
    "text_secondary": "#98989D",
    "border": "#38383A",
}


class Theme:
    def __init__(self) -> None:
        self.colors = DARK_COLORS

    def get_stylesheet(self) -> str:
        c = self.colors
        return f"""
        QMainWindow {{
            background-color: {c["background"]};
            color: {c["text_primary"]};
        }}
        QLabel {{
            font-family: {FONT_FAMILY};
            color: {c["text_primary"]};
        }}
        QLabel#TitleLabel {{
            font-size: 26px;
            font-weight: 700;
        }}
        QLabel#SectionLabel {{
            font-size: 17px;
            font-weight: 600;
        }}
        QLabel#HintLabel {{
            font-size: 13px;
            color: {c["text_secondary"]};
        }}
        QFrame#Card {{
            background-color: {c["surface"]};
            border-radius: 16px;
            border: 1px solid {c["border"]};
        }}
        QCheckBox {{
            font-family: {FONT_FAMILY};
            font-size: 15px;
            color: {c["text_primary"]};
            spacing: {SPACING["sm"]};
        }}
        QPushButton#PrimaryButton {{
            background-color: {ACCENTS["blue"]};
            color: #FFFFFF;
            border: none;
            border-radius: 18px;
            padding: {SPACING["sm"]} {SPACING["xl"]};
            font-weight: 600;
        }}
        QPushButton#PrimaryButton:disabled, QPushButton#SecondaryButton:disabled {{
            background-color: {c["border"]};
            color: {c["text_secondary"]};
        }}
        QPushButton#SecondaryButton {{
            background-color: {c["surface"]};
            color: {ACCENTS["blue"]};
            border: 1px solid {c["border"]};
            border-radius: 18px;
            padding: {SPACING["sm"]} {SPACING["xl"]};
        }}
        QLabel#StatusPill {{
            background-color: {c["border"]};
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
        }}
        QLabel#StatusPillActive {{
            background-color: {ACCENTS["green"]};
            color: #FFFFFF;
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
        }}
        QLabel#StatusPillAlert {{
            background-color: {ACCENTS["red"]};
            color: #FFFFFF;
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
        }}
        QListWidget {{
            background-color: {c["surface"]};
            color: {c["text_primary"]};
            border: none;
            font-family: {FONT_FAMILY};
        }}
        """
