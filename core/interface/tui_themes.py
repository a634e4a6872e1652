#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "tuiman": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "hint": "#9db3c2",
        "section": "#7db2d3 bold",
        "ok": "#76d6a8",
        "warn": "#f0c56d",
        "error": "#ef8d8d",
        "border": "#405266",
        "divider": "#7c6ea8",
        "header": "bg:#161b22 #7db2d3 bold",
        "selected": "bg:#1f2731 #d7dfe6 bold",
        "status": "bg:#161b22 #9db3c2",
        "status.error": "bg:#161b22 #ef8d8d bold",
        "status.busy": "bg:#161b22 #f0c56d",
        "footer": "#9db3c2",
        "input": "#d7dfe6 bold",
        "method.get": "#88d3a8 bold",
        "method.post": "#f1c76e bold",
        "method.put": "#88c6f0 bold",
        "method.patch": "#cf9bf2 bold",
        "method.delete": "#f19393 bold",
        "json.delimiter": "#7c6ea8",
        "json.key": "#7db2d3",
        "json.string": "#76d6a8",
        "json.literal": "#cf9bf2",
        "json.number": "#f0c56d",
        "json.plain": "#d7dfe6",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "hint": "#a7b0ba",
        "section": "#ffb347 bold",
        "ok": "#b8f171",
        "warn": "#f0c674",
        "error": "#ff6b6b",
        "border": "#5a6169",
        "divider": "#8a9097",
        "header": "bg:#3d4047 #ffb347 bold",
        "selected": "bg:#3d4047 #e8eaec bold",
        "status": "bg:#3d4047 #a7b0ba",
        "status.error": "bg:#3d4047 #ff6b6b bold",
        "status.busy": "bg:#3d4047 #f0c674",
        "footer": "#a7b0ba",
        "input": "#e8eaec bold",
        "method.get": "#b8f171 bold",
        "method.post": "#f0c674 bold",
        "method.put": "#88c6f0 bold",
        "method.patch": "#cf9bf2 bold",
        "method.delete": "#ff6b6b bold",
        "json.delimiter": "#8a9097",
        "json.key": "#ffb347",
        "json.string": "#b8f171",
        "json.literal": "#cf9bf2",
        "json.number": "#f0c674",
        "json.plain": "#e8eaec",
    },
}

DEFAULT_THEME = "tuiman"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)


def method_style(method: str) -> str:
    key = f"method.{(method or '').lower()}"
    return f"class:{key}" if key in THEMES[DEFAULT_THEME] else "class:hint"


__all__ = ["THEMES", "DEFAULT_THEME", "get_theme_palette", "build_style", "method_style"]
