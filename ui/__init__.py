"""Interaktive Oberfläche."""

from ui.menu import ConsoleMenu

__all__ = ["ConsoleMenu"]
