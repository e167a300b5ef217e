"""Admin dashboard package: main window and its pages."""

from .main_window import MainWindow

__all__ = ["MainWindow"]
