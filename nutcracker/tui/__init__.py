from nutcracker.tui.renderers import CleanerConsoleUI

__all__ = ["CleanerConsoleUI"]
