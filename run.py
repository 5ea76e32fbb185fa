# -*- coding: utf-8 -*-

"""
Main entry point for launching the Hierarchy Sections demo window.
"""

import logging
import tkinter as tk

import sv_ttk

from hierarchy_sections.logging_config import setup_logging
from hierarchy_sections.app import HierarchySectionsApp


def main():
    """
    Configure logging, main window, and launch application.
    """
    setup_logging()

    root = tk.Tk()
    root.title("Hierarchy Sections")
    window_width, window_height = 520, 560
    # Calculate position to center the window
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    sv_ttk.set_theme("light")

    HierarchySectionsApp(root)

    root.mainloop()
    logging.info("===== Application terminated =====")


if __name__ == '__main__':
    main()
