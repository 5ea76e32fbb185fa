"""Presentation layer: controller, row rendering and Tk widgets."""
