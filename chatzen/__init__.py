# SPDX-License-Identifier: MIT
"""
Chat Zen: a small relaxation desktop for cats and their humans.

The package is organised so that `chatzen.core` hosts domain logic and services,
while `chatzen.ui` contains Qt widgets and windows. The `chatzen.main` module is
the desktop entry point and `chatzen.gradio_app` serves the same apps in a browser.
"""

__all__ = ["main"]
