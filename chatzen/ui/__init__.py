# SPDX-License-Identifier: MIT
"""
Qt user interface components for the Chat Zen desktop.
"""

from .main_window import MainWindow  # noqa: F401
