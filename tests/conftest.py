"""Shared test configuration."""

import os

# Widgets and clipboard are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
