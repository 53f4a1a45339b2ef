"""
Appearance Monitor - desktop appearance preference reporter

Watches the desktop's color scheme, accent color and contrast preferences
through the XDG settings portal and reports every change as a JSON line
snapshot for scripts, status bars and theming daemons.
"""

__version__ = "0.1.0"
__author__ = "Appearance Monitor Team"
