"""Query and adjust the display backlight through sysfs."""

__version__ = "0.1.0"
