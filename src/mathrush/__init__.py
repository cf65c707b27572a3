"""Math Rush — a 30-second arithmetic game served by NiceGUI."""

__version__ = "1.0.0"
