"""Bulk task launch systems on threads, with timing, PPM output and threading demos."""

__version__ = "0.1.0"