"""Timola Tours API: tour catalog, booking inquiries and contact messages."""

__version__ = "1.0.0"
