"""Masar - teacher recruitment matching API."""

__version__ = "1.0.0"
