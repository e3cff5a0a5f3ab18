"""Pulseboard: personal news, blog and engagement analytics."""

__version__ = "0.1.0"
