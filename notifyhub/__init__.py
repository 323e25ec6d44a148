"""Notification core: lifecycle state machine and batched publishing."""

__version__ = "0.1.0"
