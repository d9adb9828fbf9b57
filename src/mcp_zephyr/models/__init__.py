"""Zephyr models module."""

from .zephyr import ZephyrTestStep

__all__ = ["ZephyrTestStep"]
