"""Shared pytest fixtures and helpers for diary tests."""

from .core import *  # noqa: F401,F403
