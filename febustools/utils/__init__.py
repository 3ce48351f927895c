"""Utilities for febustools."""
from __future__ import annotations
