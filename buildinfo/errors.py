"""
errors.py

Responsibility: the common base for every failure the CLI reports as `error: ...`.
"""

from __future__ import annotations


class BuildInfoError(Exception):
    pass
