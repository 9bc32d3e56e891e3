"""Toast notifications, delivered through Flask's flashed messages."""
from __future__ import annotations

from typing import Protocol

from flask import flash

NOTIFICATION_KINDS = ("success", "error", "info")


class Notifier(Protocol):
    def __call__(self, message: str, kind: str = "info") -> None: ...


def notification_kind(kind: str | None) -> str:
    """Map a requested kind onto a toast variant; unknown kinds become ``info``."""
    return kind if kind in NOTIFICATION_KINDS else "info"


def flash_notifier(message: str, kind: str = "info") -> None:
    flash(message, notification_kind(kind))
