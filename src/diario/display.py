"""Presentation-only lookups for task statuses. Nothing in the core reads these."""

from typing import Tuple

from .models import TaskStatus

STATUS_LABELS = {
    TaskStatus.TODO: "Da fare",
    TaskStatus.IN_PROGRESS: "In corso",
    TaskStatus.DONE: "Completato",
}

# ARGB
STATUS_COLORS = {
    TaskStatus.TODO: 0xFFFF6B6B,
    TaskStatus.IN_PROGRESS: 0xFFFFD93D,
    TaskStatus.DONE: 0xFF6BCF7F,
}

def status_label(status: TaskStatus) -> str:
    return STATUS_LABELS[status]

def status_rgb(status: TaskStatus) -> Tuple[int, int, int]:
    argb = STATUS_COLORS[status]
    return (argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF

def status_color_hex(status: TaskStatus) -> str:
    return "#{:02X}{:02X}{:02X}".format(*status_rgb(status))
