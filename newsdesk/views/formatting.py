"""Mise en forme des dates affichées dans les pages."""

from __future__ import annotations

from datetime import datetime, timezone

MONTHS = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)
SHORT_MONTHS = (
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
)


def parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_long_date(value: str | None) -> str:
    """« 4 août 2025 », ou « Inconnue » si la date est absente ou invalide."""
    parsed = parse_date(value)
    if parsed is None:
        return "Inconnue"
    return f"{parsed.day} {MONTHS[parsed.month - 1]} {parsed.year}"


def format_short_date(value: str | None) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day} {SHORT_MONTHS[parsed.month - 1]} {parsed.year}"


def format_relative(value: str | None, now: datetime | None = None) -> str:
    """Heure relative pour les dernières 24 h, date courte au-delà."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    now = now or datetime.now(timezone.utc)
    hours = int((now - parsed).total_seconds() // 3600)
    if hours < 1:
        return "À l'instant"
    if hours < 24:
        return f"il y a {hours} h"
    return format_short_date(value)
