"""Utilidades de data/hora em UTC"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Agora, com fuso UTC"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Datas sem fuso são tratadas como UTC (SQLite devolve datas ingênuas)"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
