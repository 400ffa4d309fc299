"""
Dia local da clínica.

Datas chegam e são gravadas com fuso (USE_TZ); as regras de "mesmo dia"
usam o fuso da clínica (settings.TIME_ZONE).
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo


def as_zone(tz: tzinfo | str) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def ensure_aware(moment: datetime, tz: tzinfo | str) -> datetime:
    """
    Datas sem fuso são interpretadas no fuso local da clínica.

    Equivale a `django.utils.timezone.make_aware(moment, tz)` sem depender
    do Django; datas já com fuso são devolvidas intactas.
    """
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=as_zone(tz))
    return moment


def day_bounds(moment: datetime, tz: tzinfo | str) -> tuple[datetime, datetime]:
    """
    Meia-noite local do dia de `moment` e a meia-noite local seguinte.

    O fim é exclusivo; em dias de troca de horário de verão o intervalo
    pode ter 23 ou 25 horas.
    """
    zone = as_zone(tz)
    local_day: date = ensure_aware(moment, zone).astimezone(zone).date()
    return local_day_bounds(local_day, zone)


def local_day_bounds(day: date, tz: tzinfo | str) -> tuple[datetime, datetime]:
    zone = as_zone(tz)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start, end
