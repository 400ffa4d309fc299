"""
Intervalos de agenda.

Todo intervalo é semiaberto `[start, end)`: um atendimento que termina às
10:00 não colide com outro que começa às 10:00.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True, slots=True)
class TimeSlot:
    start: datetime
    duration_minutes: int

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    def overlaps(self, other: TimeSlot) -> bool:
        """Sobreposição semiaberta; simétrica por construção."""
        return self.start < other.end and self.end > other.start
