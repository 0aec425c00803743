"""User commands handled by ShowerEngine.handle()."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class MarkOccurrence:
    pass


@dataclass(frozen=True)
class SetInterval:
    hours: int


@dataclass(frozen=True)
class AddAlarm:
    time: str


@dataclass(frozen=True)
class DeleteAlarm:
    alarm_id: int


@dataclass(frozen=True)
class ToggleNotifications:
    enabled: bool


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[MarkOccurrence, SetInterval, AddAlarm, DeleteAlarm, ToggleNotifications, Reset]


@dataclass
class ActionResult:
    ok: bool = True
    message: Optional[str] = None
