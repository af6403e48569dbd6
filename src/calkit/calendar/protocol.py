from __future__ import annotations

from typing import Iterable, Optional, Protocol, Union, runtime_checkable

from .components import DateComponents
from .units import CalendarUnit


@runtime_checkable
class CalendarSystem(Protocol):
    """What callers may ask of a calendar: convert, add, ordinality, start of unit."""

    def components(self, units: Iterable[CalendarUnit], at: float) -> DateComponents: ...

    def date_from(self, components: DateComponents) -> Optional[float]: ...

    def add(
        self,
        amounts: Union[DateComponents, CalendarUnit],
        at: float,
        value: Optional[int] = None,
        *,
        wrap: bool = False,
    ) -> float: ...

    def ordinality(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[int]: ...

    def start_of(self, unit: CalendarUnit, at: float) -> Optional[float]: ...

    def range_of(self, small: CalendarUnit, large: CalendarUnit, at: float) -> Optional[range]: ...
