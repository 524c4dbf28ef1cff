"""BaseService — abstract foundation for datemath services.

Every service receives the frozen :class:`DateMathSettings` at
construction time and derives its reference date from it.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from datemath.services._helpers import resolve_reference_date

if TYPE_CHECKING:
    from datemath.config.settings import DateMathSettings


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class CalculatorService(BaseService):
            def calculate(self, text: str) -> ServiceResult:
                warnings: list[str] = []
                today = self._reference_date(warnings)
                ...
    """

    def __init__(
        self,
        settings: DateMathSettings,
        *,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._settings = settings
        self._clock = clock

    def _reference_date(self, warnings: list[str]) -> date:
        """Reference date from the ``today`` setting, else the clock."""
        return resolve_reference_date(self._settings.today, warnings=warnings, clock=self._clock)
