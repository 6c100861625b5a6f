# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Severity levels for validation outcomes.

Four levels are predefined, ordered by rank::

    SUCCESS (0) < INFORMATION (10) < WARNING (20) < ERROR (30)

``SUCCESS`` means the object conforms to the rule. ``INFORMATION`` is a
minor finding the user may be shown but that never blocks. ``WARNING``
needs a confirmation from the user, who may cancel. ``ERROR`` cancels the
process.

The set is open: construct a new :class:`Severity` with a rank that is not
used yet (for example ``Severity("CRITICAL", 40, allows_cancel=True,
causes_cancel=True)``). Only the rank takes part in ordering and equality:
two severities of the same rank compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


@dataclass(frozen=True, eq=False)
class Severity:
    """An immutable severity level, totally ordered by ``rank``."""

    name: str
    rank: int
    is_error: bool = True
    allows_cancel: bool = False
    causes_cancel: bool = False

    SUCCESS: ClassVar[Severity]
    INFORMATION: ClassVar[Severity]
    WARNING: ClassVar[Severity]
    ERROR: ClassVar[Severity]

    def compare(self, other: Severity) -> int:
        """Return -1, 0 or 1 as this severity ranks below, equal to or above *other*."""
        return (self.rank > other.rank) - (self.rank < other.rank)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank == other.rank

    def __hash__(self) -> int:
        return hash(self.rank)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return self.name

    @classmethod
    def by_name(cls, name: str) -> Severity:
        """Look up one of the predefined severities by case-insensitive name."""
        try:
            return _PREDEFINED[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown severity name: {name!r}") from None


Severity.SUCCESS = Severity("SUCCESS", 0, is_error=False)
Severity.INFORMATION = Severity("INFORMATION", 10)
Severity.WARNING = Severity("WARNING", 20, allows_cancel=True)
Severity.ERROR = Severity("ERROR", 30, allows_cancel=True, causes_cancel=True)

_PREDEFINED: dict[str, Severity] = {
    s.name: s for s in (Severity.SUCCESS, Severity.INFORMATION, Severity.WARNING, Severity.ERROR)
}


class FailureSeverity(str, Enum):
    """The predefined severities a failure outcome can carry."""

    INFORMATION = "INFORMATION"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def severity(self) -> Severity:
        return _PREDEFINED[self.value]
