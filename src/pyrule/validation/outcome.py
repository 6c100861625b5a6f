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
"""The result of applying one rule to one object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pyrule.kernel.exceptions import InvalidSeverityException
from pyrule.validation.severity import FailureSeverity, Severity

if TYPE_CHECKING:
    from pyrule.validation.summary import Summary, SummaryBuilder


@dataclass(frozen=True)
class Outcome:
    """Immutable rule result: the shared success value, or a severity with a message.

    Build outcomes with the factories rather than the constructor::

        Outcome.success()
        Outcome.failure(FailureSeverity.ERROR, "The email address is invalid.")
        to_failure("You did not enter a birth date.", FailureSeverity.INFORMATION)
    """

    severity: Severity
    message: str | None = None

    SUCCESS: ClassVar[Outcome]

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def success() -> Outcome:
        return Outcome.SUCCESS

    @staticmethod
    def failure(severity: Severity | FailureSeverity, message: str) -> Outcome:
        """Build a failure outcome.

        Raises:
            InvalidSeverityException: *severity* is not an error severity
                (``Severity.SUCCESS`` included) or is not a severity at all.
        """
        if isinstance(severity, FailureSeverity):
            return Outcome(severity.severity, message)
        if isinstance(severity, Severity) and severity.is_error:
            return Outcome(severity, message)
        raise InvalidSeverityException(severity)

    # ── accessors ──────────────────────────────────────────────

    @property
    def is_error(self) -> bool:
        return self.severity.is_error

    @property
    def has_message(self) -> bool:
        return self.message is not None

    # ── conversions ────────────────────────────────────────────

    def to_summary(self) -> Summary:
        from pyrule.validation.summary import Summary

        return Summary.of(self)

    def to_summary_builder(self) -> SummaryBuilder:
        from pyrule.validation.summary import SummaryBuilder

        return SummaryBuilder().append(self)


Outcome.SUCCESS = Outcome(Severity.SUCCESS)


def to_failure(message: str, severity: Severity | FailureSeverity) -> Outcome:
    """Bind *message* to *severity*; shorthand for :meth:`Outcome.failure`."""
    return Outcome.failure(severity, message)
