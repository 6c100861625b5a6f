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
"""Summary and SummaryBuilder: aggregated validation outcomes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pyrule.kernel.exceptions import ContractViolationException, ValidationFailedException
from pyrule.validation.outcome import Outcome
from pyrule.validation.severity import FailureSeverity, Severity


def _flatten(items: Iterable[Outcome | Summary]) -> Iterator[Outcome]:
    for item in items:
        if isinstance(item, Outcome):
            yield item
        elif isinstance(item, Summary):
            yield from item.outcomes
        else:
            raise ContractViolationException(
                f"Expected an Outcome or a Summary, got {type(item).__name__}",
                code="INVALID_OUTCOME",
                context={"type": type(item).__name__},
            )


class Summary:
    """Immutable, severity-ordered collection of outcomes.

    Outcomes are sorted by descending severity; outcomes of equal severity
    keep the order they were given in. ``severity`` is the highest severity
    among the outcomes, ``Severity.SUCCESS`` for an empty summary.

    Summaries are never merged in place. :meth:`merge`, :meth:`combine` and
    :meth:`from_summaries` all return a new summary.

    Items given to the constructor may be outcomes or other summaries; a
    summary contributes its own outcomes.

    Raises:
        ContractViolationException: an item is neither an :class:`Outcome`
            nor a :class:`Summary`.
    """

    __slots__ = ("_outcomes", "_severity")

    def __init__(self, outcomes: Iterable[Outcome | Summary] = ()) -> None:
        # sorted() is stable, so equal severities keep their input order
        self._outcomes: tuple[Outcome, ...] = tuple(
            sorted(_flatten(outcomes), key=lambda o: o.severity, reverse=True)
        )
        self._severity: Severity = self._outcomes[0].severity if self._outcomes else Severity.SUCCESS

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def of(*outcomes: Outcome) -> Summary:
        return Summary(outcomes)

    @staticmethod
    def merge(*summaries: Summary) -> Summary:
        return Summary.from_summaries(summaries)

    @staticmethod
    def from_summaries(summaries: Iterable[Summary]) -> Summary:
        """Flatten *summaries* in the given order, then re-sort."""
        return Summary(outcome for summary in summaries for outcome in summary.outcomes)

    # ── combinators ────────────────────────────────────────────

    def combine(self, other: Summary) -> Summary:
        return Summary.merge(self, other)

    # ── accessors ──────────────────────────────────────────────

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        return self._outcomes

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def failures(self) -> tuple[Outcome, ...]:
        """Outcomes with a message and an error severity, INFORMATION included."""
        return tuple(o for o in self._outcomes if o.has_message and o.is_error)

    @property
    def is_valid(self) -> bool:
        return not self._severity.is_error

    @property
    def allows_cancel(self) -> bool:
        return self._severity.allows_cancel

    @property
    def causes_cancel(self) -> bool:
        return self._severity.causes_cancel

    def messages(self) -> list[str]:
        return [o.message for o in self.failures if o.message is not None]

    def raise_on_failure(self, threshold: Severity = Severity.ERROR) -> Summary:
        """Return ``self`` unless the summary severity reaches *threshold*.

        Raises:
            ValidationFailedException: ``severity >= threshold``.
        """
        if self._severity.is_error and self._severity >= threshold:
            raise ValidationFailedException(self)
        return self

    # ── container protocol ─────────────────────────────────────

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __bool__(self) -> bool:
        return bool(self._outcomes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Summary):
            return NotImplemented
        return self._outcomes == other._outcomes

    def __hash__(self) -> int:
        return hash(self._outcomes)

    def __repr__(self) -> str:
        return f"Summary(severity={self._severity.name}, outcomes={len(self._outcomes)})"


class SummaryBuilder:
    """Collects outcomes step by step; :meth:`build` takes a snapshot.

    Example::

        builder = SummaryBuilder()
        if not model.email:
            builder.append(FailureSeverity.ERROR, "You must enter an email address")
        if model.birth_date is None:
            builder.append(FailureSeverity.INFORMATION, "You did not enter a birth date.")
        summary = builder.build()
    """

    def __init__(self) -> None:
        self._outcomes: list[Outcome] = []

    def append(self, outcome: Outcome | Severity | FailureSeverity, message: str | None = None) -> SummaryBuilder:
        """Append an outcome, or build a failure from a severity and a message.

        Raises:
            ContractViolationException: a severity is given without a message.
            InvalidSeverityException: the severity is not an error severity.
        """
        if isinstance(outcome, Outcome):
            self._outcomes.append(outcome)
        elif message is None:
            raise ContractViolationException(
                f"A message is required when appending severity {outcome!s}",
                code="MISSING_MESSAGE",
            )
        else:
            self._outcomes.append(Outcome.failure(outcome, message))
        return self

    def extend(self, outcomes: Iterable[Outcome]) -> SummaryBuilder:
        self._outcomes.extend(outcomes)
        return self

    def append_summary(self, summary: Summary) -> SummaryBuilder:
        return self.extend(summary.outcomes)

    def build(self) -> Summary:
        return Summary(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)
