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
"""Tests for Outcome."""

import dataclasses

import pytest

from pyrule.kernel.exceptions import InvalidSeverityException
from pyrule.validation.outcome import Outcome, to_failure
from pyrule.validation.severity import FailureSeverity, Severity
from pyrule.validation.summary import Summary


class TestSuccess:
    def test_success_is_shared(self):
        assert Outcome.success() is Outcome.success()
        assert Outcome.success() is Outcome.SUCCESS

    def test_success_has_no_message(self):
        outcome = Outcome.success()
        assert outcome.severity is Severity.SUCCESS
        assert outcome.message is None
        assert not outcome.has_message
        assert not outcome.is_error


class TestFailure:
    def test_failure_from_failure_severity(self):
        outcome = Outcome.failure(FailureSeverity.WARNING, "Check the date.")
        assert outcome.severity is Severity.WARNING
        assert outcome.message == "Check the date."
        assert outcome.is_error

    def test_failure_from_severity(self):
        outcome = Outcome.failure(Severity.INFORMATION, "FYI")
        assert outcome.severity is Severity.INFORMATION

    def test_failure_with_custom_error_severity(self):
        critical = Severity("CRITICAL", 40, allows_cancel=True, causes_cancel=True)
        assert Outcome.failure(critical, "boom").severity is critical

    def test_failure_with_success_raises(self):
        with pytest.raises(InvalidSeverityException):
            Outcome.failure(Severity.SUCCESS, "not a failure")

    def test_failure_with_unknown_value_raises(self):
        with pytest.raises(InvalidSeverityException):
            Outcome.failure("ERROR", "strings are not severities")  # type: ignore[arg-type]

    def test_empty_message_counts_as_message(self):
        assert Outcome.failure(FailureSeverity.ERROR, "").has_message

    def test_to_failure_argument_order(self):
        assert to_failure("msg", FailureSeverity.ERROR) == Outcome.failure(FailureSeverity.ERROR, "msg")


class TestOutcomeValue:
    def test_is_immutable(self):
        outcome = to_failure("msg", FailureSeverity.ERROR)
        with pytest.raises(dataclasses.FrozenInstanceError):
            outcome.message = "other"  # type: ignore[misc]

    def test_equal_outcomes(self):
        assert to_failure("a", FailureSeverity.ERROR) == to_failure("a", FailureSeverity.ERROR)
        assert to_failure("a", FailureSeverity.ERROR) != to_failure("a", FailureSeverity.WARNING)


class TestConversions:
    def test_to_summary(self):
        outcome = to_failure("msg", FailureSeverity.WARNING)
        summary = outcome.to_summary()
        assert isinstance(summary, Summary)
        assert summary.outcomes == (outcome,)
        assert summary.severity is Severity.WARNING

    def test_to_summary_builder(self):
        outcome = to_failure("msg", FailureSeverity.WARNING)
        builder = outcome.to_summary_builder()
        builder.append(FailureSeverity.ERROR, "worse")
        summary = builder.build()
        assert [o.message for o in summary] == ["worse", "msg"]
