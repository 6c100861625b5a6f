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
"""Tests for RuleBasedValidator, ValidatorCombiner and DelegateValidator."""

import logging

import pytest

from pyrule.kernel.exceptions import InvalidRuleException
from pyrule.validation.outcome import Outcome, to_failure
from pyrule.validation.rules import RuleDelegate, ValidationRule
from pyrule.validation.severity import FailureSeverity, Severity
from pyrule.validation.summary import Summary
from pyrule.validation.validators import (
    DelegateValidator,
    RuleBasedValidator,
    Validator,
    ValidatorCombiner,
    as_validator,
)


class RecordingRule(ValidationRule[object]):
    """Returns a fixed outcome and records every call in a shared history."""

    def __init__(self, name: str, outcome: Outcome, history: list, stops_on_error: bool = False) -> None:
        self.name = name
        self.outcome = outcome
        self.history = history
        self._stops = stops_on_error

    @property  # type: ignore[override]
    def stops_on_error(self) -> bool:
        return self._stops

    def validate_object(self, obj: object) -> Outcome:
        self.history.append((self.name, obj))
        return self.outcome


def _error(name: str) -> Outcome:
    return to_failure(name, FailureSeverity.ERROR)


class TestRuleBasedValidator:
    def test_runs_every_rule_in_order(self):
        history: list = []
        rules = [RecordingRule(f"r{i}", _error(f"r{i}"), history) for i in range(4)]
        summary = RuleBasedValidator(*rules).validate("obj")
        assert [name for name, _ in history] == ["r0", "r1", "r2", "r3"]
        assert len(summary) == 4

    def test_accepts_a_list(self):
        history: list = []
        rules = [RecordingRule("a", Outcome.success(), history), RecordingRule("b", Outcome.success(), history)]
        assert RuleBasedValidator(rules).rules == tuple(rules)

    def test_stopping_rule_skips_the_rest(self):
        history: list = []
        validator = RuleBasedValidator(
            RecordingRule("r0", Outcome.success(), history),
            RecordingRule("r1", _error("r1"), history, stops_on_error=True),
            RecordingRule("r2", _error("r2"), history),
        )
        summary = validator.validate("obj")
        assert [name for name, _ in history] == ["r0", "r1"]
        assert summary.messages() == ["r1"]
        assert summary.severity is Severity.ERROR

    def test_stopping_rule_without_error_continues(self):
        history: list = []
        validator = RuleBasedValidator(
            RecordingRule("r0", Outcome.success(), history, stops_on_error=True),
            RecordingRule("r1", Outcome.success(), history),
        )
        validator.validate("obj")
        assert len(history) == 2

    def test_information_counts_as_error_for_stopping(self):
        history: list = []
        validator = RuleBasedValidator(
            RecordingRule("r0", to_failure("fyi", FailureSeverity.INFORMATION), history, stops_on_error=True),
            RecordingRule("r1", Outcome.success(), history),
        )
        validator.validate("obj")
        assert [name for name, _ in history] == ["r0"]

    def test_no_rules_is_valid(self):
        assert RuleBasedValidator().validate("obj").severity is Severity.SUCCESS

    def test_process_validations_is_lazy(self):
        history: list = []
        validator = RuleBasedValidator(
            RecordingRule("r0", Outcome.success(), history),
            RecordingRule("r1", Outcome.success(), history),
        )
        outcomes = validator.process_validations("obj")
        assert history == []
        next(outcomes)
        assert [name for name, _ in history] == ["r0"]

    def test_rule_exception_propagates(self):
        def broken(_: object) -> Outcome:
            raise KeyError("missing")

        history: list = []
        validator = RuleBasedValidator(RuleDelegate(broken), RecordingRule("r1", Outcome.success(), history))
        with pytest.raises(KeyError):
            validator.validate("obj")
        assert history == []

    def test_non_rule_rejected(self):
        with pytest.raises(InvalidRuleException):
            RuleBasedValidator(RecordingRule("r0", Outcome.success(), []), "not a rule")  # type: ignore[arg-type]

    def test_is_a_validator(self):
        assert isinstance(RuleBasedValidator(), Validator)

    def test_logs_stop_at_debug(self, caplog: pytest.LogCaptureFixture):
        rule = RecordingRule("r0", _error("r0"), [], stops_on_error=True)
        with caplog.at_level(logging.DEBUG, logger="pyrule.validation.validators"):
            RuleBasedValidator(rule, RecordingRule("r1", Outcome.success(), [])).validate("obj")
        assert any("stopped validation" in r.message for r in caplog.records)


class TestAsValidator:
    def test_validator_returned_unchanged(self):
        validator = RuleBasedValidator()
        assert as_validator(validator) is validator

    def test_rule_wrapped(self):
        rule = RecordingRule("r0", Outcome.success(), [])
        wrapped = as_validator(rule)
        assert isinstance(wrapped, RuleBasedValidator)
        assert wrapped.rules == (rule,)

    def test_other_values_rejected(self):
        with pytest.raises(InvalidRuleException):
            as_validator(42)  # type: ignore[arg-type]


class FixedValidator:
    def __init__(self, name: str, summary: Summary, history: list) -> None:
        self.name = name
        self.summary = summary
        self.history = history

    def validate(self, obj: object) -> Summary:
        self.history.append(self.name)
        return self.summary


class TestValidatorCombiner:
    def test_runs_all_validators_in_order(self):
        history: list = []
        first = FixedValidator("first", Summary.of(_error("first")), history)
        second = FixedValidator("second", Summary.of(to_failure("second", FailureSeverity.WARNING)), history)
        summary = ValidatorCombiner(first, second).validate("obj")
        assert history == ["first", "second"]
        assert summary.messages() == ["first", "second"]

    def test_outcomes_are_union_of_inner_summaries(self):
        history: list = []
        a = Summary.of(to_failure("a-info", FailureSeverity.INFORMATION), _error("a-err"))
        b = Summary.of(to_failure("b-warn", FailureSeverity.WARNING), _error("b-err"))
        summary = ValidatorCombiner([FixedValidator("a", a, history), FixedValidator("b", b, history)]).validate(1)
        assert summary == Summary.merge(a, b)
        assert summary.messages() == ["a-err", "b-err", "b-warn", "a-info"]

    def test_stop_in_one_validator_does_not_skip_the_next(self):
        history: list = []
        stopping = RuleBasedValidator(
            RecordingRule("s0", _error("s0"), history, stops_on_error=True),
            RecordingRule("s1", Outcome.success(), history),
        )
        later = RecordingRule("later", Outcome.success(), history)
        ValidatorCombiner(stopping, later).validate("obj")
        assert [name for name, _ in history] == ["s0", "later"]

    def test_rules_accepted_in_place_of_validators(self):
        combiner = ValidatorCombiner(RecordingRule("r", Outcome.success(), []))
        assert isinstance(combiner.validators[0], RuleBasedValidator)

    def test_invalid_member_rejected(self):
        with pytest.raises(InvalidRuleException):
            ValidatorCombiner(RuleBasedValidator(), object())  # type: ignore[arg-type]


class Address:
    def __init__(self, city: str | None) -> None:
        self.city = city


class Customer:
    def __init__(self, address: Address | None) -> None:
        self.address = address


def _city_required(address: Address) -> Outcome:
    return Outcome.success() if address.city else _error("City is required.")


class TestDelegateValidator:
    def test_projects_then_delegates(self):
        validator = DelegateValidator(RuleDelegate(_city_required), lambda c: c.address)
        assert validator.validate(Customer(Address("Leuven"))).is_valid
        assert validator.validate(Customer(Address(None))).messages() == ["City is required."]

    def test_projection_exception_propagates(self):
        validator = DelegateValidator(RuleDelegate(_city_required), lambda c: c.address)
        with pytest.raises(AttributeError):
            validator.validate(Customer(None))

    def test_accepts_a_validator(self):
        history: list = []
        inner = FixedValidator("inner", Summary.of(_error("bad")), history)
        summary = DelegateValidator(inner, lambda c: c.address).validate(Customer(Address("x")))
        assert history == ["inner"]
        assert summary.severity is Severity.ERROR
