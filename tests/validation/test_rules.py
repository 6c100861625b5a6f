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
"""Tests for rules: ValidationRule, RuleDelegate, @rule and ModelRule."""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel, Field

from pyrule.kernel.exceptions import InvalidSeverityException
from pyrule.validation.outcome import Outcome, to_failure
from pyrule.validation.rules import ModelRule, Rule, RuleDelegate, ValidationRule, rule
from pyrule.validation.severity import FailureSeverity, Severity
from pyrule.validation.validators import RuleBasedValidator


class Animal:
    def __init__(self, name: str | None) -> None:
        self.name = name


class Dog(Animal):
    pass


class NameRequired(ValidationRule[Animal]):
    stops_on_error = True

    def validate_object(self, obj: Animal) -> Outcome:
        if not obj.name:
            return to_failure("The name must be specified.", FailureSeverity.ERROR)
        return Outcome.success()


class TestValidationRule:
    def test_subclass_is_a_rule(self):
        assert isinstance(NameRequired(), Rule)

    def test_validate_object(self):
        assert NameRequired().validate_object(Animal("Rex")) is Outcome.success()
        assert NameRequired().validate_object(Animal(None)).severity is Severity.ERROR

    def test_stops_on_error_class_attribute(self):
        assert NameRequired().stops_on_error is True

    def test_default_does_not_stop(self):
        class Anything(ValidationRule[object]):
            def validate_object(self, obj: object) -> Outcome:
                return Outcome.success()

        assert Anything().stops_on_error is False

    def test_abstract_rule_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            ValidationRule()  # type: ignore[abstract]

    def test_to_validator(self):
        validator = NameRequired().to_validator()
        assert isinstance(validator, RuleBasedValidator)
        assert validator.validate(Animal(None)).messages() == ["The name must be specified."]

    def test_rule_for_base_type_applies_to_subtype(self):
        animal_rule: Rule[Animal] = NameRequired()
        dog_validator: RuleBasedValidator[Dog] = RuleBasedValidator(animal_rule)
        assert dog_validator.validate(Dog("Fido")).is_valid


class TestRuleDelegate:
    def test_calls_function(self):
        seen = []

        def check(value: int) -> Outcome:
            seen.append(value)
            return Outcome.success()

        delegate = RuleDelegate(check)
        assert delegate.validate_object(5) is Outcome.success()
        assert seen == [5]
        assert delegate.function is check

    def test_stops_on_error_flag(self):
        assert RuleDelegate(lambda _: Outcome.success()).stops_on_error is False
        assert RuleDelegate(lambda _: Outcome.success(), stops_on_error=True).stops_on_error is True

    def test_is_a_rule(self):
        assert isinstance(RuleDelegate(lambda _: Outcome.success()), Rule)

    def test_exceptions_propagate(self):
        def broken(_: object) -> Outcome:
            raise RuntimeError("rule crashed")

        with pytest.raises(RuntimeError, match="rule crashed"):
            RuleDelegate(broken).validate_object(None)

    def test_repr_names_function(self):
        def positive(x: int) -> Outcome:
            return Outcome.success()

        assert "positive" in repr(RuleDelegate(positive))


class TestRuleDecorator:
    def test_bare_decorator(self):
        @rule
        def positive(x: int) -> Outcome:
            return Outcome.success() if x > 0 else to_failure("must be positive", FailureSeverity.ERROR)

        assert isinstance(positive, RuleDelegate)
        assert positive.stops_on_error is False
        assert positive.validate_object(-1).message == "must be positive"

    def test_decorator_with_arguments(self):
        @rule(stops_on_error=True)
        def required(x: object) -> Outcome:
            return Outcome.success() if x is not None else to_failure("required", FailureSeverity.ERROR)

        assert isinstance(required, RuleDelegate)
        assert required.stops_on_error is True
        assert required.validate_object(None).is_error


class CreateUserRequest(BaseModel):
    name: str
    email: str
    age: int = Field(ge=0)


@dataclass
class UserRecord:
    name: str
    email: str
    age: int


class TestModelRule:
    def test_valid_dict(self):
        model_rule = ModelRule(CreateUserRequest)
        assert model_rule.validate_object({"name": "Alice", "email": "a@example.com", "age": 30}) is Outcome.success()

    def test_invalid_dict_reports_fields(self):
        outcome = ModelRule(CreateUserRequest).validate_object({"name": "Alice", "age": -1})
        assert outcome.severity is Severity.ERROR
        assert "email: Field required" in outcome.message
        assert "age:" in outcome.message

    def test_validates_attributes_of_plain_objects(self):
        model_rule = ModelRule(CreateUserRequest)
        assert model_rule.validate_object(UserRecord("Bob", "b@example.com", 40)).is_error is False
        assert model_rule.validate_object(UserRecord("Bob", "b@example.com", -5)).is_error

    def test_validates_other_models(self):
        class Partial(BaseModel):
            name: str

        assert ModelRule(CreateUserRequest).validate_object(Partial(name="x")).is_error

    def test_custom_severity(self):
        model_rule = ModelRule(CreateUserRequest, severity=FailureSeverity.WARNING, stops_on_error=True)
        outcome = model_rule.validate_object({})
        assert outcome.severity is Severity.WARNING
        assert model_rule.stops_on_error is True

    def test_success_severity_rejected_at_construction(self):
        with pytest.raises(InvalidSeverityException):
            ModelRule(CreateUserRequest, severity=Severity.SUCCESS)
