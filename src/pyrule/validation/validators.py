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
"""Validators: map one object to a :class:`Summary`.

All validators are configured at construction and hold no other state, so
one instance can be reused and called concurrently as long as its rules,
selectors and projections are themselves safe to share.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, Protocol, TypeVar, Union, runtime_checkable

from pyrule.kernel.exceptions import InvalidRuleException
from pyrule.validation.outcome import Outcome
from pyrule.validation.rules import Rule
from pyrule.validation.summary import Summary

_logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class Validator(Protocol[T_contra]):
    """Contract of a synchronous validator."""

    def validate(self, obj: T_contra) -> Summary: ...


RuleOrValidator = Union[Rule[T], Validator[T]]


def as_validator(candidate: Rule[T] | Validator[T]) -> Validator[T]:
    """Return *candidate* if it is a validator, or wrap a rule in a RuleBasedValidator.

    Raises:
        InvalidRuleException: *candidate* is neither.
    """
    if isinstance(candidate, Validator):
        return candidate
    if isinstance(candidate, Rule):
        return RuleBasedValidator(candidate)
    raise InvalidRuleException(candidate)


def flatten_args(items: tuple[Any, ...]) -> list[Any]:
    # Accept both f(a, b, c) and f([a, b, c])
    if len(items) == 1 and isinstance(items[0], Iterable) and not isinstance(items[0], (str, bytes)):
        if not isinstance(items[0], (Rule, Validator)):
            return list(items[0])
    return list(items)


class RuleBasedValidator(Generic[T]):
    """Applies an ordered list of rules to one object.

    Rules run in construction order. After a rule with ``stops_on_error``
    returns an outcome whose severity is an error, the remaining rules are
    skipped for that call. The outcome of the stopping rule is kept.
    """

    def __init__(self, *rules: Rule[T] | Iterable[Rule[T]]) -> None:
        self._rules: tuple[Rule[T], ...] = tuple(flatten_args(rules))
        for candidate in self._rules:
            if not isinstance(candidate, Rule):
                raise InvalidRuleException(candidate)

    @property
    def rules(self) -> tuple[Rule[T], ...]:
        return self._rules

    def process_validations(self, obj: T) -> Iterator[Outcome]:
        """Yield the outcome of each applied rule, stopping early when a rule asks to."""
        for current in self._rules:
            outcome = current.validate_object(obj)
            yield outcome
            if outcome.is_error and current.stops_on_error:
                _logger.debug("Rule %r stopped validation with severity %s", current, outcome.severity)
                return

    def validate(self, obj: T) -> Summary:
        return Summary(self.process_validations(obj))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rules={len(self._rules)})"


class ValidatorCombiner(Generic[T]):
    """Runs several validators against the same object and merges their summaries.

    Every validator runs, in construction order, whatever the earlier ones
    returned. Rules may be passed in place of validators.
    """

    def __init__(self, *validators: RuleOrValidator[T] | Iterable[RuleOrValidator[T]]) -> None:
        self._validators: tuple[Validator[T], ...] = tuple(as_validator(v) for v in flatten_args(validators))

    @property
    def validators(self) -> tuple[Validator[T], ...]:
        return self._validators

    def validate(self, obj: T) -> Summary:
        summary = Summary.from_summaries([v.validate(obj) for v in self._validators])
        _logger.debug(
            "Combined %d validators: severity=%s outcomes=%d",
            len(self._validators),
            summary.severity,
            len(summary),
        )
        return summary

    def __repr__(self) -> str:
        return f"{type(self).__name__}(validators={len(self._validators)})"


class DelegateValidator(Generic[T, U]):
    """Validates a ``U`` by projecting it to a ``T`` and delegating to a ``T`` validator.

    Exceptions raised by the projection propagate unchanged.
    """

    def __init__(self, validator: RuleOrValidator[T], projection: Callable[[U], T]) -> None:
        self._validator: Validator[T] = as_validator(validator)
        self._projection = projection

    def validate(self, obj: U) -> Summary:
        return self._validator.validate(self._projection(obj))
