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
"""Collection validators that validate every element of an iterable.

:class:`CollectionValidator` has two modes, fixed at construction:

* **rule mode** (``CollectionValidator(*rules)``): rules are applied
  directly. :meth:`~CollectionValidator.validate_collection` yields one
  outcome per rule application, lazily. Two iteration orders exist:

  - objects first (default): every rule runs on the first object, then on
    the second, and so on. A stopping rule skips the remaining rules for
    the current object only.
  - rules first (``outer_loop_over_rules=True``): the first rule runs on
    every object, then the second rule, and so on. A stopping rule that
    returns an error is not applied to the remaining objects; the next rule
    starts again at the first object.

* **validator mode** (``CollectionValidator.from_validator(v)``): each object
  is validated by ``v`` and :meth:`~CollectionValidator.validate` returns
  the per-object summaries merged into one. Iteration is objects first.

:class:`SubCollectionValidator` validates the elements that a selector
picks out of a parent object.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from pyrule.kernel.exceptions import ContractViolationException
from pyrule.validation.outcome import Outcome
from pyrule.validation.properties import ValidationProperties
from pyrule.validation.rules import Rule
from pyrule.validation.summary import Summary
from pyrule.validation.validators import (
    RuleBasedValidator,
    RuleOrValidator,
    Validator,
    ValidatorCombiner,
    as_validator,
    flatten_args,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class CollectionValidator(Generic[T]):
    """Applies rules, or one validator, to every element of an iterable.

    The iterable is consumed exactly once per call, in its own order.
    """

    def __init__(
        self,
        *rules: Rule[T] | Iterable[Rule[T]],
        outer_loop_over_rules: bool = False,
        validator: RuleOrValidator[T] | None = None,
    ) -> None:
        self._rule_validator: RuleBasedValidator[T] | None = None
        if validator is None:
            self._rule_validator = RuleBasedValidator(*rules)
            self._validator: Validator[T] = self._rule_validator
        elif rules:
            raise ContractViolationException(
                "Pass either rules or a validator to CollectionValidator, not both",
                code="INVALID_RULE",
            )
        elif outer_loop_over_rules:
            raise ContractViolationException(
                "Rules-first iteration needs rules; a validator always runs objects first",
                code="INVALID_ITERATION_ORDER",
            )
        else:
            self._validator = as_validator(validator)
        self._outer_loop_over_rules = outer_loop_over_rules

    @classmethod
    def from_validator(cls, validator: RuleOrValidator[T]) -> CollectionValidator[T]:
        """Validator mode: each element is validated by *validator*."""
        return cls(validator=validator)

    @classmethod
    def from_properties(cls, properties: ValidationProperties, *rules: Rule[T]) -> CollectionValidator[T]:
        """Rule mode with the iteration order taken from ``pyrule.validation.outer_loop_over_rules``."""
        return cls(*rules, outer_loop_over_rules=properties.outer_loop_over_rules)

    @property
    def outer_loop_over_rules(self) -> bool:
        return self._outer_loop_over_rules

    @property
    def validator(self) -> Validator[T]:
        return self._validator

    # ── validation ─────────────────────────────────────────────

    def validate_collection(self, objects: Iterable[T]) -> Iterator[Outcome]:
        """Lazily yield outcomes in application order.

        In validator mode each object contributes the (severity-sorted)
        outcomes of its own summary.
        """
        if self._rule_validator is None:
            return self._validator_outcomes(objects)
        if self._outer_loop_over_rules:
            return self._rules_first(self._rule_validator.rules, objects)
        return self._objects_first(self._rule_validator, objects)

    def validate(self, objects: Iterable[T]) -> Summary:
        return Summary(self.validate_collection(objects))

    def validate_each(self, objects: Iterable[T]) -> list[Summary]:
        """One summary per object, in input order (always objects first)."""
        return [self._validator.validate(obj) for obj in objects]

    # ── iteration orders ───────────────────────────────────────

    @staticmethod
    def _objects_first(validator: RuleBasedValidator[T], objects: Iterable[T]) -> Iterator[Outcome]:
        for obj in objects:
            yield from validator.process_validations(obj)

    @staticmethod
    def _rules_first(rules: tuple[Rule[T], ...], objects: Iterable[T]) -> Iterator[Outcome]:
        items = list(objects)
        for current in rules:
            for obj in items:
                outcome = current.validate_object(obj)
                yield outcome
                if outcome.is_error and current.stops_on_error:
                    _logger.debug("Rule %r stopped after error on a collection element", current)
                    break

    def _validator_outcomes(self, objects: Iterable[T]) -> Iterator[Outcome]:
        for obj in objects:
            yield from self._validator.validate(obj)


def _inner_validator(items: list[RuleOrValidator[U]]) -> Validator[U]:
    if items and all(isinstance(i, Rule) for i in items):
        return RuleBasedValidator(items)
    if len(items) == 1:
        return as_validator(items[0])
    return ValidatorCombiner(items)


class SubCollectionValidator(Generic[T, U]):
    """Validates every element of a sub-collection selected from a ``T``.

    Rules are wrapped in one :class:`RuleBasedValidator`; otherwise the
    validators (and rules) are combined with :class:`ValidatorCombiner`.
    Every selected element is validated, whatever the earlier elements
    returned, and the per-element summaries are merged.
    """

    def __init__(
        self,
        selector: Callable[[T], Iterable[U]],
        *validators: RuleOrValidator[U] | Iterable[RuleOrValidator[U]],
    ) -> None:
        items = flatten_args(validators)
        if not items:
            raise ContractViolationException(
                "SubCollectionValidator needs at least one rule or validator",
                code="INVALID_RULE",
            )
        self._selector = selector
        self._elements = CollectionValidator.from_validator(_inner_validator(items))

    def validate(self, obj: T) -> Summary:
        return self._elements.validate(self._selector(obj))
