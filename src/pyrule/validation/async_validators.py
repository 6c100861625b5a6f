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
"""Asynchronous rules and validators.

Each class mirrors its synchronous counterpart with the same ordering and
short-circuit behaviour. Every rule or validator call is awaited before the
next one starts; nothing is fanned out with ``gather``. Task cancellation
therefore surfaces between two calls, never inside one, and propagates to
the caller like any other exception.

Synchronous rules and validators are accepted wherever an asynchronous one
is expected and are adapted with :func:`as_async_rule` /
:func:`as_async_validator`.
"""

from __future__ import annotations

import abc
import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Generic, Protocol, TypeVar, Union, runtime_checkable

from pyrule.kernel.exceptions import ContractViolationException, InvalidRuleException
from pyrule.validation.outcome import Outcome
from pyrule.validation.rules import Rule
from pyrule.validation.summary import Summary
from pyrule.validation.validators import Validator, flatten_args

_logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
T_contra = TypeVar("T_contra", contravariant=True)

AsyncValidationFunction = Callable[[T], Union[Outcome, Awaitable[Outcome]]]


# =============================================================================
# Rules
# =============================================================================


@runtime_checkable
class AsyncRule(Protocol[T_contra]):
    """Contract of an asynchronous rule."""

    @property
    def stops_on_error(self) -> bool: ...

    async def validate_object_async(self, obj: T_contra) -> Outcome: ...


class AsyncValidationRule(abc.ABC, Generic[T]):
    """Base class for asynchronous rules. Subclasses implement :meth:`validate_object_async`."""

    stops_on_error: bool = False

    @abc.abstractmethod
    async def validate_object_async(self, obj: T) -> Outcome: ...


class AsyncRuleDelegate(AsyncValidationRule[T]):
    """An asynchronous rule backed by a function.

    The function may be a coroutine function or return an :class:`Outcome`
    directly.
    """

    def __init__(self, function: AsyncValidationFunction[T], stops_on_error: bool = False) -> None:
        self._function = function
        self._stops_on_error = stops_on_error

    @property  # type: ignore[override]
    def stops_on_error(self) -> bool:
        return self._stops_on_error

    async def validate_object_async(self, obj: T) -> Outcome:
        result = self._function(obj)
        if inspect.isawaitable(result):
            return await result
        return result

    def __repr__(self) -> str:
        name = getattr(self._function, "__qualname__", repr(self._function))
        return f"AsyncRuleDelegate({name}, stops_on_error={self._stops_on_error})"


class _SyncRuleAdapter(AsyncValidationRule[T]):
    def __init__(self, rule: Rule[T]) -> None:
        self._rule = rule

    @property  # type: ignore[override]
    def stops_on_error(self) -> bool:
        return self._rule.stops_on_error

    async def validate_object_async(self, obj: T) -> Outcome:
        return self._rule.validate_object(obj)

    def __repr__(self) -> str:
        return repr(self._rule)


def as_async_rule(candidate: AsyncRule[T] | Rule[T]) -> AsyncRule[T]:
    """Return an async rule unchanged, or adapt a synchronous one.

    Raises:
        InvalidRuleException: *candidate* is not a rule.
    """
    if isinstance(candidate, AsyncRule):
        return candidate
    if isinstance(candidate, Rule):
        return _SyncRuleAdapter(candidate)
    raise InvalidRuleException(candidate)


# =============================================================================
# Validators
# =============================================================================


@runtime_checkable
class AsyncValidator(Protocol[T_contra]):
    """Contract of an asynchronous validator."""

    async def validate_async(self, obj: T_contra) -> Summary: ...


AnyRuleOrValidator = Union[AsyncRule[T], Rule[T], AsyncValidator[T], Validator[T]]


class _SyncValidatorAdapter(Generic[T]):
    def __init__(self, validator: Validator[T]) -> None:
        self._validator = validator

    async def validate_async(self, obj: T) -> Summary:
        return self._validator.validate(obj)


def as_async_validator(candidate: AnyRuleOrValidator[T]) -> AsyncValidator[T]:
    """Coerce a validator or rule, sync or async, into an async validator.

    Raises:
        InvalidRuleException: *candidate* is neither a rule nor a validator.
    """
    if isinstance(candidate, AsyncValidator):
        return candidate
    if isinstance(candidate, Validator):
        return _SyncValidatorAdapter(candidate)
    if isinstance(candidate, (AsyncRule, Rule)):
        return AsyncRuleBasedValidator(candidate)
    raise InvalidRuleException(candidate)


class AsyncRuleBasedValidator(Generic[T]):
    """Awaits each rule in construction order; stops like :class:`RuleBasedValidator`."""

    def __init__(self, *rules: AsyncRule[T] | Rule[T] | Iterable[AsyncRule[T] | Rule[T]]) -> None:
        self._rules: tuple[AsyncRule[T], ...] = tuple(as_async_rule(r) for r in flatten_args(rules))

    @property
    def rules(self) -> tuple[AsyncRule[T], ...]:
        return self._rules

    async def process_validations_async(self, obj: T) -> list[Outcome]:
        outcomes: list[Outcome] = []
        for current in self._rules:
            outcome = await current.validate_object_async(obj)
            outcomes.append(outcome)
            if outcome.is_error and current.stops_on_error:
                _logger.debug("Rule %r stopped validation with severity %s", current, outcome.severity)
                break
        return outcomes

    async def validate_async(self, obj: T) -> Summary:
        return Summary(await self.process_validations_async(obj))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rules={len(self._rules)})"


class AsyncValidatorCombiner(Generic[T]):
    """Awaits every validator in construction order and merges the summaries."""

    def __init__(self, *validators: AnyRuleOrValidator[T] | Iterable[AnyRuleOrValidator[T]]) -> None:
        self._validators: tuple[AsyncValidator[T], ...] = tuple(as_async_validator(v) for v in flatten_args(validators))

    @property
    def validators(self) -> tuple[AsyncValidator[T], ...]:
        return self._validators

    async def validate_async(self, obj: T) -> Summary:
        summaries: list[Summary] = []
        for validator in self._validators:
            summaries.append(await validator.validate_async(obj))
        summary = Summary.from_summaries(summaries)
        _logger.debug(
            "Combined %d async validators: severity=%s outcomes=%d",
            len(self._validators),
            summary.severity,
            len(summary),
        )
        return summary


class AsyncDelegateValidator(Generic[T, U]):
    """Projects a ``U`` to a ``T`` and awaits the ``T`` validator."""

    def __init__(self, validator: AnyRuleOrValidator[T], projection: Callable[[U], T]) -> None:
        self._validator: AsyncValidator[T] = as_async_validator(validator)
        self._projection = projection

    async def validate_async(self, obj: U) -> Summary:
        return await self._validator.validate_async(self._projection(obj))


class AsyncCollectionValidator(Generic[T]):
    """Asynchronous :class:`~pyrule.validation.collection.CollectionValidator`.

    Same modes and iteration orders; :meth:`validate_collection` is an
    async generator.
    """

    def __init__(
        self,
        *rules: AsyncRule[T] | Rule[T] | Iterable[AsyncRule[T] | Rule[T]],
        outer_loop_over_rules: bool = False,
        validator: AnyRuleOrValidator[T] | None = None,
    ) -> None:
        self._rule_validator: AsyncRuleBasedValidator[T] | None = None
        if validator is None:
            self._rule_validator = AsyncRuleBasedValidator(*rules)
            self._validator: AsyncValidator[T] = self._rule_validator
        elif rules:
            raise ContractViolationException(
                "Pass either rules or a validator to AsyncCollectionValidator, not both",
                code="INVALID_RULE",
            )
        elif outer_loop_over_rules:
            raise ContractViolationException(
                "Rules-first iteration needs rules; a validator always runs objects first",
                code="INVALID_ITERATION_ORDER",
            )
        else:
            self._validator = as_async_validator(validator)
        self._outer_loop_over_rules = outer_loop_over_rules

    @classmethod
    def from_validator(cls, validator: AnyRuleOrValidator[T]) -> AsyncCollectionValidator[T]:
        return cls(validator=validator)

    @property
    def outer_loop_over_rules(self) -> bool:
        return self._outer_loop_over_rules

    async def validate_collection(self, objects: Iterable[T]) -> AsyncIterator[Outcome]:
        if self._rule_validator is None:
            for obj in objects:
                summary = await self._validator.validate_async(obj)
                for outcome in summary:
                    yield outcome
        elif self._outer_loop_over_rules:
            items = list(objects)
            for current in self._rule_validator.rules:
                for obj in items:
                    outcome = await current.validate_object_async(obj)
                    yield outcome
                    if outcome.is_error and current.stops_on_error:
                        _logger.debug("Rule %r stopped after error on a collection element", current)
                        break
        else:
            for obj in objects:
                for outcome in await self._rule_validator.process_validations_async(obj):
                    yield outcome

    async def validate_async(self, objects: Iterable[T]) -> Summary:
        return Summary([outcome async for outcome in self.validate_collection(objects)])

    async def validate_each(self, objects: Iterable[T]) -> list[Summary]:
        return [await self._validator.validate_async(obj) for obj in objects]


class AsyncSubCollectionValidator(Generic[T, U]):
    """Asynchronous :class:`~pyrule.validation.collection.SubCollectionValidator`."""

    def __init__(
        self,
        selector: Callable[[T], Iterable[U]],
        *validators: AnyRuleOrValidator[U] | Iterable[AnyRuleOrValidator[U]],
    ) -> None:
        items = flatten_args(validators)
        if not items:
            raise ContractViolationException(
                "AsyncSubCollectionValidator needs at least one rule or validator",
                code="INVALID_RULE",
            )
        inner: AsyncValidator[U]
        if all(isinstance(i, (AsyncRule, Rule)) for i in items):
            inner = AsyncRuleBasedValidator(items)
        elif len(items) == 1:
            inner = as_async_validator(items[0])
        else:
            inner = AsyncValidatorCombiner(items)
        self._selector = selector
        self._elements = AsyncCollectionValidator.from_validator(inner)

    async def validate_async(self, obj: T) -> Summary:
        return await self._elements.validate_async(self._selector(obj))
