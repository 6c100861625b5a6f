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
"""Validation rules, the atomic units of validation logic.

A rule checks one object and returns exactly one :class:`Outcome`. Expected
problems are reported as failure outcomes; exceptions raised inside a rule
are not caught by the framework and abort the whole validation call.

Three ways to write a rule::

    class ArgumentRequired(ValidationRule[object]):
        stops_on_error = True

        def validate_object(self, obj: object) -> Outcome:
            if obj is None:
                return to_failure("The argument must be specified.", FailureSeverity.ERROR)
            return Outcome.success()

    positive = RuleDelegate(lambda x: Outcome.success() if x > 0 else ..., stops_on_error=True)

    @rule(stops_on_error=True)
    def positive(x: int) -> Outcome: ...
"""

from __future__ import annotations

import abc
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, overload, runtime_checkable

from pydantic import BaseModel, ValidationError

from pyrule.validation.outcome import Outcome
from pyrule.validation.severity import FailureSeverity, Severity

if TYPE_CHECKING:
    from pyrule.validation.validators import RuleBasedValidator

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

ValidationFunction = Callable[[T], Outcome]


@runtime_checkable
class Rule(Protocol[T_contra]):
    """Contract of a synchronous rule.

    The type parameter is contravariant: a rule written for ``Animal`` can be
    used wherever a rule for ``Dog`` is expected.
    """

    @property
    def stops_on_error(self) -> bool: ...

    def validate_object(self, obj: T_contra) -> Outcome: ...


class ValidationRule(abc.ABC, Generic[T]):
    """Base class for rules. Subclasses implement :meth:`validate_object`.

    Set ``stops_on_error = True`` on the subclass (or override the property)
    to stop the owning validator when this rule returns an error outcome. A
    typical use is a ``None`` check that every later rule depends on.
    """

    stops_on_error: bool = False

    @abc.abstractmethod
    def validate_object(self, obj: T) -> Outcome: ...

    def to_validator(self) -> RuleBasedValidator[T]:
        from pyrule.validation.validators import RuleBasedValidator

        return RuleBasedValidator(self)


class RuleDelegate(ValidationRule[T]):
    """A rule backed by a plain function with the ``validate_object`` signature."""

    def __init__(self, function: ValidationFunction[T], stops_on_error: bool = False) -> None:
        self._function = function
        self._stops_on_error = stops_on_error

    @property  # type: ignore[override]
    def stops_on_error(self) -> bool:
        return self._stops_on_error

    @property
    def function(self) -> ValidationFunction[T]:
        return self._function

    def validate_object(self, obj: T) -> Outcome:
        return self._function(obj)

    def __repr__(self) -> str:
        name = getattr(self._function, "__qualname__", repr(self._function))
        return f"RuleDelegate({name}, stops_on_error={self._stops_on_error})"


@overload
def rule(function: ValidationFunction[T], /) -> RuleDelegate[T]: ...


@overload
def rule(*, stops_on_error: bool = False) -> Callable[[ValidationFunction[T]], RuleDelegate[T]]: ...


def rule(function: Any = None, /, *, stops_on_error: bool = False) -> Any:
    """Decorator turning a function into a :class:`RuleDelegate`.

    Usable bare (``@rule``) or with arguments (``@rule(stops_on_error=True)``).
    """

    def decorator(func: ValidationFunction[T]) -> RuleDelegate[T]:
        return RuleDelegate(func, stops_on_error=stops_on_error)

    if function is not None:
        return decorator(function)
    return decorator


class ModelRule(ValidationRule[Any]):
    """Validates an object against a pydantic model.

    The object may be a mapping (validated with ``model_validate``) or any
    object whose attributes match the model (validated with
    ``from_attributes``). All field errors are joined into the message of a
    single failure outcome, ``loc: msg; loc: msg``.
    """

    def __init__(
        self,
        model: type[BaseModel],
        severity: Severity | FailureSeverity = FailureSeverity.ERROR,
        stops_on_error: bool = False,
    ) -> None:
        # fail at construction, not on the first failing object
        Outcome.failure(severity, "")
        self._model = model
        self._severity = severity
        self._stops_on_error = stops_on_error

    @property  # type: ignore[override]
    def stops_on_error(self) -> bool:
        return self._stops_on_error

    def validate_object(self, obj: Any) -> Outcome:
        try:
            if isinstance(obj, BaseModel):
                self._model.model_validate(obj.model_dump())
            elif isinstance(obj, dict):
                self._model.model_validate(obj)
            else:
                self._model.model_validate(obj, from_attributes=True)
        except ValidationError as exc:
            detail = "; ".join(f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors())
            return Outcome.failure(self._severity, detail)
        return Outcome.success()
