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
"""Unified exception hierarchy for pyrule.

Validation failures are *not* exceptions: they are outcomes collected in a
summary. The exceptions below cover everything else.

Categories:
- ContractViolationException: the caller broke an API contract
  (unknown severity, a non-rule passed to a composite)
- ValidationFailedException: a summary was explicitly asked to raise
- ConfigurationException: configuration could not be bound
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pyrule.validation.summary import Summary


# =============================================================================
# Base Exception
# =============================================================================


class PyRuleException(Exception):
    """Base exception for all pyrule errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_SEVERITY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Contract Violations
# =============================================================================


class ContractViolationException(PyRuleException):
    """The framework was called in a way its contract does not allow."""


class InvalidSeverityException(ContractViolationException):
    """A failure outcome was requested with a severity that is not an error."""

    def __init__(self, severity: Any) -> None:
        self.severity = severity
        super().__init__(
            message=f"Cannot build a failure outcome with severity {severity!r}",
            code="INVALID_SEVERITY",
            context={"severity": repr(severity)},
        )


class InvalidRuleException(ContractViolationException):
    """An object that is neither a rule nor a validator was passed to a composite."""

    def __init__(self, candidate: Any) -> None:
        self.candidate = candidate
        super().__init__(
            message=f"Expected a validation rule or validator, got {type(candidate).__name__}",
            code="INVALID_RULE",
            context={"type": type(candidate).__name__},
        )


# =============================================================================
# Validation / Configuration
# =============================================================================


class ValidationFailedException(PyRuleException):
    """Raised by :meth:`Summary.raise_on_failure` when a summary is too severe."""

    def __init__(self, summary: Summary, message: str | None = None) -> None:
        self.summary = summary
        messages = summary.messages()
        super().__init__(
            message=message or "; ".join(messages) or "Validation failed",
            code="VALIDATION_FAILED",
            context={"severity": summary.severity.name, "failures": messages},
        )


class ConfigurationException(PyRuleException):
    """Configuration could not be loaded or bound."""
