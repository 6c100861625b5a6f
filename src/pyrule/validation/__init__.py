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
"""pyrule validation — rules, validators and summaries."""

from pyrule.validation.async_validators import (
    AsyncCollectionValidator,
    AsyncDelegateValidator,
    AsyncRule,
    AsyncRuleBasedValidator,
    AsyncRuleDelegate,
    AsyncSubCollectionValidator,
    AsyncValidationRule,
    AsyncValidator,
    AsyncValidatorCombiner,
    as_async_rule,
    as_async_validator,
)
from pyrule.validation.collection import CollectionValidator, SubCollectionValidator
from pyrule.validation.outcome import Outcome, to_failure
from pyrule.validation.ports.outbound import SummaryPresenter
from pyrule.validation.properties import ValidationProperties
from pyrule.validation.rules import ModelRule, Rule, RuleDelegate, ValidationRule, rule
from pyrule.validation.severity import FailureSeverity, Severity
from pyrule.validation.summary import Summary, SummaryBuilder
from pyrule.validation.validators import (
    DelegateValidator,
    RuleBasedValidator,
    Validator,
    ValidatorCombiner,
    as_validator,
)

__all__ = [
    # Severity / outcome
    "FailureSeverity",
    "Outcome",
    "Severity",
    "to_failure",
    # Summary
    "Summary",
    "SummaryBuilder",
    # Rules
    "ModelRule",
    "Rule",
    "RuleDelegate",
    "ValidationRule",
    "rule",
    # Validators
    "CollectionValidator",
    "DelegateValidator",
    "RuleBasedValidator",
    "SubCollectionValidator",
    "Validator",
    "ValidatorCombiner",
    "as_validator",
    # Async
    "AsyncCollectionValidator",
    "AsyncDelegateValidator",
    "AsyncRule",
    "AsyncRuleBasedValidator",
    "AsyncRuleDelegate",
    "AsyncSubCollectionValidator",
    "AsyncValidationRule",
    "AsyncValidator",
    "AsyncValidatorCombiner",
    "as_async_rule",
    "as_async_validator",
    # Config / ports
    "SummaryPresenter",
    "ValidationProperties",
]
