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
"""Validation configuration properties bound from YAML.

YAML structure::

    pyrule:
      validation:
        outer_loop_over_rules: false
        failure_threshold: ERROR
"""

from __future__ import annotations

from dataclasses import dataclass

from pyrule.core.config import config_properties
from pyrule.kernel.exceptions import ConfigurationException
from pyrule.validation.severity import Severity


@config_properties(prefix="pyrule.validation")
@dataclass
class ValidationProperties:
    """Root validation configuration (``pyrule.validation.*``)."""

    outer_loop_over_rules: bool = False
    failure_threshold: str = "ERROR"

    def __post_init__(self) -> None:
        try:
            Severity.by_name(str(self.failure_threshold))
        except ValueError as exc:
            raise ConfigurationException(
                f"Unknown failure_threshold {self.failure_threshold!r}",
                code="CONFIG_INVALID",
                context={
                    "key": "pyrule.validation.failure_threshold",
                    "allowed": ["SUCCESS", "INFORMATION", "WARNING", "ERROR"],
                },
            ) from exc

    @property
    def threshold(self) -> Severity:
        """``failure_threshold`` resolved to a predefined :class:`Severity`."""
        return Severity.by_name(self.failure_threshold)
