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
"""Summary presenter protocol.

pyrule only produces summaries. Showing them to a user (a dialog, a
console report, an HTTP problem response) is the job of an adapter that
implements this protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pyrule.validation.summary import Summary


@runtime_checkable
class SummaryPresenter(Protocol):
    """Presents a completed summary and reports whether the user may proceed.

    Implementations return ``True`` when the process may continue: there was
    nothing to show, or the user confirmed. ``show_only_on_failures`` skips
    the presentation of a summary without failures.
    """

    def show_summary(
        self,
        summary: Summary,
        show_only_on_failures: bool = False,
        header_text: str | None = None,
        how_to_proceed_message: str | None = None,
    ) -> bool: ...
