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
"""Outbound ports — collaborators the resolvers depend on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeAlias, runtime_checkable

MessageArgs: TypeAlias = Mapping[str, Any] | Sequence[Any]


@runtime_checkable
class MessageFormatter(Protocol):
    """Substitutes arguments into a message template.

    Implementations receive the locale the template was found in, the raw
    template and the caller's arguments, and must let their own errors
    propagate.
    """

    def format(self, locale: str, template: str, args: MessageArgs) -> str: ...


@runtime_checkable
class MessageLoader(Protocol):
    """Produces the message tree of one locale from some data source."""

    def load(self, locale: str) -> Mapping[str, Any] | None:
        """Return the tree for *locale*, or ``None`` when this source has none."""
        ...


@runtime_checkable
class MessageSource(Protocol):
    """Abstract message-resolution interface.

    Both the in-memory :class:`~langbook.i18n.store.MessageStore` and the
    lazy :class:`~langbook.i18n.repository.MessageRepository` implement it.
    """

    def find_message(self, path: str, args: MessageArgs | None = None) -> str | None:
        """Resolve the dotted *path* and format it with *args*.

        Returns ``None`` when no accepted or default locale has the message.
        """
        ...
