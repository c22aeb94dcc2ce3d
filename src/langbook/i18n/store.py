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
"""MessageStore — resolves messages from trees held entirely in memory."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from langbook.i18n.adapters.babel_formatter import BabelMessageFormatter
from langbook.i18n.locale import LocalePreferenceList
from langbook.i18n.ports.outbound import MessageArgs, MessageFormatter
from langbook.i18n.tree import copy_tree, lookup, split_path

logger = logging.getLogger(__name__)


class MessageStore:
    """Stores and retrieves multi-language messages.

    Accepted locales are walked by descending weight. A locale outside the
    supported set is skipped. With *fallback* disabled only the first
    supported accepted locale is tried before the default locale, which is
    always supported.

    Instances are owned by a single caller; configure them, then resolve.
    """

    def __init__(
        self,
        formatter: MessageFormatter | None = None,
        default_locale: str | None = None,
        fallback: bool = True,
    ) -> None:
        self.default_locale = default_locale
        self.fallback = fallback
        self._formatter = formatter or BabelMessageFormatter()
        self._accepted = LocalePreferenceList()
        self._data: dict[str, dict[str, Any]] = {}
        self._supported: frozenset[str] = frozenset()

    # ------------------------------------------------------------------
    # Public API (MessageSource protocol)
    # ------------------------------------------------------------------

    def find_message(self, path: str, args: MessageArgs | None = None) -> str | None:
        """Find the message at dotted *path* and format it with *args*."""
        segments = split_path(path)

        message: str | None = None
        locale: str | None = None
        for preference in self._accepted:
            if preference.tag not in self._supported:
                continue
            message = lookup(self._data.get(preference.tag), segments)
            if message is not None:
                locale = preference.tag
                break
            if not self.fallback:
                break

        if message is None and self.default_locale is not None:
            message = lookup(self._data.get(self.default_locale), segments)
            locale = self.default_locale

        if message is None:
            logger.debug("No message for '%s' in %s", path, self._accepted.tags())
            return None

        if args:
            return self._formatter.format(locale, message, args)  # type: ignore[arg-type]
        return message

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_accepted_languages(self, preferences: LocalePreferenceList) -> MessageStore:
        self._accepted = preferences
        return self

    def set_language_data(self, tag: str, tree: Mapping[str, Any]) -> MessageStore:
        """Replace the messages of locale *tag*."""
        self._data[tag] = copy_tree(tree)
        return self

    def set_supported_languages(self, *tags: str) -> MessageStore:
        self._supported = frozenset(tags)
        return self

    @property
    def accepted(self) -> LocalePreferenceList:
        return self._accepted

    @property
    def supported(self) -> frozenset[str]:
        return self._supported
