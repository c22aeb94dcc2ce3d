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
"""MessageRepository — resolves messages from locale data loaded on demand."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from langbook.i18n.adapters.babel_formatter import BabelMessageFormatter
from langbook.i18n.adapters.resource_bundle import DirectoryMessageLoader
from langbook.i18n.ports.outbound import MessageArgs, MessageFormatter, MessageLoader
from langbook.i18n.tree import copy_tree, lookup, split_path
from langbook.kernel.exceptions import RedirectCycleException

logger = logging.getLogger(__name__)


class MessageRepository:
    """Stores and retrieves multi-language messages, loading locales lazily.

    Accepted locales are a plain ordered sequence of tags; order them by
    preference before handing them over (``LocalePreferenceList.tags()``
    does that). For each supported accepted tag the repository follows
    redirects, loads the target locale from the first loader that has it and
    caches the tree for its own lifetime::

        repo = (
            MessageRepository(default_locale="en-US")
            .add_directory("lang/")
            .redirect("pt", "pt-BR")
            .set_supported_languages("pt", "pt-BR", "en-US")
            .set_accepted_languages("pt", "en")
        )
        repo.find_message("hello.world")

    Cache lookups and loads are serialised by a lock, so a repository can be
    shared between threads once configured.
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
        self._accepted: tuple[str, ...] = ()
        self._supported: frozenset[str] = frozenset()
        self._redirects: dict[str, str] = {}
        self._loaders: list[MessageLoader] = []
        self._data: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._load_locks: dict[str, threading.Lock] = {}

    # ------------------------------------------------------------------
    # Public API (MessageSource protocol)
    # ------------------------------------------------------------------

    def find_message(self, path: str, args: MessageArgs | None = None) -> str | None:
        """Find the message at dotted *path* and format it with *args*.

        Raises :class:`RedirectCycleException` when an accepted tag's
        redirects loop back on themselves.
        """
        segments = split_path(path)

        message: str | None = None
        locale: str | None = None
        for tag in self._accepted:
            if tag not in self._supported:
                continue
            tag = self._follow_redirects(tag)
            tree = self._tree(tag)
            if tree is None:
                continue
            message = lookup(tree, segments)
            locale = tag
            if message is not None or not self.fallback:
                break

        if message is None and self.default_locale is not None:
            locale = self.default_locale
            message = lookup(self._tree(locale), segments)

        if message is None:
            logger.debug("No message for '%s' in %s", path, list(self._accepted))
            return None

        if args:
            return self._formatter.format(locale, message, args)  # type: ignore[arg-type]
        return message

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_directory(self, path: str | Path) -> MessageRepository:
        """Register a directory of ``{locale}.yaml``/``.json`` message files.

        Directories added earlier take priority.
        """
        if isinstance(path, str):
            path = path.rstrip("\\/") or path
        return self.add_loader(DirectoryMessageLoader(path))

    def add_loader(self, loader: MessageLoader) -> MessageRepository:
        self._loaders.append(loader)
        return self

    def redirect(self, from_tag: str, to_tag: str) -> MessageRepository:
        """Redirect a locale to another.

        Useful for sending locales with no region to their default ones,
        e.g. ``pt`` to ``pt-BR``.
        """
        self._redirects[from_tag] = to_tag
        return self

    def set_accepted_languages(self, *tags: str) -> MessageRepository:
        self._accepted = tags
        return self

    def set_language_data(self, tag: str, tree: Mapping[str, Any]) -> MessageRepository:
        """Replace the cached messages of locale *tag*, bypassing the loaders."""
        with self._lock:
            self._data[tag] = copy_tree(tree)
        return self

    def set_supported_languages(self, *tags: str) -> MessageRepository:
        self._supported = frozenset(tags)
        return self

    def loaded_locales(self) -> frozenset[str]:
        """Tags whose message trees are currently cached."""
        with self._lock:
            return frozenset(self._data)

    def clear_cache(self) -> None:
        with self._lock:
            self._data.clear()

    @property
    def loaders(self) -> list[MessageLoader]:
        return list(self._loaders)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _follow_redirects(self, tag: str) -> str:
        chain = [tag]
        while tag in self._redirects:
            tag = self._redirects[tag]
            if tag in chain:
                raise RedirectCycleException([*chain, tag])
            chain.append(tag)
        if len(chain) > 1:
            logger.debug("Redirected locale %s", " -> ".join(chain))
        return tag

    def _tree(self, tag: str) -> dict[str, Any] | None:
        """Return the cached tree for *tag*, loading it on first use.

        Loading holds only the per-locale lock, so lookups of other locales
        are not blocked by file I/O.
        """
        with self._lock:
            tree = self._data.get(tag)
            if tree is not None:
                return tree
            load_lock = self._load_locks.setdefault(tag, threading.Lock())

        with load_lock:
            with self._lock:
                tree = self._data.get(tag)
            if tree is not None:
                return tree
            for loader in self._loaders:
                loaded = loader.load(tag)
                if loaded is not None:
                    tree = copy_tree(loaded)
                    with self._lock:
                        tree = self._data.setdefault(tag, tree)
                    logger.debug("Loaded messages for locale '%s' from %r", tag, loader)
                    return tree
        logger.debug("No message data for locale '%s'", tag)
        return None
