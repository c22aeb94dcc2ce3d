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
"""Locale preferences — weighted ``Accept-Language`` parsing and ranking."""

from __future__ import annotations

import functools
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from langbook.kernel.exceptions import InvalidLocaleHeaderException

# ``*`` or ASCII alphanumeric segments joined by single hyphens, then an optional
# ``;q=`` whose number may itself be omitted.
_LANG_RE = re.compile(r"^(\*|[^\W_]+(?:-[^\W_]+)*)(?:;q=(\d+(?:\.\d+)?)?)?$", re.ASCII)


@dataclass(frozen=True)
class LocalePreference:
    """One requested locale tag and its quality weight."""

    tag: str
    weight: float = 1.0


class LocalePreferenceList:
    """Locale preferences ordered by descending weight.

    Entries with equal weight keep the order in which they were added::

        prefs = LocalePreferenceList.from_header("pt-PT;q=0.5, pt-BR;q=0.9")
        prefs.tags()  # ["pt-BR", "pt-PT"]
    """

    def __init__(self) -> None:
        self._preferences: list[LocalePreference] = []

    @classmethod
    def from_header(cls, header: str) -> LocalePreferenceList:
        """Create a list from an HTTP ``Accept-Language`` header.

        Raises :class:`InvalidLocaleHeaderException` on the first item that
        does not match the grammar; weights are not clamped to ``[0, 1]``.
        """
        parsed: list[tuple[str, float]] = []
        for value in (item.strip() for item in header.split(",")):
            match = _LANG_RE.match(value)
            if match is None:
                raise InvalidLocaleHeaderException(value)
            tag, quality = match.groups()
            if ";" not in value:
                weight = 1.0
            else:
                weight = float(quality) if quality else 0.0
            parsed.append((tag, weight))

        preferences = cls()
        for tag, weight in parsed:
            preferences.add(tag, weight)
        return preferences

    def add(self, tag: str, weight: float) -> LocalePreferenceList:
        """Add a preference and keep the list ranked."""
        self._preferences.append(LocalePreference(tag, weight))
        self._preferences.sort(key=functools.cmp_to_key(self.compare))
        return self

    def get(self, position: int) -> LocalePreference | None:
        """Return the preference at rank *position*, or ``None``."""
        if 0 <= position < len(self._preferences):
            return self._preferences[position]
        return None

    def tags(self) -> list[str]:
        return [preference.tag for preference in self._preferences]

    @staticmethod
    def compare(a: LocalePreference, b: LocalePreference) -> int:
        """Order by weight, heaviest first."""
        if a.weight > b.weight:
            return -1
        if a.weight < b.weight:
            return 1
        return 0

    def __iter__(self) -> Iterator[LocalePreference]:
        return iter(list(self._preferences))

    def __len__(self) -> int:
        return len(self._preferences)

    def __repr__(self) -> str:
        items = ", ".join(f"{p.tag};q={p.weight:g}" for p in self._preferences)
        return f"LocalePreferenceList({items})"


@runtime_checkable
class LocaleResolver(Protocol):
    """Port for determining the preferred locales of an incoming request."""

    def resolve_locales(self, request: Any) -> LocalePreferenceList: ...


class AcceptHeaderLocaleResolver:
    """Builds a :class:`LocalePreferenceList` from ``Accept-Language``.

    The header is read from ``request.accept_language`` or
    ``request.headers["accept-language"]``. A missing header yields a list
    holding only *default_locale* (or an empty list without one). Malformed
    headers propagate :class:`InvalidLocaleHeaderException`.
    """

    def __init__(self, default_locale: str | None = "en") -> None:
        self._default = default_locale

    def resolve_locales(self, request: Any) -> LocalePreferenceList:
        header: str = getattr(request, "accept_language", "") or ""
        if not header:
            headers = getattr(request, "headers", None)
            if headers is not None:
                header = headers.get("accept-language", "") or ""

        if header.strip():
            return LocalePreferenceList.from_header(header)

        preferences = LocalePreferenceList()
        if self._default is not None:
            preferences.add(self._default, 1.0)
        return preferences

