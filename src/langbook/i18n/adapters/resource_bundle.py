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
"""Resource-bundle message loaders — locale trees from YAML/JSON files."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from langbook.kernel.exceptions import MessageDataException

logger = logging.getLogger(__name__)


class DirectoryMessageLoader:
    """Loads a locale's message tree from a file named after its tag.

    File naming convention::

        {directory}/{locale}.yaml   (preferred)
        {directory}/{locale}.yml
        {directory}/{locale}.json   (fallback)

    Scalar leaves are converted to strings, so ``count: 3`` becomes the
    template ``"3"``.
    """

    _SUFFIXES = (".yaml", ".yml", ".json")

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def load(self, locale: str) -> dict[str, Any] | None:
        for suffix in self._SUFFIXES:
            path = self._directory / f"{locale}{suffix}"
            if path.is_file():
                logger.debug("Reading messages for locale '%s' from %s", locale, path)
                return _normalize(self._read(path), path)
        return None

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as fh:
                if path.suffix == ".json":
                    return json.load(fh)
                return yaml.safe_load(fh)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MessageDataException(
                f"Cannot parse message file '{path}': {exc}",
                code="MESSAGE_DATA_UNREADABLE",
                context={"path": str(path)},
            ) from exc

    def __repr__(self) -> str:
        return f"DirectoryMessageLoader({str(self._directory)!r})"


class MappingMessageLoader:
    """Serves locale trees from an in-memory mapping of ``tag -> tree``.

    Useful for embedded resources and tests.
    """

    def __init__(self, trees: Mapping[str, Mapping[str, Any]]) -> None:
        self._trees = dict(trees)

    def load(self, locale: str) -> Mapping[str, Any] | None:
        return self._trees.get(locale)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalize(data: Any, path: Path) -> dict[str, Any]:
    """Check the top level is a mapping and stringify scalar leaves."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise MessageDataException(
            f"Message file '{path}' must contain a mapping, got {type(data).__name__}",
            code="MESSAGE_DATA_INVALID",
            context={"path": str(path)},
        )
    return _stringify(data)


def _stringify(tree: Mapping[Any, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(value, Mapping):
            result[str(key)] = _stringify(value)
        elif value is not None:
            result[str(key)] = str(value)
    return result
