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
"""Message trees — nested mappings of dotted key segments to templates.

A tree such as::

    {"hello": {"world": "Hello, World!"}}

holds the template ``"Hello, World!"`` under the path ``hello.world``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def split_path(path: str) -> list[str]:
    """Split a dotted message path into key segments."""
    return path.split(".")


def lookup(tree: Mapping[str, Any] | None, segments: Sequence[str]) -> str | None:
    """Walk *tree* along *segments* and return the template leaf.

    Returns ``None`` when a segment is missing, a value along the way is not
    a mapping, or the final value is not a string.
    """
    current: Any = tree
    for segment in segments:
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current if isinstance(current, str) else None


def copy_tree(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy the mapping levels of *tree* so the owner can't mutate it."""
    return {
        str(key): copy_tree(value) if isinstance(value, Mapping) else value
        for key, value in tree.items()
    }
