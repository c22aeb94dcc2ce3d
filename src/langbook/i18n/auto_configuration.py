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
"""Builds configured message resolvers from a :class:`Config`."""

from __future__ import annotations

import logging
from pathlib import Path

from langbook.core.config import Config
from langbook.i18n.adapters.babel_formatter import BabelMessageFormatter
from langbook.i18n.locale import LocalePreferenceList
from langbook.i18n.properties import I18nProperties
from langbook.i18n.repository import MessageRepository
from langbook.i18n.store import MessageStore

logger = logging.getLogger(__name__)


def build_message_repository(config: Config, base_dir: str | Path | None = None) -> MessageRepository:
    """Create a :class:`MessageRepository` from ``langbook.i18n`` settings.

    Relative directories are resolved against *base_dir* when given.
    """
    props = config.bind(I18nProperties)
    repository = MessageRepository(
        formatter=BabelMessageFormatter(props.formatter_locale),
        default_locale=props.default_locale,
        fallback=props.fallback,
    )
    for directory in props.directories:
        path = Path(directory)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        repository.add_directory(path)
    for from_tag, to_tag in props.redirects.items():
        repository.redirect(from_tag, to_tag)
    repository.set_supported_languages(*props.supported)
    repository.set_accepted_languages(*props.accepted)

    logger.info(
        "Message repository configured: directories=%s default_locale=%s",
        props.directories,
        props.default_locale,
    )
    return repository


def build_message_store(config: Config) -> MessageStore:
    """Create an empty :class:`MessageStore` from ``langbook.i18n`` settings.

    ``accepted`` entries use the ``Accept-Language`` item syntax, so
    ``["pt-BR", "en;q=0.5"]`` is a valid value.
    """
    props = config.bind(I18nProperties)
    store = MessageStore(
        formatter=BabelMessageFormatter(props.formatter_locale),
        default_locale=props.default_locale,
        fallback=props.fallback,
    )
    store.set_supported_languages(*props.supported)
    if props.accepted:
        store.set_accepted_languages(LocalePreferenceList.from_header(", ".join(props.accepted)))
    return store
