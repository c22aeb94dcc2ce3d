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
"""langbook i18n — locale preferences and message resolution.

Import concrete adapter types from the adapter package::

    from langbook.i18n.adapters.resource_bundle import DirectoryMessageLoader
"""

from langbook.i18n.auto_configuration import build_message_repository, build_message_store
from langbook.i18n.locale import (
    AcceptHeaderLocaleResolver,
    LocalePreference,
    LocalePreferenceList,
    LocaleResolver,
)
from langbook.i18n.ports.outbound import MessageFormatter, MessageLoader, MessageSource
from langbook.i18n.properties import I18nProperties
from langbook.i18n.repository import MessageRepository
from langbook.i18n.store import MessageStore

__all__ = [
    "AcceptHeaderLocaleResolver",
    "I18nProperties",
    "LocalePreference",
    "LocalePreferenceList",
    "LocaleResolver",
    "MessageFormatter",
    "MessageLoader",
    "MessageRepository",
    "MessageSource",
    "MessageStore",
    "build_message_repository",
    "build_message_store",
]
