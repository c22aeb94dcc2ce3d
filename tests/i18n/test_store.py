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
"""Tests for MessageStore — in-memory message resolution."""

from typing import Any

import pytest

from langbook.i18n.locale import LocalePreferenceList
from langbook.i18n.ports.outbound import MessageSource
from langbook.i18n.store import MessageStore

EN_US = {
    "fox": "The quick brown fox jumps over the lazy dog.",
    "hello": {
        "world": "Hello, World!",
        "universe": "Hello, Universe!",
        "everyone": "Hello, Everyone!",
    },
    "count": "{0,number,integer} files found",
}
PT_BR = {
    "today": "Hoje é {date, date, full}.",
    "fox": "A raposa marrom e ligeira pula sobre o cachorro preguiçoso.",
    "hello": {"world": "Olá, Mundo!"},
    "count": "{0,number,integer} arquivos encontrados",
}
PT_PT = {
    "fox": "A rápida raposa marrom salta sobre o cão preguiçoso.",
    "hello": {"universe": "Olá, Universo!"},
    "count": "{0,number,integer} ficheiros encontrados",
}


class RecordingFormatter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []

    def format(self, locale: str, template: str, args: Any) -> str:
        self.calls.append((locale, template, args))
        return f"[{locale}] {template}"


@pytest.fixture
def store() -> MessageStore:
    return (
        MessageStore(default_locale="en-US")
        .set_accepted_languages(LocalePreferenceList.from_header("pt-PT;q=0.5, pt-BR;q=0.9"))
        .set_supported_languages("pt-PT", "pt-BR", "en")
        .set_language_data("en-US", EN_US)
        .set_language_data("pt-BR", PT_BR)
        .set_language_data("pt-PT", PT_PT)
    )


class TestFindMessage:
    def test_implements_message_source(self, store):
        assert isinstance(store, MessageSource)

    def test_prefers_heaviest_locale(self, store):
        assert store.find_message("fox") == PT_BR["fox"]

    def test_nested_paths(self, store):
        assert store.find_message("hello.world") == "Olá, Mundo!"

    def test_falls_back_to_other_accepted_locales(self, store):
        assert store.find_message("hello.universe") == "Olá, Universo!"

    def test_falls_back_to_default_locale(self, store):
        assert store.find_message("hello.everyone") == "Hello, Everyone!"

    def test_without_default_locale_returns_none(self, store):
        store.default_locale = None
        assert store.find_message("hello.everyone") is None

    def test_without_fallback_goes_straight_to_default(self, store):
        store.fallback = False
        assert store.find_message("hello.universe") == "Hello, Universe!"
        store.default_locale = None
        assert store.find_message("hello.universe") is None

    def test_without_fallback_first_locale_still_answers(self, store):
        store.fallback = False
        assert store.find_message("fox") == PT_BR["fox"]

    def test_unsupported_locales_are_skipped(self, store):
        store.set_supported_languages("pt-PT", "es-MX")
        assert store.find_message("fox") == PT_PT["fox"]

    def test_unsupported_locales_without_fallback(self, store):
        store.fallback = False
        store.set_supported_languages("pt-PT")
        assert store.find_message("fox") == PT_PT["fox"]

    def test_nothing_supported_returns_none(self, store):
        store.default_locale = None
        store.set_supported_languages("es-MX")
        assert store.find_message("count", [2141]) is None

    def test_default_locale_is_always_supported(self, store):
        store.set_supported_languages("es-MX")
        assert store.find_message("count", [2141]) == "2,141 files found"

    def test_missing_key_returns_none(self, store):
        assert store.find_message("does.not.exist") is None

    def test_non_leaf_path_returns_none(self, store):
        store.default_locale = None
        assert store.find_message("hello") is None
        assert store.find_message("fox.tail") is None

    def test_no_accepted_locales_uses_default(self):
        store = MessageStore(default_locale="en-US").set_language_data("en-US", EN_US)
        assert store.find_message("fox") == EN_US["fox"]

    def test_repeated_lookups_are_stable(self, store):
        first = store.find_message("hello.universe")
        assert store.find_message("fox") == PT_BR["fox"]
        assert store.find_message("hello.universe") == first


class TestFormatting:
    def test_formats_with_named_arguments(self, store):
        assert store.find_message("today", {"date": 0}) == "Hoje é quinta-feira, 1 de janeiro de 1970."

    def test_formats_with_positional_arguments(self, store):
        store.set_supported_languages("pt-PT")
        assert store.find_message("count", [7]) == "7 ficheiros encontrados"

    def test_raw_template_without_arguments(self, store):
        assert store.find_message("count") == PT_BR["count"]

    def test_passes_resolved_locale_to_formatter(self):
        formatter = RecordingFormatter()
        store = (
            MessageStore(formatter=formatter, default_locale="en-US")
            .set_accepted_languages(LocalePreferenceList().add("pt-BR", 1.0))
            .set_supported_languages("pt-BR")
            .set_language_data("pt-BR", PT_BR)
            .set_language_data("en-US", EN_US)
        )

        assert store.find_message("count", [1]) == "[pt-BR] " + PT_BR["count"]
        assert store.find_message("hello.everyone", {"x": 1}) == "[en-US] Hello, Everyone!"
        assert formatter.calls == [
            ("pt-BR", PT_BR["count"], [1]),
            ("en-US", "Hello, Everyone!", {"x": 1}),
        ]

    def test_empty_arguments_skip_formatter(self):
        formatter = RecordingFormatter()
        store = MessageStore(formatter=formatter, default_locale="en").set_language_data("en", {"a": "{0}"})
        assert store.find_message("a", []) == "{0}"
        assert formatter.calls == []


class TestConfiguration:
    def test_setters_return_self(self):
        store = MessageStore()
        assert store.set_supported_languages("en") is store
        assert store.set_language_data("en", {}) is store
        assert store.set_accepted_languages(LocalePreferenceList()) is store

    def test_set_language_data_replaces_tree(self, store):
        store.set_language_data("pt-BR", {"fox": "Outra raposa."})
        assert store.find_message("fox") == "Outra raposa."
        assert store.find_message("hello.world") == "Hello, World!"

    def test_data_is_copied_on_set(self):
        tree = {"greeting": {"hi": "Hi"}}
        store = MessageStore(default_locale="en").set_language_data("en", tree)
        tree["greeting"]["hi"] = "Changed"
        assert store.find_message("greeting.hi") == "Hi"

    def test_supported_languages_are_replaced(self, store):
        store.set_supported_languages("en")
        assert store.supported == frozenset({"en"})
