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
"""Tests for BabelMessageFormatter — ICU-style templates rendered with Babel."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from langbook.i18n.adapters.babel_formatter import BabelMessageFormatter
from langbook.i18n.ports.outbound import MessageFormatter
from langbook.kernel.exceptions import MessageFormatException


@pytest.fixture
def formatter() -> BabelMessageFormatter:
    return BabelMessageFormatter()


class TestSimpleArguments:
    def test_conforms_to_port(self, formatter):
        assert isinstance(formatter, MessageFormatter)

    def test_named_argument(self, formatter):
        assert formatter.format("en", "Hello, {name}!", {"name": "Ada"}) == "Hello, Ada!"

    def test_positional_argument(self, formatter):
        assert formatter.format("en", "{1} before {0}", ["b", "a"]) == "a before b"

    def test_integer_keys_in_mapping(self, formatter):
        assert formatter.format("en", "{0}!", {0: "hi"}) == "hi!"

    def test_numbers_are_localised(self, formatter):
        assert formatter.format("en", "{0}", [1234.5]) == "1,234.5"
        assert formatter.format("de", "{0}", [1234.5]) == "1.234,5"

    def test_repeated_argument(self, formatter):
        assert formatter.format("en", "{x}{x}", {"x": "ab"}) == "abab"

    def test_missing_argument_raises(self, formatter):
        with pytest.raises(MessageFormatException) as exc_info:
            formatter.format("en", "Hello, {name}!", {"other": 1})
        assert exc_info.value.context == {"argument": "name"}

    def test_positional_out_of_range_raises(self, formatter):
        with pytest.raises(MessageFormatException):
            formatter.format("en", "{2}", ["a"])


class TestNumbers:
    def test_integer_style(self, formatter):
        assert formatter.format("en-US", "{0,number,integer} files found", [2141]) == "2,141 files found"
        assert formatter.format("en", "{0, number, integer}", [2.5]) == "2"
        assert formatter.format("en", "{0, number, integer}", [3.5]) == "4"

    def test_percent_style(self, formatter):
        assert formatter.format("en", "{p, number, percent}", {"p": Decimal("0.25")}) == "25%"

    def test_currency_style_uses_territory_currency(self, formatter):
        assert formatter.format("en-US", "{a, number, currency}", {"a": 3.5}) == "$3.50"

    def test_currency_without_territory_raises(self, formatter):
        with pytest.raises(MessageFormatException):
            formatter.format("en", "{a, number, currency}", {"a": 3.5})

    def test_custom_pattern(self, formatter):
        assert formatter.format("en", "{a, number, 0.00}", {"a": 3}) == "3.00"

    def test_non_numeric_value_raises(self, formatter):
        with pytest.raises(MessageFormatException):
            formatter.format("en", "{a, number}", {"a": "lots"})


class TestDates:
    def test_full_date_from_epoch_millis(self, formatter):
        assert formatter.format("pt-BR", "Hoje é {date, date, full}.", {"date": 0}) == (
            "Hoje é quinta-feira, 1 de janeiro de 1970."
        )

    def test_long_date_from_epoch_millis(self, formatter):
        assert formatter.format("en", "{d, date, long}", {"d": 86_400_000}) == "January 2, 1970"

    def test_date_styles(self, formatter):
        day = date(2024, 3, 5)
        assert formatter.format("en-US", "{d, date, short}", {"d": day}) == "3/5/24"
        assert formatter.format("en-US", "{d, date}", {"d": day}) == "Mar 5, 2024"

    def test_time_style(self, formatter):
        moment = datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)
        assert formatter.format("de", "{t, time, short}", {"t": moment}) == "14:30"

    def test_custom_date_pattern(self, formatter):
        assert formatter.format("en", "{d, date, yyyy-MM-dd}", {"d": date(2024, 3, 5)}) == "2024-03-05"

    def test_non_date_value_raises(self, formatter):
        with pytest.raises(MessageFormatException):
            formatter.format("en", "{d, date}", {"d": "yesterday"})


class TestPlural:
    template = "{n, plural, =0 {no files} one {# file} other {# files}}"

    def test_exact_match(self, formatter):
        assert formatter.format("en", self.template, {"n": 0}) == "no files"

    def test_categories(self, formatter):
        assert formatter.format("en", self.template, {"n": 1}) == "1 file"
        assert formatter.format("en", self.template, {"n": 1234}) == "1,234 files"

    def test_locale_plural_rules(self, formatter):
        template = "{n, plural, one {# plik} few {# pliki} many {# plików} other {# pliku}}"
        assert formatter.format("pl", template, {"n": 3}) == "3 pliki"
        assert formatter.format("pl", template, {"n": 5}) == "5 plików"

    def test_offset(self, formatter):
        template = "{n, plural, offset:1 =1 {only you} one {you and # other} other {you and # others}}"
        assert formatter.format("en", template, {"n": 1}) == "only you"
        assert formatter.format("en", template, {"n": 2}) == "you and 1 other"
        assert formatter.format("en", template, {"n": 3}) == "you and 2 others"

    def test_ordinals(self, formatter):
        template = "{p, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"
        rendered = [formatter.format("en", template, {"p": p}) for p in (1, 2, 3, 4, 11, 22)]
        assert rendered == ["1st", "2nd", "3rd", "4th", "11th", "22nd"]

    def test_nested_select(self, formatter):
        template = "{n, plural, one {{g, select, female {her file} other {their file}}} other {# files}}"
        assert formatter.format("en", template, {"n": 1, "g": "female"}) == "her file"
        assert formatter.format("en", template, {"n": 2, "g": "female"}) == "2 files"

    def test_missing_other_raises(self, formatter):
        with pytest.raises(MessageFormatException):
            formatter.format("en", "{n, plural, one {x}}", {"n": 1})


class TestSelect:
    template = "{g, select, female {She} male {He} other {They}} replied"

    def test_matches_option(self, formatter):
        assert formatter.format("en", self.template, {"g": "female"}) == "She replied"

    def test_falls_back_to_other(self, formatter):
        assert formatter.format("en", self.template, {"g": "robot"}) == "They replied"

    def test_pound_is_literal_outside_plural(self, formatter):
        assert formatter.format("en", "{g, select, other {# {g}}}", {"g": "x"}) == "# x"


class TestQuoting:
    def test_doubled_apostrophe(self, formatter):
        assert formatter.format("en", "It''s {x}", {"x": 1}) == "It's 1"

    def test_quoted_braces(self, formatter):
        assert formatter.format("en", "'{literal}' {x}", {"x": 1}) == "{literal} 1"

    def test_lone_apostrophe_is_literal(self, formatter):
        assert formatter.format("en", "l'univers {x}", {"x": "!"}) == "l'univers !"

    def test_quoted_pound_in_plural(self, formatter):
        assert formatter.format("en", "{n, plural, other {'#'#}}", {"n": 5}) == "#5"


class TestMalformedTemplates:
    @pytest.mark.parametrize(
        "template",
        ["oops }", "{name", "{}", "{n, plural, one {x}", "{n, choice, 0#none}", "{n, number, }", "{n,}"],
    )
    def test_raises(self, formatter, template):
        with pytest.raises(MessageFormatException):
            formatter.format("en", template, {"n": 1, "name": "x"})


class TestLocales:
    def test_unknown_locale_uses_fallback(self, formatter):
        assert formatter.format("*", "{0}", [1234]) == "1,234"

    def test_custom_fallback_locale(self):
        formatter = BabelMessageFormatter(fallback_locale="de")
        assert formatter.format("xx-unknown", "{0}", [1234.5]) == "1.234,5"
