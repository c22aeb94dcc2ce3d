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
"""Babel-backed message formatter for ICU-style message templates.

Supported argument forms::

    {name}                          plain substitution (numbers/dates localised)
    {count, number[, integer|percent|currency|<pattern>]}
    {when, date[, short|medium|long|full|<pattern>]}
    {when, time[, short|medium|long|full|<pattern>]}
    {count, plural, [offset:N] =0 {...} one {...} other {...}}
    {place, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    {gender, select, female {...} other {...}}

Numeric date and time values are milliseconds since the Unix epoch, in UTC.
Apostrophes quote syntax characters: ``'{'`` is a literal brace and ``''``
is a single apostrophe.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import (
    format_currency,
    format_decimal,
    format_percent,
    get_territory_currencies,
)

from langbook.i18n.ports.outbound import MessageArgs
from langbook.kernel.exceptions import MessageFormatException

logger = logging.getLogger(__name__)

_POUND = object()
_CHOICE_TYPES = ("plural", "selectordinal", "select")
_SIMPLE_TYPES = ("number", "date", "time")


@dataclass
class _Argument:
    name: str
    type: str | None = None
    style: str | None = None
    offset: Decimal = Decimal(0)
    options: dict[str, list[Any]] = field(default_factory=dict)


class _Parser:
    """Recursive-descent parser turning a template into text and argument parts."""

    def __init__(self, template: str) -> None:
        self._text = template
        self._pos = 0

    def parse(self) -> list[Any]:
        return self._message(in_plural=False, nested=False)

    def _error(self, reason: str) -> MessageFormatException:
        return MessageFormatException(
            f"{reason} at position {self._pos} in message template {self._text!r}",
            code="MESSAGE_TEMPLATE_INVALID",
            context={"template": self._text, "position": self._pos},
        )

    def _message(self, in_plural: bool, nested: bool) -> list[Any]:
        parts: list[Any] = []
        buf: list[str] = []

        def flush() -> None:
            if buf:
                parts.append("".join(buf))
                buf.clear()

        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "'":
                buf.append(self._quoted(in_plural))
            elif ch == "{":
                flush()
                parts.append(self._argument())
            elif ch == "}":
                if nested:
                    break
                raise self._error("Unmatched '}'")
            elif ch == "#" and in_plural:
                flush()
                parts.append(_POUND)
                self._pos += 1
            else:
                buf.append(ch)
                self._pos += 1
        else:
            if nested:
                raise self._error("Unterminated sub-message")

        flush()
        return parts

    def _quoted(self, in_plural: bool) -> str:
        text = self._text
        nxt = text[self._pos + 1] if self._pos + 1 < len(text) else ""
        if nxt == "'":
            self._pos += 2
            return "'"
        if nxt not in ("{", "}") and not (in_plural and nxt == "#"):
            self._pos += 1
            return "'"

        # Quoted literal runs to the next lone apostrophe, or to the end.
        self._pos += 1
        buf: list[str] = []
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "'":
                if text[self._pos + 1 : self._pos + 2] == "'":
                    buf.append("'")
                    self._pos += 2
                    continue
                self._pos += 1
                break
            buf.append(ch)
            self._pos += 1
        return "".join(buf)

    def _skip_ws(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos].isspace():
            self._pos += 1

    def _expect(self, ch: str) -> None:
        if self._text[self._pos : self._pos + 1] != ch:
            raise self._error(f"Expected {ch!r}")
        self._pos += 1

    def _word(self) -> str:
        start = self._pos
        text = self._text
        while self._pos < len(text) and not text[self._pos].isspace() and text[self._pos] not in ",{}":
            self._pos += 1
        return text[start : self._pos]

    def _argument(self) -> _Argument:
        self._expect("{")
        self._skip_ws()
        name = self._word()
        if not name:
            raise self._error("Missing argument name")
        self._skip_ws()
        if self._text[self._pos : self._pos + 1] == "}":
            self._pos += 1
            return _Argument(name)

        self._expect(",")
        self._skip_ws()
        arg_type = self._word()
        if arg_type not in _SIMPLE_TYPES + _CHOICE_TYPES:
            raise self._error(f"Unsupported argument type {arg_type!r}")
        argument = _Argument(name, arg_type)
        self._skip_ws()

        if arg_type in _CHOICE_TYPES:
            self._expect(",")
            self._options(argument)
            return argument

        if self._text[self._pos : self._pos + 1] == ",":
            self._pos += 1
            argument.style = self._style()
        self._skip_ws()
        self._expect("}")
        return argument

    def _style(self) -> str:
        start = self._pos
        text = self._text
        quoted = False
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "'":
                quoted = not quoted
            elif ch == "}" and not quoted:
                break
            self._pos += 1
        style = text[start : self._pos].strip()
        if not style:
            raise self._error("Empty argument style")
        return style

    def _options(self, argument: _Argument) -> None:
        in_plural = argument.type != "select"
        while True:
            self._skip_ws()
            if self._pos >= len(self._text):
                raise self._error("Unterminated argument")
            if self._text[self._pos] == "}":
                self._pos += 1
                break
            selector = self._word()
            if in_plural and selector.startswith("offset:"):
                argument.offset = self._decimal(selector.removeprefix("offset:"))
                continue
            if not selector:
                raise self._error("Missing selector")
            self._skip_ws()
            self._expect("{")
            argument.options[selector] = self._message(in_plural=in_plural, nested=True)
            self._expect("}")

        if "other" not in argument.options:
            raise self._error(f"Argument {argument.name!r} has no 'other' option")

    def _decimal(self, raw: str) -> Decimal:
        try:
            return Decimal(raw)
        except InvalidOperation:
            raise self._error(f"Invalid number {raw!r}") from None


@functools.lru_cache(maxsize=128)
def _parse(template: str) -> tuple[Any, ...]:
    return tuple(_Parser(template).parse())


class BabelMessageFormatter:
    """Formats message templates following the conventions of a locale.

    Locale tags Babel doesn't know (``*``, private tags) are formatted with
    *fallback_locale*.
    """

    def __init__(self, fallback_locale: str = "en") -> None:
        self._fallback = Locale.parse(fallback_locale.replace("-", "_"))

    def format(self, locale: str, template: str, args: MessageArgs) -> str:
        parts = _parse(template)
        return self._render(parts, self._babel_locale(locale), args, None)

    def _babel_locale(self, tag: str) -> Locale:
        try:
            return _babel_locale(tag)
        except (UnknownLocaleError, ValueError):
            logger.debug("No locale data for '%s', formatting with '%s'", tag, self._fallback)
            return self._fallback

    def _render(self, parts: Sequence[Any], locale: Locale, args: MessageArgs, pound: str | None) -> str:
        out: list[str] = []
        for part in parts:
            if isinstance(part, str):
                out.append(part)
            elif part is _POUND:
                out.append(pound if pound is not None else "#")
            else:
                out.append(self._render_argument(part, locale, args))
        return "".join(out)

    def _render_argument(self, argument: _Argument, locale: Locale, args: MessageArgs) -> str:
        value = _value(argument.name, args)

        if argument.type is None:
            return _format_simple(value, locale)
        if argument.type == "number":
            return _format_number(value, argument.style, locale)
        if argument.type == "date":
            return format_date(_as_datetime(value), format=argument.style or "medium", locale=locale)
        if argument.type == "time":
            return format_time(_as_datetime(value), format=argument.style or "medium", locale=locale)
        if argument.type == "select":
            branch = argument.options.get(str(value), argument.options["other"])
            return self._render(branch, locale, args, None)

        number = _as_number(value)
        branch = None
        for selector, sub in argument.options.items():
            if selector.startswith("=") and _as_number(selector[1:]) == number:
                branch = sub
                break
        number -= argument.offset
        if branch is None:
            if argument.type == "selectordinal":
                category = locale.ordinal_form(number)
            else:
                category = locale.plural_form(number)
            branch = argument.options.get(category, argument.options["other"])
        return self._render(branch, locale, args, format_decimal(number, locale=locale))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=128)
def _babel_locale(tag: str) -> Locale:
    return Locale.parse(tag.replace("-", "_"))


def _value(name: str, args: MessageArgs) -> Any:
    if isinstance(args, Mapping):
        if name in args:
            return args[name]
        if name.isdigit() and int(name) in args:
            return args[int(name)]
    elif name.isdigit() and int(name) < len(args):
        return args[int(name)]
    raise MessageFormatException(
        f"No value supplied for message argument '{name}'",
        code="MESSAGE_ARGUMENT_MISSING",
        context={"argument": name},
    )


def _as_number(value: Any) -> Decimal:
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise MessageFormatException(
            f"Message argument {value!r} is not a number",
            code="MESSAGE_ARGUMENT_INVALID",
            context={"value": value},
        ) from None


def _as_datetime(value: Any) -> date | time:
    if isinstance(value, (date, time)):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    raise MessageFormatException(
        f"Message argument {value!r} is not a date or time",
        code="MESSAGE_ARGUMENT_INVALID",
        context={"value": value},
    )


def _format_simple(value: Any, locale: Locale) -> str:
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, (int, float, Decimal)):
        return format_decimal(value, locale=locale)
    if isinstance(value, datetime):
        return format_datetime(value, format="short", locale=locale)
    if isinstance(value, date):
        return format_date(value, format="short", locale=locale)
    if isinstance(value, time):
        return format_time(value, format="short", locale=locale)
    return str(value)


def _format_number(value: Any, style: str | None, locale: Locale) -> str:
    number = _as_number(value)
    if style is None:
        return format_decimal(number, locale=locale)
    if style == "integer":
        return format_decimal(number.quantize(Decimal(1), rounding=ROUND_HALF_EVEN), locale=locale)
    if style == "percent":
        return format_percent(number, locale=locale)
    if style == "currency":
        currencies = get_territory_currencies(locale.territory) if locale.territory else []
        if not currencies:
            raise MessageFormatException(
                f"Locale '{locale}' has no default currency",
                code="MESSAGE_ARGUMENT_INVALID",
                context={"locale": str(locale)},
            )
        return format_currency(number, currencies[0], locale=locale)
    return format_decimal(number, format=style, locale=locale)
