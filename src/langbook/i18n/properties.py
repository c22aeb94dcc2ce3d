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
"""Configuration properties of the i18n resolvers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from langbook.core.config import config_properties


@config_properties(prefix="langbook.i18n")
class I18nProperties(BaseModel):
    """Settings read from the ``langbook.i18n`` configuration section.

    Example (YAML)::

        langbook:
          i18n:
            default-locale: en-US
            fallback: true
            supported: [en-US, pt-BR, pt-PT]
            directories: [lang/app, lang/vendor]
            redirects:
              pt: pt-BR
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    default_locale: str | None = Field(default="en", alias="default-locale")
    fallback: bool = True
    supported: list[str] = Field(default_factory=list)
    accepted: list[str] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    redirects: dict[str, str] = Field(default_factory=dict)
    formatter_locale: str = Field(default="en", alias="formatter-locale")
