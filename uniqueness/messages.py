"""Validation message catalog.

Templates are plain English strings that double as lookup keys. A catalog may hold
translations per language and domain; a template without a translation is used
verbatim. Placeholders look like `{attribute}` and are substituted by name; unknown
placeholders are left untouched so a missing param never raises.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

from uniqueness.core.settings import get_settings

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def format_message(template: str, params: Mapping[str, Any] | None = None) -> str:
    if not params:
        return template

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


class MessageCatalog:
    def __init__(
        self,
        *,
        translations: Mapping[str, Mapping[str, Mapping[str, str]]] | None = None,
        language: str = "en-US",
        domain: str = "validation",
    ):
        self._translations = translations or {}
        self.language = language
        self.domain = domain

    @classmethod
    def from_file(cls, path: str | Path, *, language: str = "en-US", domain: str = "validation"):
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Message catalog file must contain a JSON object")
        return cls(translations=data, language=language, domain=domain)

    def _lookup(self, template: str, *, language: str, domain: str) -> str:
        # Exact language first ("de-DE"), then its base language ("de").
        for candidate in (language, language.split("-", 1)[0]):
            table = self._translations.get(candidate, {}).get(domain, {})
            if template in table:
                return table[template]
        return template

    def translate(
        self,
        template: str,
        params: Mapping[str, Any] | None = None,
        *,
        language: str | None = None,
        domain: str | None = None,
    ) -> str:
        resolved = self._lookup(
            template,
            language=language or self.language,
            domain=domain or self.domain,
        )
        return format_message(resolved, params)

    def sentence(self, words: Sequence[str], *, language: str | None = None) -> str:
        """Join words into a readable list: "A", "A and B", "A, B and C"."""

        words = [str(w) for w in words]
        if not words:
            return ""
        if len(words) == 1:
            return words[0]
        last_separator = self.translate(" and ", language=language)
        if len(words) == 2:
            return f"{words[0]}{last_separator}{words[1]}"
        separator = self.translate(", ", language=language)
        return separator.join(words[:-1]) + last_separator + words[-1]


@lru_cache
def get_message_catalog() -> MessageCatalog:
    settings = get_settings()
    if settings.messages_path:
        return MessageCatalog.from_file(
            settings.messages_path,
            language=settings.message_language,
            domain=settings.message_domain,
        )
    return MessageCatalog(language=settings.message_language, domain=settings.message_domain)
