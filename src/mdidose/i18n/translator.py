from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from mdidose.i18n.messages import MESSAGES, SUPPORTED_LANGUAGES

logger = logging.getLogger("mdidose.i18n")


@dataclass(frozen=True)
class Message:
    """
    A semantic, language-neutral message emitted by the dosing core.

    ``key`` identifies the catalogue entry and ``params`` holds the values
    interpolated into it. A parameter may itself be a ``Message``; it is
    localized before interpolation.
    """
    key: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "params": {
                name: value.to_dict() if isinstance(value, Message) else value
                for name, value in self.params.items()
            },
        }

    def __str__(self) -> str:
        return self.key


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class Translator:
    """
    Explicit localization object. Create one per user language and hand it
    to whatever needs human-readable text; the core itself only emits
    ``Message`` values.
    """

    def __init__(self, language: str = "en", fallback_language: Optional[str] = "en"):
        for code in (language, fallback_language):
            if code is not None and code not in SUPPORTED_LANGUAGES:
                raise ValueError(
                    f"Unsupported language {code!r}. Supported: {', '.join(SUPPORTED_LANGUAGES)}."
                )
        self.language = language
        self.fallback_language = fallback_language or "en"

    def translate(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        template = MESSAGES[self.language].get(key)
        if template is None and self.fallback_language != self.language:
            template = MESSAGES[self.fallback_language].get(key)
        if template is None:
            template = MESSAGES["en"].get(key)
        if template is None:
            logger.warning("Translation missing for key: %s", key)
            return key
        if not params:
            return template

        values = _KeepMissing(
            (name, self.render(value) if isinstance(value, Message) else value)
            for name, value in params.items()
        )
        return template.format_map(values)

    def render(self, message: Message) -> str:
        return self.translate(message.key, message.params)

    def render_all(self, messages: Iterable[Message]) -> List[str]:
        return [self.render(message) for message in messages]
