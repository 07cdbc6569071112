"""Single-pass prompt template formatting.

A template is a text with ``{name}`` placeholders and a declared default
for every placeholder. Rendering substitutes all placeholders in one pass
over the text, so a substituted value that itself contains ``{...}`` is
never re-expanded, and a placeholder with no supplied value renders its
default. No literal placeholder token can reach the output.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from athlo.coach.prompts.loader import load_prompt

PLACEHOLDER_PATTERN = re.compile(r"\{([a-z_][a-z0-9_]*)\}")

NOT_SPECIFIED = "Not specified"


def placeholders(text: str) -> set[str]:
    return set(PLACEHOLDER_PATTERN.findall(text))


def render_value(value: Any) -> str | None:
    """Convert a supplied value to text; None means "use the default"."""
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, Sequence):
        items = [str(item) for item in value if item is not None and str(item).strip()]
        return ", ".join(items) if items else None
    return str(value)


@dataclass(frozen=True)
class PromptTemplate:
    """A prompt text with named placeholders and their defaults.

    Raises:
        ValueError: At construction, if a placeholder has no declared default
    """

    name: str
    text: str
    defaults: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = placeholders(self.text) - set(self.defaults)
        if missing:
            raise ValueError(f"Template '{self.name}' has placeholders without defaults: {sorted(missing)}")

    @classmethod
    def from_file(cls, filename: str, defaults: Mapping[str, str] | None = None) -> PromptTemplate:
        return cls(name=filename.removesuffix(".txt"), text=load_prompt(filename), defaults=dict(defaults or {}))

    @property
    def placeholders(self) -> set[str]:
        return placeholders(self.text)

    def render(self, values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        supplied: dict[str, Any] = {**(values or {}), **kwargs}

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            rendered = render_value(supplied.get(key))
            return rendered if rendered is not None else self.defaults[key]

        return PLACEHOLDER_PATTERN.sub(_substitute, self.text)
