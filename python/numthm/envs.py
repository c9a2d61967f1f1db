import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence


@dataclass(frozen=True)
class EnvSpec:
    """An environment handled by the preprocessor, e.g. theorems."""

    key: str
    """The key to match to detect the environment, e.g. 'thm' matches `{{thm}}`."""

    name: str
    """The name to display in the header, e.g. 'Theorem'."""

    emph: str
    """The markdown emphasis delimiter to wrap the header in, e.g. '**' for bold."""

    def pattern(self) -> "re.Pattern[str]":
        """Matches `{{key}}{label}[title]` where `{label}` and `[title]` are both optional."""
        return re.compile(
            r"\{\{"
            + re.escape(self.key)
            + r"\}\}(\{(?P<label>.*?)\})?(\[(?P<title>.*?)\])?"
        )

    def numbered_name(self, prefix: str, value: int) -> str:
        return f"{self.name} {prefix}{value}"

    def header(self, prefix: str, value: int, title: Optional[str]) -> str:
        if title is None:
            return f"{self.emph}{self.numbered_name(prefix, value)}.{self.emph}"
        return f"{self.emph}{self.numbered_name(prefix, value)} ({title}).{self.emph}"


DEFAULT_ENVS: Sequence[EnvSpec] = (
    EnvSpec("thm", "Theorem", "**"),
    EnvSpec("lem", "Lemma", "**"),
    EnvSpec("prop", "Proposition", "**"),
    EnvSpec("def", "Definition", "**"),
    EnvSpec("rem", "Remark", "*"),
)


def parse_custom_envs(value: Any) -> List[EnvSpec]:
    """Convert the `custom_environments` config value, a list of `[key, name, emph]` triples, into EnvSpecs.

    Entries that aren't a list starting with three strings are skipped without complaint."""
    envs: List[EnvSpec] = []
    if not isinstance(value, list):
        return envs
    for entry in value:
        if not isinstance(entry, list) or len(entry) < 3:
            continue
        key, name, emph = entry[:3]
        if isinstance(key, str) and isinstance(name, str) and isinstance(emph, str):
            envs.append(EnvSpec(key, name, emph))
    return envs
