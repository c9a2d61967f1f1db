"""Reading the `[preprocessor.numthm]` table of an mdBook configuration.

```toml
[preprocessor.numthm]
prefix = true
custom_environments = [
    ["conj", "Conjecture", "**"],
    ["ex", "Example", "*"],
]
```

`prefix` must be a boolean, anything else leaves the default (false).
Malformed `custom_environments` entries are skipped silently.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Union

from numthm.envs import DEFAULT_ENVS, EnvSpec, parse_custom_envs

CONFIG_TABLE = "preprocessor.numthm"


def get_dotted(config: Mapping[str, Any], dotted_key: str) -> Any:
    """Look up e.g. `preprocessor.numthm.prefix` in nested tables. Returns None if any level is missing."""
    value: Any = config
    for key in dotted_key.split("."):
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value


@dataclass
class NumThmConfig:
    prefix: bool = False
    """Whether environment numbers are prefixed by the chapter's section number."""

    custom_environments: List[EnvSpec] = field(default_factory=list)

    def envs(self) -> List[EnvSpec]:
        return [*DEFAULT_ENVS, *self.custom_environments]

    @staticmethod
    def from_mdbook_config(config: Mapping[str, Any]) -> "NumThmConfig":
        cfg = NumThmConfig()

        prefix = get_dotted(config, f"{CONFIG_TABLE}.prefix")
        if isinstance(prefix, bool):
            cfg.prefix = prefix

        cfg.custom_environments = parse_custom_envs(
            get_dotted(config, f"{CONFIG_TABLE}.custom_environments")
        )
        return cfg

    @staticmethod
    def from_book_toml(path: Union[str, Path]) -> "NumThmConfig":
        with open(path, "rb") as f:
            return NumThmConfig.from_mdbook_config(tomllib.load(f))
