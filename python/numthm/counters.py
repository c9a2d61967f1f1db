from dataclasses import dataclass
from typing import Dict, Iterable

from numthm.envs import EnvSpec


@dataclass
class EnvCounter:
    key: str
    value: int = 0

    def increment(self) -> int:
        self.value += 1
        return self.value


class CounterState:
    """One counter per environment kind, shared by every chapter in a single run.

    Counters are never reset between chapters - the Nth theorem in the book is always Theorem N,
    possibly with the section prefix of whichever chapter it's in."""

    counters: Dict[str, EnvCounter]

    def __init__(self, envs: Iterable[EnvSpec]) -> None:
        self.counters = {}
        for env in envs:
            # If two environments share a key, the first one claims every match anyway
            self.counters.setdefault(env.key, EnvCounter(env.key))

    def counter_for(self, env: EnvSpec) -> EnvCounter:
        if env.key not in self.counters:
            raise ValueError(f"Unknown environment kind '{env.key}'")
        return self.counters[env.key]

    def snapshot(self) -> Dict[str, int]:
        return {key: c.value for key, c in self.counters.items()}
