"""Labels attached to numbered environments, and the registry connecting declarations to references.

The registry is filled while numbering and is read-only while resolving references.
Every label lives for the whole run, and the first declaration of a label always wins.
"""

import dataclasses
from typing import Dict, Iterator, Optional

from numthm.rel_path import RelPath


@dataclasses.dataclass(frozen=True)
class LabelInfo:
    """Information for formatting a hyperlink to a specific theorem, lemma, etc."""

    num_name: str
    """The "numbered name" associated with the label, e.g. 'Theorem 1.2.1'."""

    path: RelPath
    """The path to the chapter containing the environment with the label."""

    title: Optional[str] = None


class LabelRegistry:
    _labels: Dict[str, LabelInfo]
    _frozen: bool

    def __init__(self) -> None:
        self._labels = {}
        self._frozen = False

    def register(self, label: str, info: LabelInfo) -> bool:
        """Register a new label. If it already exists the original entry is kept and this returns False."""
        if self._frozen:
            raise RuntimeError(
                f"Can't register label '{label}' once the registry is frozen"
            )
        if label in self._labels:
            return False
        self._labels[label] = info
        return True

    def lookup(self, label: str) -> Optional[LabelInfo]:
        return self._labels.get(label)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)
