"""Logical paths inside a book.

mdBook identifies chapters by their path relative to the book's `src/` directory, e.g. `math/algebra/groups.md`.
Links between chapters must be relative to the directory the *referencing* chapter is rendered into,
so we need to be able to compute `../../algebra/groups.md` from `math/crypto/signatures/bls_signatures.md`.

Chapters may also live outside `src/`, e.g. `../README.md`, so leading `..` components are kept.

None of this touches the filesystem. The book may not exist on disk in this form, and on Windows
we still want forward slashes in the output.
"""

import logging
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

RelPathComponent = str


def _normalize(parts: Iterable[str]) -> Tuple[RelPathComponent, ...]:
    components: List[RelPathComponent] = []
    for part in parts:
        for component in part.split("/"):
            if component in ("", "."):
                continue
            if component == ".." and components and components[-1] != "..":
                components.pop()
                continue
            components.append(component)
    return tuple(components)


class RelPath:
    """A normalized forward-slash path, relative to the root of the book.

    Empty components (e.g. from `a//b`) and `.` are dropped, `..` is collapsed where it can be.
    A `..` that goes above the root is kept at the front of the path."""

    components: Tuple[RelPathComponent, ...]

    def __init__(self, *parts: str) -> None:
        parts = tuple(str(p).replace("\\", "/") for p in parts)
        self.components = _normalize(parts)

    @property
    def parent(self) -> "RelPath":
        p = RelPath()
        p.components = self.components[:-1]
        return p

    @property
    def name(self) -> str:
        return self.components[-1] if self.components else ""

    def __str__(self) -> str:
        return "/".join(self.components)

    def __repr__(self) -> str:
        return f"RelPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RelPath):
            return self.components == other.components
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.components)


def compute_rel_path(chap_path: RelPath, path_to_ref: RelPath) -> str:
    """Computes the relative path from the folder containing `chap_path` to the file `path_to_ref`.

    Returns an empty string if they're the same file, so the link is anchor-only.

    If the referencing chapter sits above the root (e.g. `../README.md`) and the target doesn't,
    the way back down can't be known without the name of the root folder.
    In that case a warning is logged and the target's root-relative path is used."""
    if chap_path == path_to_ref:
        return ""

    base = chap_path.parent.components
    target = path_to_ref.components

    common = 0
    for a, b in zip(base, target):
        if a != b:
            break
        common += 1

    if ".." in base[common:]:
        logger.warning(
            f"Can't link from {chap_path} to {path_to_ref}, using {path_to_ref} as-is"
        )
        return str(path_to_ref)

    return "/".join((*([".."] * (len(base) - common)), *target[common:]))
