"""The book tree that mdBook hands to preprocessors, and its JSON representation.

mdBook serializes its `Book` as `{"sections": [<BookItem>...], "__non_exhaustive": null}` where each BookItem is one of
- `{"Chapter": {"name": ..., "content": ..., "number": [1, 2] | null, "sub_items": [...], "path": ... | null, ...}}`
- `"Separator"`
- `{"PartTitle": "..."}`

Newer mdBook versions call the top-level list `items` instead of `sections`, so we remember which one we read.
Keys we don't understand are carried through untouched so the book we write back is the book we were given, plus our changes.
"""

import abc
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from typing_extensions import override

from numthm.rel_path import RelPath


class BookFormatError(ValueError):
    pass


@dataclass(frozen=True)
class SectionNumber:
    """A chapter's hierarchical section number, e.g. (1, 2) for section 1.2."""

    numbers: Tuple[int, ...]

    def __str__(self) -> str:
        # mdBook displays section numbers with a trailing dot, e.g. "1.2."
        return "".join(f"{n}." for n in self.numbers)


class BookItem(abc.ABC):
    @abc.abstractmethod
    def to_json(self) -> Any: ...

    def children(self) -> Sequence["BookItem"]:
        return ()

    @staticmethod
    def from_json(obj: Any) -> "BookItem":
        if obj == "Separator":
            return Separator()
        if isinstance(obj, dict) and len(obj) == 1:
            if "Chapter" in obj:
                return Chapter.from_json(obj["Chapter"])
            if "PartTitle" in obj:
                if not isinstance(obj["PartTitle"], str):
                    raise BookFormatError(
                        f"PartTitle must be a string, got {obj['PartTitle']!r}"
                    )
                return PartTitle(obj["PartTitle"])
        raise BookFormatError(f"Unrecognized book item {obj!r}")


class Separator(BookItem):
    @override
    def to_json(self) -> Any:
        return "Separator"


class PartTitle(BookItem):
    title: str

    def __init__(self, title: str) -> None:
        self.title = title

    @override
    def to_json(self) -> Any:
        return {"PartTitle": self.title}


class Chapter(BookItem):
    name: str
    content: str
    number: Optional[SectionNumber]
    sub_items: List[BookItem]
    path: Optional[RelPath]
    # The path exactly as mdBook gave it to us, written back unchanged
    raw_path: Optional[str]
    source_path: Optional[str]
    parent_names: List[str]
    extra: Dict[str, Any]

    def __init__(
        self,
        name: str,
        content: str = "",
        number: Optional[SectionNumber] = None,
        sub_items: Optional[List[BookItem]] = None,
        path: Optional[str] = None,
        source_path: Optional[str] = None,
        parent_names: Optional[List[str]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.name = name
        self.content = content
        self.number = number
        self.sub_items = sub_items if sub_items is not None else []
        self.raw_path = path
        self.path = RelPath(path) if path is not None else None
        self.source_path = source_path
        self.parent_names = parent_names if parent_names is not None else []
        self.extra = extra if extra is not None else {}

    def is_draft_chapter(self) -> bool:
        """Draft chapters are listed in SUMMARY.md without a file, and have no content to process."""
        return self.path is None

    @override
    def children(self) -> Sequence[BookItem]:
        return self.sub_items

    @staticmethod
    def from_json(obj: Any) -> "Chapter":
        if not isinstance(obj, dict):
            raise BookFormatError(f"Chapter must be an object, got {obj!r}")
        obj = dict(obj)
        try:
            name = obj.pop("name")
            content = obj.pop("content", "")
            raw_number = obj.pop("number", None)
            raw_sub_items = obj.pop("sub_items", [])
            path = obj.pop("path", None)
            source_path = obj.pop("source_path", None)
            parent_names = obj.pop("parent_names", [])
        except KeyError as e:
            raise BookFormatError(f"Chapter is missing required field {e}") from e

        if not isinstance(name, str) or not isinstance(content, str):
            raise BookFormatError(f"Chapter '{name}' has a non-string name or content")
        if path is not None and not isinstance(path, str):
            raise BookFormatError(f"Chapter '{name}' has a non-string path {path!r}")

        number = None
        if raw_number is not None:
            if not isinstance(raw_number, list) or not all(
                isinstance(n, int) for n in raw_number
            ):
                raise BookFormatError(
                    f"Chapter '{name}' has an invalid section number {raw_number!r}"
                )
            number = SectionNumber(tuple(raw_number))

        if not isinstance(raw_sub_items, list):
            raise BookFormatError(f"Chapter '{name}' has non-list sub_items")

        return Chapter(
            name=name,
            content=content,
            number=number,
            sub_items=[BookItem.from_json(i) for i in raw_sub_items],
            path=path,
            source_path=source_path,
            parent_names=parent_names,
            extra=obj,
        )

    @override
    def to_json(self) -> Any:
        return {
            "Chapter": {
                "name": self.name,
                "content": self.content,
                "number": (
                    list(self.number.numbers) if self.number is not None else None
                ),
                "sub_items": [i.to_json() for i in self.sub_items],
                "path": self.raw_path,
                "source_path": self.source_path,
                "parent_names": self.parent_names,
                **self.extra,
            }
        }


class Book:
    items: List[BookItem]
    _items_key: str
    extra: Dict[str, Any]

    def __init__(
        self,
        items: Optional[List[BookItem]] = None,
        items_key: str = "sections",
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.items = items if items is not None else []
        self._items_key = items_key
        self.extra = extra if extra is not None else {"__non_exhaustive": None}

    def iter_items(self) -> Iterator[BookItem]:
        """Depth-first, pre-order iteration over every item in document order."""
        dfs_queue: List[BookItem] = list(reversed(self.items))
        while dfs_queue:
            item = dfs_queue.pop()
            yield item
            # reversed is important because we pop the last thing in the queue off first.
            dfs_queue.extend(reversed(item.children()))

    def iter_chapters(self) -> Iterator[Chapter]:
        for item in self.iter_items():
            if isinstance(item, Chapter):
                yield item

    def for_each_mut(self, f: Callable[[BookItem], None]) -> None:
        for item in self.iter_items():
            f(item)

    @staticmethod
    def from_json(obj: Any) -> "Book":
        if not isinstance(obj, dict):
            raise BookFormatError(f"Book must be an object, got {type(obj).__name__}")
        obj = dict(obj)
        for key in ("sections", "items"):
            if key in obj:
                raw_items = obj.pop(key)
                break
        else:
            raise BookFormatError("Book has neither 'sections' nor 'items'")
        if not isinstance(raw_items, list):
            raise BookFormatError(f"Book '{key}' must be a list")
        return Book(
            items=[BookItem.from_json(i) for i in raw_items],
            items_key=key,
            extra=obj,
        )

    def to_json(self) -> Dict[str, Any]:
        return {self._items_key: [i.to_json() for i in self.items], **self.extra}
