"""The phases of a numthm run over a book:

1. Numbering
   Every non-draft chapter is visited in document order. For each configured environment, every `{{key}}` marker
   is replaced by a numbered header (and an anchor if it has a label). Counters are per-environment and run across
   the whole book. Labels go into the LabelRegistry along with their numbered name, chapter, and title.
2. Resolving
   Once every chapter has been numbered the registry is frozen. Every non-draft chapter is visited again and every
   `{{ref: label}}` / `{{tref: label}}` is replaced by a link relative to the referencing chapter.
   References can point forwards to chapters later in the book, which is why this can't happen during numbering.

Neither phase fails on bad document content: duplicate labels and unknown references are logged as warnings.
"""

import logging
from typing import Any, List, Mapping

from numthm.book import Book, BookItem, Chapter
from numthm.config import NumThmConfig
from numthm.counters import CounterState
from numthm.envs import EnvSpec
from numthm.labels import LabelRegistry
from numthm.numbering import find_and_replace_envs
from numthm.refs import find_and_replace_refs

logger = logging.getLogger(__name__)

NAME = "numthm"


class NumThmPreprocessor:
    """A preprocessor for automatically numbering theorems, lemmas, etc."""

    envs: List[EnvSpec]
    with_prefix: bool

    def __init__(self, config: NumThmConfig | None = None) -> None:
        if config is None:
            config = NumThmConfig()
        self.envs = config.envs()
        self.with_prefix = config.prefix

    @staticmethod
    def from_context(ctx: Mapping[str, Any]) -> "NumThmPreprocessor":
        """Build from the mdBook PreprocessorContext JSON object, which has the book config under `config`."""
        config = ctx.get("config", {})
        if not isinstance(config, Mapping):
            config = {}
        return NumThmPreprocessor(NumThmConfig.from_mdbook_config(config))

    @property
    def name(self) -> str:
        return NAME

    def supports_renderer(self, renderer: str) -> bool:
        # The output is plain markdown + <a> tags, which every renderer can cope with
        return True

    def _prefix(self, chapter: Chapter) -> str:
        if self.with_prefix and chapter.number is not None:
            return str(chapter.number)
        return ""

    def run(self, book: Book) -> LabelRegistry:
        """Number every environment and resolve every reference in `book`, in place.

        Returns the registry of labels found, which is frozen."""
        refs = LabelRegistry()
        counters = CounterState(self.envs)

        def number_chapter(item: BookItem) -> None:
            if isinstance(item, Chapter) and not item.is_draft_chapter():
                assert item.path is not None
                prefix = self._prefix(item)
                for env in self.envs:
                    item.content = find_and_replace_envs(
                        item.content,
                        prefix,
                        item.path,
                        env,
                        refs,
                        counters.counter_for(env),
                    )

        book.for_each_mut(number_chapter)

        refs.freeze()
        logger.debug(
            f"Numbered environments {counters.snapshot()}, registered {len(refs)} labels"
        )

        def resolve_chapter(item: BookItem) -> None:
            if isinstance(item, Chapter) and not item.is_draft_chapter():
                assert item.path is not None
                item.content = find_and_replace_refs(item.content, item.path, refs)

        book.for_each_mut(resolve_chapter)

        return refs
