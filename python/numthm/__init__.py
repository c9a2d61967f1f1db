__all__ = [
    "Book",
    "BookItem",
    "BookFormatError",
    "Chapter",
    "PartTitle",
    "SectionNumber",
    "Separator",
    "NumThmConfig",
    "CounterState",
    "EnvCounter",
    "DEFAULT_ENVS",
    "EnvSpec",
    "LabelInfo",
    "LabelRegistry",
    "NAME",
    "NumThmPreprocessor",
    "RelPath",
    "compute_rel_path",
    "find_and_replace_envs",
    "find_and_replace_refs",
    "UNRESOLVED_REF",
]

from numthm.book import (
    Book,
    BookFormatError,
    BookItem,
    Chapter,
    PartTitle,
    SectionNumber,
    Separator,
)
from numthm.config import NumThmConfig
from numthm.counters import CounterState, EnvCounter
from numthm.envs import DEFAULT_ENVS, EnvSpec
from numthm.labels import LabelInfo, LabelRegistry
from numthm.numbering import find_and_replace_envs
from numthm.preprocessor import NAME, NumThmPreprocessor
from numthm.refs import UNRESOLVED_REF, find_and_replace_refs
from numthm.rel_path import RelPath, compute_rel_path
