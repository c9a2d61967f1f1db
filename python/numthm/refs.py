import logging
import re

from numthm.labels import LabelRegistry
from numthm.rel_path import RelPath, compute_rel_path

logger = logging.getLogger(__name__)

# `{{ref: label}}` links with the numbered name, `{{tref: label}}` links with the title.
REF_PATTERN = re.compile(r"\{\{(?P<reftype>ref|tref):\s*(?P<label>.*?)\s*\}\}")

UNRESOLVED_REF = "**[??]**"


def find_and_replace_refs(
    content: str, chap_path: RelPath, refs: LabelRegistry
) -> str:
    """Finds and replaces all patterns `{{ref: label}}` and `{{tref: label}}` with a link to the labelled environment.

    `{{tref: label}}` falls back to the numbered name if the environment didn't have a title.
    Unknown labels are replaced with a bold `[??]` so they show up in the rendered book."""

    def replace(m: "re.Match[str]") -> str:
        label = m.group("label")
        info = refs.lookup(label)
        if info is None:
            logger.warning(f"Unknown reference: {label}")
            return UNRESOLVED_REF

        if m.group("reftype") == "tref" and info.title is not None:
            text = info.title
        else:
            text = info.num_name

        rel_path = compute_rel_path(chap_path, info.path)
        return f"[{text}]({rel_path}#{label})"

    return REF_PATTERN.sub(replace, content)
