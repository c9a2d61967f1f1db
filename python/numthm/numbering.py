import logging
import re

from numthm.counters import EnvCounter
from numthm.envs import EnvSpec
from numthm.labels import LabelInfo, LabelRegistry
from numthm.rel_path import RelPath

logger = logging.getLogger(__name__)


def anchor(label: str) -> str:
    return f'<a name="{label}"></a>\n'


def find_and_replace_envs(
    content: str,
    prefix: str,
    path: RelPath,
    env: EnvSpec,
    refs: LabelRegistry,
    counter: EnvCounter,
) -> str:
    """Finds all patterns `{{key}}{mylabel}[mytitle]` where `key` is `env.key` (e.g. `thm`)
    and replaces them with a header (including the title if a title `mytitle` is provided)
    and an anchor if a label `mylabel` is provided.

    If a label is provided, `refs` gets an entry allowing links to the environment to be formatted.
    If the label was already registered, a warning is logged and the first entry is kept.

    `counter` is incremented once per match, and carries over between chapters.
    """

    def replace(m: "re.Match[str]") -> str:
        value = counter.increment()
        label = m.group("label")
        title = m.group("title")

        out = ""
        if label is not None:
            registered = refs.register(
                label,
                LabelInfo(
                    num_name=env.numbered_name(prefix, value),
                    path=path,
                    title=title,
                ),
            )
            if not registered:
                logger.warning(
                    f"{env.name} {prefix}{value}: Label `{label}' already used"
                )
            out += anchor(label)

        return out + env.header(prefix, value, title)

    return env.pattern().sub(replace, content)
