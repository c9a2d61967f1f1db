import logging

from numthm.counters import CounterState, EnvCounter
from numthm.envs import EnvSpec
from numthm.labels import LabelInfo, LabelRegistry
from numthm.numbering import find_and_replace_envs
from numthm.rel_path import RelPath

SECNUM = "1.2."

THM = EnvSpec("thm", "Theorem", "**")
PROP = EnvSpec("prop", "Proposition", "**")
REM = EnvSpec("rem", "Remark", "*")
PATH = RelPath("crypto/groups.md")


def number(input: str, env: EnvSpec, refs: LabelRegistry, prefix: str = SECNUM) -> str:
    return find_and_replace_envs(input, prefix, PATH, env, refs, EnvCounter(env.key))


def test_wo_label_wo_title():
    refs = LabelRegistry()
    output = number("{{prop}}", PROP, refs)
    assert output == "**Proposition 1.2.1.**"
    assert len(refs) == 0


def test_without_prefix():
    refs = LabelRegistry()
    assert number("{{prop}}", PROP, refs, prefix="") == "**Proposition 1.**"


def test_lighter_emphasis():
    refs = LabelRegistry()
    assert number("{{rem}}", REM, refs) == "*Remark 1.2.1.*"


def test_with_label_wo_title():
    refs = LabelRegistry()
    output = number("{{prop}}{prop:lagrange}", PROP, refs)
    assert output == '<a name="prop:lagrange"></a>\n**Proposition 1.2.1.**'
    assert len(refs) == 1
    assert refs.lookup("prop:lagrange") == LabelInfo(
        num_name="Proposition 1.2.1",
        path=RelPath("crypto/groups.md"),
        title=None,
    )


def test_wo_label_with_title():
    refs = LabelRegistry()
    output = number("{{prop}}[Lagrange Theorem]", PROP, refs)
    assert output == "**Proposition 1.2.1 (Lagrange Theorem).**"
    assert len(refs) == 0


def test_with_label_with_title():
    refs = LabelRegistry()
    output = number("{{prop}}{prop:lagrange}[Lagrange Theorem]", PROP, refs)
    assert (
        output
        == '<a name="prop:lagrange"></a>\n**Proposition 1.2.1 (Lagrange Theorem).**'
    )
    assert refs.lookup("prop:lagrange") == LabelInfo(
        "Proposition 1.2.1", RelPath("crypto/groups.md"), "Lagrange Theorem"
    )


def test_counter_increments_left_to_right():
    refs = LabelRegistry()
    output = number("{{thm}} then {{thm}}[Second] then {{thm}}{third}", THM, refs)
    assert output == (
        "**Theorem 1.2.1.** then **Theorem 1.2.2 (Second).** then "
        '<a name="third"></a>\n**Theorem 1.2.3.**'
    )
    assert refs.lookup("third") == LabelInfo("Theorem 1.2.3", PATH, None)


def test_counter_carries_over_between_chapters():
    refs = LabelRegistry()
    counter = EnvCounter("thm")
    first = find_and_replace_envs("{{thm}}", "1.", RelPath("a.md"), THM, refs, counter)
    second = find_and_replace_envs(
        "{{thm}} {{thm}}", "2.", RelPath("b.md"), THM, refs, counter
    )
    assert first == "**Theorem 1.1.**"
    assert second == "**Theorem 2.2.** **Theorem 2.3.**"
    assert counter.value == 3


def test_other_kinds_are_left_alone():
    refs = LabelRegistry()
    counters = CounterState([THM, PROP])
    output = find_and_replace_envs(
        "{{prop}} {{thm}} {{ref: x}}", "", PATH, THM, refs, counters.counter_for(THM)
    )
    assert output == "{{prop}} **Theorem 1.** {{ref: x}}"
    assert counters.snapshot() == {"thm": 1, "prop": 0}


def test_double_label(caplog):
    refs = LabelRegistry()
    input = (
        "{{prop}}{prop:lagrange}[Lagrange Theorem] "
        "{{thm}}{prop:lagrange}[Another Lagrange Theorem]"
    )
    with caplog.at_level(logging.WARNING):
        output = number(input, PROP, refs)
        output = number(output, THM, refs)
    assert output == (
        '<a name="prop:lagrange"></a>\n'
        "**Proposition 1.2.1 (Lagrange Theorem).** "
        '<a name="prop:lagrange"></a>\n'
        "**Theorem 1.2.1 (Another Lagrange Theorem).**"
    )
    assert len(refs) == 1
    # The first declaration is the one that sticks
    assert refs.lookup("prop:lagrange") == LabelInfo(
        "Proposition 1.2.1", PATH, "Lagrange Theorem"
    )
    assert "Theorem 1.2.1: Label `prop:lagrange' already used" in caplog.text


def test_malformed_markers_are_left_as_text():
    refs = LabelRegistry()
    # An unterminated label is not a label, but {{prop}} on its own still matches
    output = number("{{prop}}{unterminated", PROP, refs)
    assert output == "**Proposition 1.2.1.**{unterminated"
    assert number("{{prop}", PROP, refs) == "{{prop}"
    assert number("{prop}}", PROP, refs) == "{prop}}"
    assert len(refs) == 0


def test_label_and_title_are_shortest_match():
    refs = LabelRegistry()
    output = number("{{prop}}{a}[T] and [not a title]", PROP, refs)
    assert output == '<a name="a"></a>\n**Proposition 1.2.1 (T).** and [not a title]'


def test_key_is_matched_literally():
    refs = LabelRegistry()
    weird = EnvSpec("c++", "Code", "**")
    output = find_and_replace_envs(
        "{{c++}} {{cc}}", "", PATH, weird, refs, EnvCounter("c++")
    )
    assert output == "**Code 1.** {{cc}}"
