import logging

import pytest

from numthm.rel_path import RelPath, compute_rel_path


def test_basic_rel_path():
    path = RelPath("a/b/c/d", "e/f/g", "/1/2/3/4/5/67/", "chapter.md")
    assert str(path) == "a/b/c/d/e/f/g/1/2/3/4/5/67/chapter.md"


def test_rel_path_characters():
    # This is a valid component, it should construct successfully
    RelPath("...something.mdqwertyuiopASDFGHJKL1234567890-_.md")


def test_rel_path_dot():
    path = RelPath(".", "1/2/./3", "./4/5/6", ".")
    assert str(path) == "1/2/3/4/5/6"


def test_rel_path_redundant_separators():
    assert RelPath("math/crypto//signatures/bls.md") == RelPath(
        "math/crypto/signatures/bls.md"
    )
    assert str(RelPath("math//crypto///bls.md")) == "math/crypto/bls.md"


def test_rel_path_double_dot():
    # Double dots which go above the top level are kept
    assert str(RelPath("..")) == ".."
    assert str(RelPath("../README.md")) == "../README.md"
    assert str(RelPath("1/2/3/4/5/../../../../../../")) == ".."
    assert str(RelPath("../../a/../b.md")) == "../../b.md"

    # Double dots which go up to the top level are collapsed completely
    assert str(RelPath("1/2/3/../../../")) == ""

    # Double dots in the middle of paths do the right thing
    assert str(RelPath("1/2/../2a")) == "1/2a"


@pytest.mark.parametrize("component", ["...", "....", "....."])
def test_rel_path_allows_dot_only_components(component):
    assert RelPath(f"123/{component}/x.md").components == ("123", component, "x.md")


def test_rel_path_parent():
    assert RelPath("math/algebra/groups.md").parent == RelPath("math/algebra")
    assert RelPath("intro.md").parent == RelPath()
    assert RelPath("math/algebra/groups.md").name == "groups.md"


def test_compute_rel_path_same_file():
    p = RelPath("crypto/groups.md")
    assert compute_rel_path(p, RelPath("crypto/groups.md")) == ""
    # Equal once normalized
    assert compute_rel_path(RelPath("crypto//groups.md"), p) == ""


def test_compute_rel_path_same_directory():
    assert (
        compute_rel_path(RelPath("math/rings.md"), RelPath("math/groups.md"))
        == "groups.md"
    )


def test_compute_rel_path_sibling_directory():
    assert (
        compute_rel_path(
            RelPath("crypto/bls_signatures.md"), RelPath("math/groups.md")
        )
        == "../math/groups.md"
    )


def test_compute_rel_path_diverging_deeply():
    assert (
        compute_rel_path(
            RelPath("math/crypto//signatures/bls_signatures.md"),
            RelPath("math/algebra/groups.md"),
        )
        == "../../algebra/groups.md"
    )


def test_compute_rel_path_into_subdirectory():
    assert (
        compute_rel_path(RelPath("README.md"), RelPath("math/algebra/groups.md"))
        == "math/algebra/groups.md"
    )


def test_compute_rel_path_out_to_top_level():
    assert (
        compute_rel_path(RelPath("math/algebra/groups.md"), RelPath("intro.md"))
        == "../../intro.md"
    )


def test_compute_rel_path_uses_forward_slashes():
    assert (
        compute_rel_path(RelPath("a\\b\\c.md"), RelPath("a\\d\\e.md"))
        == "../d/e.md"
    )


def test_compute_rel_path_into_chapter_above_root():
    assert (
        compute_rel_path(RelPath("a/b.md"), RelPath("../README.md"))
        == "../../README.md"
    )
    assert compute_rel_path(RelPath("intro.md"), RelPath("../README.md")) == (
        "../README.md"
    )


def test_compute_rel_path_between_chapters_above_root():
    assert (
        compute_rel_path(RelPath("../README.md"), RelPath("../LICENSE.md"))
        == "LICENSE.md"
    )


def test_compute_rel_path_out_of_chapter_above_root(caplog):
    with caplog.at_level(logging.WARNING):
        link = compute_rel_path(RelPath("../README.md"), RelPath("a/b.md"))
    assert link == "a/b.md"
    assert "Can't link from ../README.md to a/b.md" in caplog.text
