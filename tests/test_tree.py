"""Tests for building the ignore-aware directory tree."""

import os
from pathlib import Path

import pytest

import strata.discovery.tree as tree_module
from strata.discovery import Directory, IgnoredDirectory, build_directory
from strata.exceptions import DirectoryReadError, IgnoreFileError


def _child_names(directory: Directory) -> set[str]:
    return {child.path.name for child in directory.children}


def test_build_directory_adds_subdirectories_only(make_tree) -> None:
    root = make_tree("a", "b/c", files={"README.md": "hello", "a/service.txt": "x"})

    tree = build_directory(root)

    assert isinstance(tree, Directory)
    assert tree.path == root
    assert tree.parent is None
    assert _child_names(tree) == {"a", "b"}

    b = tree.find(root / "b")
    assert b is not None
    assert b.parent is tree
    assert [child.path for child in b.children] == [root / "b" / "c"]


def test_ignored_child_is_a_placeholder(make_tree) -> None:
    root = make_tree("keep", "skip/inner", files={".strataignore": "skip\n"})

    tree = build_directory(root)

    slots = {child.path.name: child for child in tree.children}
    assert isinstance(slots["keep"], Directory)
    assert slots["skip"] == IgnoredDirectory(root / "skip")
    assert tree.find(root / "skip") is None
    assert tree.find(root / "skip" / "inner") is None
    assert list(tree.iter_ignored()) == [IgnoredDirectory(root / "skip")]


def test_ignored_subtree_is_never_listed(make_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    root = make_tree("keep", "skip/inner", files={".strataignore": "skip/\n"})
    listed: list[Path] = []
    real_scandir = os.scandir

    def recording_scandir(path):
        listed.append(Path(path))
        return real_scandir(path)

    monkeypatch.setattr(tree_module.os, "scandir", recording_scandir)

    build_directory(root)

    assert root / "skip" not in listed
    assert root / "skip" / "inner" not in listed
    assert root / "keep" in listed


def test_ignores_inherit_from_nearest_ancestor(make_tree) -> None:
    root = make_tree("a/b/c", files={".strataignore": "ignored\n"})

    tree = build_directory(root)
    c = tree.find(root / "a" / "b" / "c")

    assert c is not None
    assert c.rules is None
    assert c.ignores() is tree.rules


def test_root_without_rules_has_no_ignores(make_tree) -> None:
    root = make_tree("a/b")

    tree = build_directory(root)

    assert tree.ignores() is None
    b = tree.find(root / "a" / "b")
    assert b is not None
    assert b.ignores() is None


def test_inherited_rules_exclude_deeper_directories(make_tree) -> None:
    root = make_tree("a/cache/x", "b", files={".strataignore": "cache\n"})

    tree = build_directory(root)
    a = tree.find(root / "a")

    assert a is not None
    assert a.children == [IgnoredDirectory(root / "a" / "cache")]


def test_own_ignore_file_replaces_inherited_rules(make_tree) -> None:
    root = make_tree(
        "a/tmp",
        "a/dist",
        "b/tmp",
        files={".strataignore": "tmp\n", "a/.strataignore": "dist\n"},
    )

    tree = build_directory(root)
    a = tree.find(root / "a")
    b = tree.find(root / "b")

    assert a is not None and b is not None
    assert a.ignores() is a.rules
    assert tree.find(root / "a" / "tmp") is not None
    assert tree.find(root / "a" / "dist") is None
    assert tree.find(root / "b" / "tmp") is None


def test_root_is_never_matched_by_its_own_rules(make_tree) -> None:
    root = make_tree("a", files={".strataignore": "*\n"})

    tree = build_directory(root)

    assert isinstance(tree, Directory)
    assert tree.children == [IgnoredDirectory(root / "a")]


def test_custom_ignore_filename(make_tree) -> None:
    root = make_tree("a", "b", files={".strataignore": "a\n", ".scanignore": "b\n"})

    tree = build_directory(root, ignore_filename=".scanignore")

    assert tree.find(root / "a") is not None
    assert tree.find(root / "b") is None


def test_invalid_ignore_file_propagates(make_tree) -> None:
    root = make_tree("a", files={"a/.strataignore": b"\xff\xfe"})

    with pytest.raises(IgnoreFileError):
        build_directory(root)


def test_listing_failure_propagates(make_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    root = make_tree("a/locked")
    real_scandir = os.scandir

    def failing_scandir(path):
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(tree_module.os, "scandir", failing_scandir)

    with pytest.raises(DirectoryReadError) as exc_info:
        build_directory(root)

    assert exc_info.value.path == root / "a" / "locked"
    assert isinstance(exc_info.value.__cause__, PermissionError)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinked_directories_are_not_followed(make_tree) -> None:
    root = make_tree("real/inner")
    (root / "link").symlink_to(root / "real", target_is_directory=True)

    tree = build_directory(root)

    assert _child_names(tree) == {"real"}


def test_iter_directories_is_preorder(make_tree) -> None:
    root = make_tree("a/b", "c")

    tree = build_directory(root)
    order = [d.path for d in tree.iter_directories()]

    assert order[0] == root
    assert set(order) == {root, root / "a", root / "a" / "b", root / "c"}
    assert order.index(root / "a") < order.index(root / "a" / "b")


def test_very_deep_tree_is_built_and_inherits_root_rules(deep_tree) -> None:
    root, deepest = deep_tree(1100)
    (root / ".strataignore").write_text("vendor/\n")

    tree = build_directory(root)

    directories = list(tree.iter_directories())
    assert len(directories) == 1101
    assert directories[-1].path == deepest
    assert directories[-1].ignores() is tree.rules
    assert list(tree.iter_ignored()) == []
    assert tree.find(deepest) is directories[-1]
