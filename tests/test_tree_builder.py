from __future__ import annotations

import logging
import random

import pytest
from archview.builders.tree_builder import build_tree, count_files, filter_tree, iter_tree
from archview.models import PathKind, TreeNode
from conftest import dir_record, file_record


def _names(nodes: list[TreeNode] | tuple[TreeNode, ...]) -> list[str]:
    return [node.name for node in nodes]


def test_build_tree_nests_unordered_listing() -> None:
    records = [dir_record("src"), file_record("src/a.ts"), file_record("src/b/c.ts"), dir_record("src/b")]

    forest = build_tree(records)

    assert _names(forest) == ["src"]
    src = forest[0]
    assert _names(src.children) == ["b", "a.ts"]
    b_dir, a_file = src.children
    assert b_dir.kind == PathKind.DIRECTORY
    assert a_file.kind == PathKind.FILE
    assert a_file.children is None
    assert _names(b_dir.children) == ["c.ts"]
    assert b_dir.children[0].path == "src/b/c.ts"


def test_build_tree_orders_directories_first_then_ordinal_names() -> None:
    records = [
        file_record("apple.txt"),
        dir_record("alpha"),
        file_record("Beta.txt"),
        dir_record("Zeta"),
    ]

    assert _names(build_tree(records)) == ["Zeta", "alpha", "Beta.txt", "apple.txt"]


def test_build_tree_is_invariant_under_input_permutation() -> None:
    records = [
        dir_record("src"),
        dir_record("src/components"),
        file_record("src/components/Button.tsx", 300),
        file_record("src/components/button.css", 40),
        file_record("src/index.ts", 120),
        dir_record("docs"),
        file_record("docs/guide.md", 900),
        file_record("README.md", 1024),
    ]
    expected = build_tree(records)

    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(records)
        rng.shuffle(shuffled)
        assert build_tree(shuffled) == expected


def test_build_tree_every_child_path_extends_its_parent_path() -> None:
    records = [
        dir_record("a"),
        dir_record("a/b"),
        dir_record("a/b/c"),
        file_record("a/b/c/d.py"),
        file_record("a/e.py"),
        file_record("f.py"),
    ]

    forest = build_tree(records)

    seen_paths = [node.path for node in iter_tree(forest)]
    assert sorted(seen_paths) == sorted(r.path for r in records)
    for node in iter_tree(forest):
        for child in node.children or ():
            assert child.path.rsplit("/", 1)[0] == node.path


def test_build_tree_attaches_orphan_to_nearest_listed_ancestor(caplog: pytest.LogCaptureFixture) -> None:
    records = [dir_record("src"), file_record("src/a/b/c.ts")]

    with caplog.at_level(logging.DEBUG):
        forest = build_tree(records)

    assert _names(forest) == ["src"]
    assert [child.path for child in forest[0].children] == ["src/a/b/c.ts"]
    assert "src/a/b/c.ts" in caplog.text


def test_build_tree_attaches_orphan_without_ancestor_to_root() -> None:
    forest = build_tree([file_record("x/y.ts"), file_record("z.ts")])

    assert _names(forest) == ["y.ts", "z.ts"]
    assert forest[0].path == "x/y.ts"


def test_build_tree_never_nests_under_a_file() -> None:
    forest = build_tree([file_record("a.txt"), file_record("a.txt/inner")])

    assert _names(forest) == ["a.txt", "inner"]
    assert forest[0].children is None


def test_build_tree_duplicate_paths_last_write_wins(caplog: pytest.LogCaptureFixture) -> None:
    records = [file_record("src/a.ts", 10), dir_record("src"), file_record("src/a.ts", 99)]

    with caplog.at_level(logging.WARNING):
        forest = build_tree(records)

    assert len(forest[0].children) == 1
    assert forest[0].children[0].size == 99
    assert "src/a.ts" in caplog.text


def test_build_tree_empty_input_returns_empty_forest() -> None:
    assert build_tree([]) == []


def test_build_tree_strips_leading_and_trailing_slashes() -> None:
    forest = build_tree([dir_record("/src/"), file_record("/src/main.py")])

    assert forest[0].path == "src"
    assert forest[0].children[0].path == "src/main.py"


def test_count_files_counts_nested_files() -> None:
    forest = build_tree(
        [dir_record("src"), dir_record("src/b"), file_record("src/a.ts"), file_record("src/b/c.ts"), dir_record("empty")]
    )
    by_name = {node.name: node for node in forest}

    assert count_files(by_name["src"]) == 2
    assert count_files(by_name["empty"]) == 0
    assert count_files(by_name["src"].children[0]) == 1


@pytest.fixture
def sample_forest() -> list[TreeNode]:
    return build_tree(
        [
            dir_record("src"),
            dir_record("src/components"),
            file_record("src/components/Button.tsx"),
            file_record("src/components/Card.tsx"),
            file_record("src/index.ts"),
            dir_record("docs"),
            file_record("docs/guide.md"),
        ]
    )


def test_filter_tree_without_criteria_returns_input(sample_forest: list[TreeNode]) -> None:
    assert filter_tree(sample_forest) == sample_forest


def test_filter_tree_keeps_ancestors_of_matches(sample_forest: list[TreeNode]) -> None:
    filtered = filter_tree(sample_forest, search_term="BUTTON")

    assert _names(filtered) == ["src"]
    assert _names(filtered[0].children) == ["components"]
    assert _names(filtered[0].children[0].children) == ["Button.tsx"]


def test_filter_tree_keeps_matching_directory_with_matching_children(sample_forest: list[TreeNode]) -> None:
    filtered = filter_tree(sample_forest, search_term="docs")

    assert _names(filtered) == ["docs"]
    assert _names(filtered[0].children) == ["guide.md"]


def test_filter_tree_show_only_files_hoists_files(sample_forest: list[TreeNode]) -> None:
    filtered = filter_tree(sample_forest, show_only_files=True)

    assert _names(filtered) == ["guide.md", "Button.tsx", "Card.tsx", "index.ts"]
    assert all(not node.is_directory for node in filtered)
