import inspect
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

import pytest

from conftest import build_tree
from todolist.discovery import find_files, find_projects
from todolist.errors import DiscoveryError, PatternSyntaxError

MARKERS = [".git", "go.mod", "Makefile"]


class TestFindProjects(unittest.TestCase):
    def setUp(self):
        self.root = Path(tempfile.mkdtemp())
        build_tree(self.root, {
            "p1/.git/": "",
            "p1/main.go": "package main\n",
            "p2/go.mod": "module p2\n",
            "p2/Makefile": "all:\n",
            "p2/sub/go.mod": "module sub\n",
            ".hidden/go.mod": "module hidden\n",
            "nested/deeper/p3/Makefile": "all:\n",
            "plain/readme.txt": "no marker here\n",
        })

    def tearDown(self):
        shutil.rmtree(self.root)

    def test_finds_marked_directories(self):
        got = find_projects(self.root, MARKERS)
        self.assertEqual(
                sorted(got),
                sorted([self.root / "p1", self.root / "p2", self.root / "nested" / "deeper" / "p3"]))

    def test_project_with_several_markers_is_reported_once(self):
        got = find_projects(self.root, MARKERS)
        self.assertEqual(got.count(self.root / "p2"), 1)

    def test_matched_directory_is_not_descended(self):
        got = find_projects(self.root, MARKERS)
        self.assertNotIn(self.root / "p2" / "sub", got)

    def test_hidden_directories_are_skipped(self):
        got = find_projects(self.root, MARKERS)
        self.assertFalse(any(".hidden" in p.parts for p in got))

    def test_start_directory_itself_can_be_a_project(self):
        self.assertEqual(find_projects(self.root / "p1", MARKERS), [self.root / "p1"])

    def test_invalid_marker_pattern_propagates(self):
        with self.assertRaises(PatternSyntaxError):
            find_projects(self.root, ["[go.mod"])


def test_scenario_projects_exactly_p1_p2(tree):
    root = tree({
        "p1/.git/": "",
        "p2/go.mod": "module p2\n",
        "p2/Makefile": "all:\n",
        ".hidden/go.mod": "module hidden\n",
    })
    got = find_projects(root, MARKERS)
    assert set(got) == {root / "p1", root / "p2"}


def test_missing_start_directory_raises(tmp_path):
    with pytest.raises(DiscoveryError) as info:
        find_projects(tmp_path / "missing", MARKERS)
    assert info.value.path == tmp_path / "missing"


def test_missing_start_directory_reported_to_handler(tmp_path):
    seen = []
    assert find_projects(tmp_path / "missing", MARKERS, on_error=seen.append) == []
    assert len(seen) == 1
    assert isinstance(seen[0], DiscoveryError)


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unreadable_subtree_is_skipped_with_handler(tree):
    root = tree({"ok/go.mod": "", "locked/inner/go.mod": ""})
    locked = root / "locked"
    locked.chmod(0)
    try:
        seen = []
        got = find_projects(root, MARKERS, on_error=seen.append)
        assert got == [root / "ok"]
        assert [err.path for err in seen] == [locked]
        with pytest.raises(DiscoveryError):
            find_projects(root, MARKERS)
    finally:
        locked.chmod(0o755)


class TestFindFiles(unittest.TestCase):
    def setUp(self):
        self.root = Path(tempfile.mkdtemp())
        build_tree(self.root, {
            "hello/go.mod": "module hello\n",
            "hello/main_hello.go": "package main\n",
            "hello/README.md": "# hello\n",
            "hello/pkg/util.go": "package pkg\n",
            "hello/.cache/skip.go": "package skip\n",
            "hello/.hidden.go": "package hidden\n",
        })

    def tearDown(self):
        shutil.rmtree(self.root)

    def test_lists_matching_files(self):
        got = find_files(self.root / "hello", ["*.go", "*.mod"])
        self.assertEqual(got, [
            self.root / "hello" / "go.mod",
            self.root / "hello" / "main_hello.go",
            self.root / "hello" / "pkg" / "util.go",
        ])

    def test_no_match(self):
        self.assertEqual(find_files(self.root / "hello", ["*.rs"]), [])

    def test_invalid_pattern_propagates(self):
        with self.assertRaises(PatternSyntaxError):
            find_files(self.root / "hello", ["*.[go"])

    def test_missing_directory(self):
        with self.assertRaises(DiscoveryError):
            find_files(self.root / "nope", ["*.go"])
        seen = []
        self.assertEqual(find_files(self.root / "nope", ["*.go"], on_error=seen.append), [])
        self.assertEqual(len(seen), 1)


def test_deep_tree_does_not_exhaust_the_call_stack(tmp_path):
    depth = 150
    deepest = tmp_path
    for _ in range(depth):
        deepest = deepest / "d"
        deepest.mkdir()
    (deepest / "go.mod").write_text("module deep\n", encoding="utf-8")

    limit = sys.getrecursionlimit()
    # Leave less headroom than the tree is deep.
    sys.setrecursionlimit(len(inspect.stack(0)) + depth // 2)
    try:
        got = find_projects(tmp_path, MARKERS)
    finally:
        sys.setrecursionlimit(limit)
    assert got == [deepest]
