import pytest
from pathlib import Path

from hbswriter.core.discovery import multi_glob, walk_files
from hbswriter.exceptions import DiscoveryError

@pytest.fixture
def template_tree(tmp_path: Path):
    """Creates a small tree of templates and other files."""
    root = tmp_path / "tree"
    (root / "blog" / "2024").mkdir(parents=True)
    (root / "docs").mkdir()

    (root / "index.hbs").write_text("index")
    (root / "about.handlebars").write_text("about")
    (root / "blog" / "list.hbs").write_text("list")
    (root / "blog" / "2024" / "first.hbs").write_text("first")
    (root / "docs" / "guide.md").write_text("guide")
    return root

def test_multi_glob_keeps_pattern_order_and_dedupes(template_tree: Path):
    matched = multi_glob(["blog/**/*.hbs", "**/*.hbs", "*.handlebars"], cwd=template_tree)

    assert matched == [
        "blog/2024/first.hbs",
        "blog/list.hbs",
        "index.hbs",
        "about.handlebars",
    ]

def test_multi_glob_accepts_single_pattern_string(template_tree: Path):
    assert multi_glob("index.hbs", cwd=template_tree) == ["index.hbs"]

def test_multi_glob_is_deterministic(template_tree: Path):
    assert multi_glob(["**/*"], cwd=template_tree) == multi_glob(["**/*"], cwd=template_tree)

def test_multi_glob_never_returns_directories(template_tree: Path):
    matched = multi_glob(["blog"], cwd=template_tree)
    assert matched == ["blog/2024/first.hbs", "blog/list.hbs"]

def test_multi_glob_unmatched_pattern_raises(template_tree: Path):
    with pytest.raises(DiscoveryError, match='"\\*.txt" did not match any files'):
        multi_glob(["**/*.hbs", "*.txt"], cwd=template_tree)

def test_multi_glob_missing_directory_raises(tmp_path: Path):
    with pytest.raises(DiscoveryError, match="source directory not found"):
        multi_glob(["*.hbs"], cwd=tmp_path / "missing")

def test_walk_files_filters_by_extension(template_tree: Path):
    assert walk_files(template_tree, (".hbs", ".handlebars")) == [
        "about.handlebars",
        "index.hbs",
        "blog/list.hbs",
        "blog/2024/first.hbs",
    ]

def test_walk_files_without_extensions_lists_everything(template_tree: Path):
    assert "docs/guide.md" in walk_files(template_tree)

def test_multi_glob_without_patterns_matches_nothing(template_tree: Path):
    assert multi_glob([], cwd=template_tree) == []
