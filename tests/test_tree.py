from pathlib import Path

from anytree import PreOrderIter

from treewalker import PathRegistry, build_registry_tree, draw_registry_tree


def _lines(s: str):
    return s.splitlines()


def test_empty_registry_is_a_single_node():
    node = build_registry_tree(PathRegistry())

    assert node.name == "registry"
    assert len(list(PreOrderIter(node))) == 1
    assert draw_registry_tree(node) == "registry"


def test_excludes_nest_under_covering_include(tmp_path: Path):
    reg = PathRegistry()
    reg.add_include(tmp_path / "data", recursive=True)
    reg.add_include(tmp_path / "data2", recursive=True)
    reg.add_exclude(tmp_path / "data/tmp")
    reg.add_exclude(tmp_path / "data/cache/old")

    node = build_registry_tree(reg)

    data, data2 = node.children
    assert data.kind == "include" and data.fs_path == tmp_path / "data"
    assert data2.kind == "include" and data2.children == ()
    assert [c.name for c in data.children] == ["tmp", "cache/old"]
    assert all(c.kind == "exclude" for c in data.children)
    assert data.children[0].fs_path == tmp_path / "data/tmp"


def test_uncovered_excludes_are_inert(tmp_path: Path):
    reg = PathRegistry()
    reg.add_include(tmp_path / "data", recursive=True)
    reg.add_exclude(tmp_path / "elsewhere")

    node = build_registry_tree(reg)

    kinds = [(c.kind, c.fs_path) for c in node.children]
    assert kinds == [("include", tmp_path / "data"), ("inert", tmp_path / "elsewhere")]


def test_draw_registry_tree_shape(tmp_path: Path):
    reg = PathRegistry()
    reg.add_include(tmp_path / "data", recursive=True)
    reg.add_include(tmp_path / "other", recursive=True)
    reg.add_exclude(tmp_path / "data/tmp")
    reg.add_exclude(tmp_path / "data/logs")
    reg.add_exclude(tmp_path / "elsewhere")

    lines = _lines(draw_registry_tree(build_registry_tree(reg)))

    # registry
    # ├── + <data>
    # │   ├── - tmp
    # │   └── - logs
    # ├── + <other>
    # └── ! <elsewhere>
    assert lines == [
        "registry",
        f"├── + {tmp_path / 'data'}",
        "│   ├── - tmp",
        "│   └── - logs",
        f"├── + {tmp_path / 'other'}",
        f"└── ! {tmp_path / 'elsewhere'}",
    ]
