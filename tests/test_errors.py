from pathlib import Path

from treewalker import FilesystemEntryError, InvalidArgumentError, InvalidPathError, TreeWalkerError, diagnostic_trace


def test_taxonomy():
    assert issubclass(InvalidPathError, TreeWalkerError)
    assert issubclass(InvalidPathError, ValueError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(FilesystemEntryError, TreeWalkerError)


def test_single_exception():
    assert diagnostic_trace(ValueError("bad value")) == "ValueError: bad value"


def test_explicit_cause_chain():
    try:
        try:
            try:
                raise PermissionError("denied")
            except PermissionError as exc:
                raise OSError("scan failed") from exc
        except OSError as exc:
            raise FilesystemEntryError(Path("/x"), "cannot list directory: /x") from exc
    except FilesystemEntryError as exc:
        lines = diagnostic_trace(exc).splitlines()

    assert len(lines) == 3
    assert lines[0].endswith("FilesystemEntryError: cannot list directory: /x")
    assert lines[1] == "caused by: OSError: scan failed"
    assert lines[2] == "caused by: PermissionError: denied"


def test_implicit_context_is_followed():
    try:
        try:
            {}["missing"]
        except KeyError:
            raise RuntimeError("lookup broke")
    except RuntimeError as exc:
        lines = diagnostic_trace(exc).splitlines()

    assert lines == ["RuntimeError: lookup broke", "caused by: KeyError: 'missing'"]


def test_suppressed_context_is_skipped():
    try:
        try:
            raise KeyError("hidden")
        except KeyError:
            raise RuntimeError("clean") from None
    except RuntimeError as exc:
        assert diagnostic_trace(exc) == "RuntimeError: clean"


def test_cyclic_chain_terminates():
    first = ValueError("first")
    second = ValueError("second")
    first.__cause__ = second
    second.__cause__ = first

    assert diagnostic_trace(first).splitlines() == [
        "ValueError: first",
        "caused by: ValueError: second",
    ]
