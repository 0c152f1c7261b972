"""依存境界（core / render / runtime / export / interactive）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path


def _repo_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src").is_dir() and (parent / "tests").is_dir():
            return parent
    raise RuntimeError("repo root が見つからない")


def _package_root() -> Path:
    return _repo_root() / "src" / "loopix"


def _iter_py_files(root: Path) -> list[Path]:
    return sorted([p for p in root.rglob("*.py") if p.is_file()])


def _imported_modules(path: Path) -> set[str]:
    """ファイル内の絶対 import 先（`a.b.c` と親 `a.b` / `a` を含む）を返す。"""

    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    found: set[str] = set()
    for node in ast.walk(tree):
        names: list[str] = []
        if isinstance(node, ast.Import):
            names = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and int(node.level or 0) == 0 and node.module:
            names = [node.module] + [f"{node.module}.{alias.name}" for alias in node.names if alias.name != "*"]
        for name in names:
            parts = name.split(".")
            for i in range(1, len(parts) + 1):
                found.add(".".join(parts[:i]))
    return found


def _violations(layer: str, forbidden: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for path in _iter_py_files(_package_root() / layer):
        for module in sorted(_imported_modules(path)):
            if module in forbidden:
                out.append(f"{path.relative_to(_repo_root())}: {module}")
    return out


def test_core_is_independent_of_outer_layers() -> None:
    forbidden = (
        "loopix.render",
        "loopix.runtime",
        "loopix.export",
        "loopix.interactive",
        "loopix.api",
        "loopix.sketches",
        "pyglet",
        "moderngl",
        "PIL",
    )
    assert _violations("core", forbidden) == []


def test_headless_layers_do_not_import_gui() -> None:
    forbidden = ("loopix.interactive", "loopix.api", "pyglet")
    for layer in ("render", "runtime", "export"):
        assert _violations(layer, forbidden) == []


def test_sketches_do_not_depend_on_drivers() -> None:
    forbidden = ("loopix.runtime", "loopix.interactive", "loopix.api", "loopix.export", "pyglet")
    assert _violations("sketches", forbidden) == []


def test_moderngl_is_imported_only_by_shader_pass() -> None:
    users = [
        path.relative_to(_package_root()).as_posix()
        for path in _iter_py_files(_package_root())
        if "moderngl" in _imported_modules(path)
    ]
    assert users == ["render/shader_pass.py"]
