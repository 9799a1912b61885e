"""依存境界（core / interactive / GL バックエンド）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path


def _repo_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src").is_dir() and (parent / "tests").is_dir():
            return parent
    raise RuntimeError("repo root が見つからない")


def _iter_py_files(root: Path) -> list[Path]:
    if root.is_file():
        return [root]
    return sorted([p for p in root.rglob("*.py") if p.is_file()])


def _module_name_for_path(*, path: Path, src_root: Path) -> tuple[str, bool]:
    rel = path.relative_to(src_root)
    parts = list(rel.parts)
    if not parts or not parts[-1].endswith(".py"):
        raise ValueError(f"python ファイルではない: {rel}")

    is_package = parts[-1] == "__init__.py"
    if is_package:
        parts = parts[:-1]
    else:
        parts[-1] = parts[-1].removesuffix(".py")

    if not parts:
        raise ValueError(f"src 直下の __init__.py はモジュール名にできない: {rel}")
    return ".".join(parts), is_package


def _resolve_importfrom_targets(
    *,
    current_module: str,
    is_package: bool,
    node: ast.ImportFrom,
) -> set[str]:
    level = int(node.level or 0)
    if level == 0:
        if node.module is None:
            return set()
        base = str(node.module)
    else:
        current_package = current_module if is_package else current_module.rsplit(".", 1)[0]
        parts = current_package.split(".")
        up = level - 1
        if up >= len(parts):
            raise ValueError(
                "相対 import の解決に失敗: "
                f"current_module={current_module!r}, level={level}, module={node.module!r}"
            )
        base = ".".join(parts[: len(parts) - up])
        if node.module is not None:
            base = f"{base}.{node.module}"

    targets = {base}
    for alias in node.names:
        if alias.name != "*":
            targets.add(f"{base}.{alias.name}")
    return targets


def _import_modules(*, path: Path, src_root: Path, top_level_only: bool = False) -> set[str]:
    current_module, is_package = _module_name_for_path(path=path, src_root=src_root)
    tree = ast.parse(path.read_text(encoding="utf-8"))
    nodes = tree.body if top_level_only else list(ast.walk(tree))
    modules: set[str] = set()

    for node in nodes:
        if isinstance(node, ast.Import):
            modules.update(str(alias.name) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            modules.update(
                _resolve_importfrom_targets(
                    current_module=current_module,
                    is_package=is_package,
                    node=node,
                )
            )
    return modules


def _assert_no_forbidden_imports(
    *,
    paths: list[Path],
    forbidden_prefixes: tuple[str, ...],
    top_level_only: bool = False,
) -> None:
    repo_root = _repo_root()
    src_root = repo_root / "src"
    violations: list[str] = []
    for path in paths:
        rel = path.relative_to(repo_root)
        modules = _import_modules(path=path, src_root=src_root, top_level_only=top_level_only)
        bad = sorted(m for m in modules if m.startswith(forbidden_prefixes))
        if bad:
            violations.append(f"{rel}: {', '.join(bad)}")

    if violations:
        joined = "\n".join(violations)
        raise AssertionError(f"依存境界違反の import を検出:\n{joined}")


def _pkg_root() -> Path:
    return _repo_root() / "src" / "smolcanvas"


def test_core_does_not_depend_on_interactive_or_gl() -> None:
    _assert_no_forbidden_imports(
        paths=_iter_py_files(_pkg_root() / "core"),
        forbidden_prefixes=("smolcanvas.interactive", "smolcanvas.canvas", "pyglet", "moderngl"),
    )


def test_only_window_backend_imports_pyglet_and_moderngl() -> None:
    interactive = _pkg_root() / "interactive"
    backend = {interactive / "pyglet_host.py", *(_iter_py_files(interactive / "gl"))}
    paths = [p for p in _iter_py_files(interactive) if p not in backend]
    _assert_no_forbidden_imports(paths=paths, forbidden_prefixes=("pyglet", "moderngl"))


def test_canvas_imports_window_backend_lazily() -> None:
    _assert_no_forbidden_imports(
        paths=[_pkg_root() / "canvas.py", _pkg_root() / "__init__.py"],
        forbidden_prefixes=("pyglet", "moderngl", "smolcanvas.interactive.pyglet_host", "smolcanvas.interactive.gl"),
        top_level_only=True,
    )


def _parse_single_stmt(source: str) -> ast.stmt:
    tree = ast.parse(source)
    assert len(tree.body) == 1
    return tree.body[0]


def test__resolve_importfrom_targets_handles_relative_imports() -> None:
    node = _parse_single_stmt("from ..interactive import host\n")
    assert isinstance(node, ast.ImportFrom)
    got = _resolve_importfrom_targets(
        current_module="smolcanvas.core.drawing",
        is_package=False,
        node=node,
    )
    assert "smolcanvas.interactive" in got
    assert "smolcanvas.interactive.host" in got

    node = _parse_single_stmt("from . import surface\n")
    assert isinstance(node, ast.ImportFrom)
    got = _resolve_importfrom_targets(
        current_module="smolcanvas.core",
        is_package=True,
        node=node,
    )
    assert "smolcanvas.core.surface" in got


def test__resolve_importfrom_targets_rejects_unresolvable_relative_imports() -> None:
    node = _parse_single_stmt("from ...gl import surface\n")
    assert isinstance(node, ast.ImportFrom)
    try:
        _resolve_importfrom_targets(
            current_module="smolcanvas.core",
            is_package=True,
            node=node,
        )
    except ValueError:
        return
    raise AssertionError("解決不能な相対 import は ValueError にする")
