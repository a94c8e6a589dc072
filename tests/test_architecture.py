"""
アーキテクチャテスト

目的:
- 数値レイヤ（外側→内側のみ許可、同層は許可）
- 個別禁止エッジ（シミュレーション層を GUI/ランナーから切り離す契約）

レイヤ:
- L0: common / util / engine.core
- L1: engine.spacetime / worldlines（ドメイン）
- L2: engine.render / engine.ui / engine.io（pyglet 側）
- L3: api（ランナー）
"""

from __future__ import annotations

import ast
import pathlib
from typing import Dict, Iterator, List, Optional, Set, Tuple

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"

LAYER_MAP = {
    ("common",): 0,
    ("util",): 0,
    ("engine", "core"): 0,
    ("engine", "spacetime"): 1,
    ("worldlines",): 1,
    ("engine", "render"): 2,
    ("engine", "ui"): 2,
    ("engine", "io"): 2,
    ("api",): 3,
}

CHECK_ROOTS = {"api", "engine", "worldlines", "common", "util"}
# ヘッドレスで動くべき層（GUI ライブラリの import を禁止）
HEADLESS = {("engine", "spacetime"), ("worldlines",), ("common",), ("util",)}
GUI_LIBS = {"pyglet"}


def iter_py_files(root: pathlib.Path) -> Iterator[pathlib.Path]:
    for p in root.rglob("*.py"):
        if "__pycache__" in p.parts:
            continue
        yield p


def module_name_from_path(path: pathlib.Path) -> str:
    rel = path.relative_to(SRC_DIR).with_suffix("")
    return ".".join(rel.parts)


def split_head(module: str) -> tuple[str, Optional[str]]:
    parts = module.split(".") if module else []
    if not parts:
        return "", None
    return parts[0], parts[1] if len(parts) > 1 else None


def section_of(module: str) -> Optional[tuple[str, ...]]:
    head, second = split_head(module)
    if not head:
        return None
    return (head, second) if head == "engine" and second else (head,)


def layer_of(module: str) -> Optional[int]:
    key = section_of(module)
    return None if key is None else LAYER_MAP.get(key)


def iter_import_edges(py_path: pathlib.Path) -> Iterator[Tuple[str, str]]:
    src_mod = module_name_from_path(py_path)
    tree = ast.parse(py_path.read_text(encoding="utf-8"), filename=str(py_path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield src_mod, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level > 0:  # 相対 import
                src_parts = src_mod.split(".")
                base = ".".join(src_parts[: -node.level])
                mod = node.module or ""
                yield src_mod, f"{base}.{mod}" if mod else base
            else:
                yield src_mod, node.module or ""


def is_forbidden_edge(src: str, tgt: str) -> bool:
    s_head, s_second = split_head(src)
    t_head, t_second = split_head(tgt)
    # 1) engine -> api / worldlines を禁止（kind 文字列の解決はランナーの責務）
    if s_head == "engine" and t_head in {"api", "worldlines"}:
        return True
    # 2) ヘッドレス層 -> GUI ライブラリを禁止
    if section_of(src) in HEADLESS and t_head in GUI_LIBS:
        return True
    # 3) engine.spacetime -> engine.{render,ui,io} を禁止
    if (s_head, s_second) == ("engine", "spacetime") and t_head == "engine":
        if t_second in {"render", "ui", "io"}:
            return True
    return False


def collect_graph_and_violations() -> tuple[Dict[str, Set[str]], list[str], list[str]]:
    layering: list[str] = []
    forbidden: list[str] = []
    graph: Dict[str, Set[str]] = {}

    py_files: List[pathlib.Path] = list(iter_py_files(SRC_DIR))
    for py in py_files:
        graph.setdefault(module_name_from_path(py), set())

    for py in py_files:
        for src, tgt in iter_import_edges(py):
            if is_forbidden_edge(src, tgt):
                forbidden.append(f"[{py}] {src} -> {tgt}")
            if split_head(src)[0] not in CHECK_ROOTS or split_head(tgt)[0] not in CHECK_ROOTS:
                continue
            s_layer = layer_of(src)
            t_layer = layer_of(tgt)
            if s_layer is not None and t_layer is not None and s_layer < t_layer:
                layering.append(f"[{py}] {src} (L{s_layer}) -> {tgt} (L{t_layer})")
            if src in graph and tgt in graph:
                graph[src].add(tgt)

    return graph, layering, forbidden


def find_cycles(graph: Dict[str, Set[str]]) -> List[List[str]]:
    cycles: List[List[str]] = []
    WHITE, GRAY, BLACK = 0, 1, 2
    color: Dict[str, int] = {u: WHITE for u in graph}
    stack: List[str] = []

    def dfs(u: str) -> None:
        color[u] = GRAY
        stack.append(u)
        for v in graph.get(u, ()):
            if color[v] == WHITE:
                dfs(v)
            elif color[v] == GRAY:
                cycle = stack[stack.index(v) :] + [v]
                base = min(range(len(cycle) - 1), key=lambda i: cycle[i])
                norm = cycle[base:-1] + cycle[:base] + [cycle[base]]
                if norm not in cycles:
                    cycles.append(norm)
        stack.pop()
        color[u] = BLACK

    for node in list(graph):
        if color[node] == WHITE:
            dfs(node)
    return cycles


@pytest.mark.smoke
def test_architecture_import_rules():
    graph, layering, forbidden = collect_graph_and_violations()
    cycles = find_cycles(graph)
    msgs: list[str] = []
    if layering:
        msgs.append("Layer violations:\n" + "\n".join(layering))
    if forbidden:
        msgs.append("Forbidden-edge violations:\n" + "\n".join(forbidden))
    if cycles:
        rendered = [" -> ".join(c) for c in cycles[:10]]
        suffix = "\n(and more ...)" if len(cycles) > 10 else ""
        msgs.append("Import cycles detected (module-level):\n" + "\n".join(rendered) + suffix)
    if msgs:
        raise AssertionError("\n\n".join(msgs))
