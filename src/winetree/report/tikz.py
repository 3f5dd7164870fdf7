"""TikZ/forest description of a fitted tree, meant for ``latex``/``pdflatex``."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path

from winetree.common.logging import get_logger
from winetree.models.tree import TrainedTree, TreeNode

log = get_logger(__name__)

PREAMBLE = r"""\documentclass[margin=10pt]{standalone}
\usepackage{tikz,forest}
\usetikzlibrary{arrows.meta}
\forestset{
  default preamble={
    where n children=0{tier=word}{},
    where level=0{}{
      if n=1{edge label={node[pos=.2, above] {Y}}}{edge label={node[pos=.2, above] {N}}}
    },
    for tree={
      edge+={thick, -Latex},
      s sep'+=2cm,
      draw,
      thick,
      edge path'={(!u) -| (.parent)},
      align=center,
    }
  }
}
"""

_LATEX_SPECIAL = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def latex_escape(text: str) -> str:
    return "".join(_LATEX_SPECIAL.get(ch, ch) for ch in str(text))


def _node_label(node: TreeNode) -> str:
    if node.is_leaf:
        return (
            f"Label: {node.label}\\\\ Imp. ${node.impurity:.2f}$"
            f"\\\\ Samples: {node.n_samples}"
        )
    return f"$x_{{{node.feature}}} \\leq {node.threshold:.2f}$\\\\ Imp. ${node.impurity:.2f}$"


def _render(nodes: list[TreeNode], node_id: int, depth: int, out: list[str]) -> None:
    node = nodes[node_id]
    pad = "  " * depth
    if node.is_leaf:
        out.append(f"{pad}[{{{_node_label(node)}}}]")
        return
    out.append(f"{pad}[{{{_node_label(node)}}}")
    _render(nodes, node.left, depth + 1, out)
    _render(nodes, node.right, depth + 1, out)
    out.append(f"{pad}]")


def _legend(features: list[int], feature_names: Sequence[str] | None) -> str:
    rows = []
    for i in features:
        name = f"feature {i}"
        if feature_names is not None and i < len(feature_names):
            name = feature_names[i]
        rows.append(f"$x_{{{i}}}$ & {latex_escape(name)} \\\\")
    body = "\n".join(rows) if rows else r"\multicolumn{2}{l}{(no splits)} \\"
    return (
        "\\node [anchor=north west, align=left] at (current bounding box.north east) {\n"
        "\\begin{tabular}{ll}\n"
        "\\textbf{Feature} & \\textbf{Name} \\\\\n"
        f"{body}\n"
        "\\end{tabular}\n"
        "};"
    )


def export_to_tikz(
    model: TrainedTree,
    feature_names: Sequence[str] | None = None,
    *,
    with_legend: bool = True,
) -> str:
    nodes = model.nodes()
    if not nodes:
        raise ValueError("model has no nodes")

    out = [PREAMBLE, "\\begin{document}", "\\begin{forest}"]
    _render(nodes, 0, 0, out)
    if with_legend:
        out.append(_legend(model.features(), feature_names))
    out += ["\\end{forest}", "\\end{document}", ""]
    return "\n".join(out)


def _target_mode(dst: Path) -> int:
    # mkstemp creates 0600 files; match an existing target or the umask default
    try:
        return stat.S_IMODE(dst.stat().st_mode)
    except FileNotFoundError:
        mask = os.umask(0)
        os.umask(mask)
        return 0o666 & ~mask


def write_report(path: str | Path, text: str) -> Path:
    """Write ``text`` to ``path`` atomically, replacing any existing file."""
    dst = Path(path)
    fd, tmp = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".tmp", dir=str(dst.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp, _target_mode(dst))
        os.replace(tmp, dst)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    log.info("wrote tree report: %s (%d bytes)", dst, len(text.encode("utf-8")))
    return dst
