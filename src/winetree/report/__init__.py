from __future__ import annotations

from winetree.report.tikz import export_to_tikz, write_report

__all__ = ["export_to_tikz", "write_report"]
