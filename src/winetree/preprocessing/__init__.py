from __future__ import annotations

from winetree.preprocessing.scaler import ScalerState, fit_scaler, transform

__all__ = ["ScalerState", "fit_scaler", "transform"]
