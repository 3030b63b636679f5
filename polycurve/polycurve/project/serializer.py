"""Curve save/load (.pcurve) format.

Uses a zip container (.pcurve) with manifest + points.

Manifest structure (version 1):
{
    "version": 1,
    "meta": {"created_at": ISO8601, "app_version": str, "name": str},
    "curve": {...}            # Curve.to_dict()
}
``points.csv`` holds the control points (columns x, y) for use outside
polycurve; on load the manifest is authoritative. Sampled curve points are
never stored, they are recomputed from the points.
"""
from __future__ import annotations
import json
import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Tuple
from datetime import datetime, timezone
from ..core.curve import Curve

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"
FORMAT_VERSION = 1
SUFFIX = ".pcurve"


def save_curve(
    path: str | Path,
    curve: Curve,
    name: str | None = None,
) -> Path:
    path = Path(path)
    if path.suffix != SUFFIX:
        path = path.with_suffix(SUFFIX)
    manifest = {
        "version": FORMAT_VERSION,
        "meta": {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "app_version": APP_VERSION,
            "name": name or path.stem,
        },
        "curve": curve.to_dict(),
    }
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as z:
        z.writestr("manifest.json", json.dumps(manifest, indent=2))
        z.writestr("points.csv", curve.points_frame().to_csv(index=False))
    logger.debug("saved curve %r to %s", curve.name, path)
    return path


def load_curve(path: str | Path) -> Tuple[Curve, Dict[str, Any]]:
    """Load a curve and return (Curve, meta).

    The fit and the sampled curve points are recomputed on load.
    """
    path = Path(path)
    with zipfile.ZipFile(path, "r") as z:
        manifest = json.loads(z.read("manifest.json").decode())
    version = manifest.get("version")
    if version != FORMAT_VERSION:
        raise ValueError(f"unsupported curve file version: {version!r}")
    curve = Curve.from_dict(manifest["curve"])
    logger.debug("loaded curve %r from %s", curve.name, path)
    return curve, manifest.get("meta", {})


def list_curves(directory: str | Path) -> List[Path]:
    """Return list of .pcurve paths in directory (non-recursive)."""
    p = Path(directory)
    if not p.exists():
        return []
    return sorted(p.glob(f"*{SUFFIX}"))


__all__ = [
    "save_curve",
    "load_curve",
    "list_curves",
    "APP_VERSION",
    "FORMAT_VERSION",
]
