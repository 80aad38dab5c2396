"""Service for storing and loading per-location climate normals."""
import re
from pathlib import Path
from typing import List, Optional
import numpy as np

from climate_pipelines.config import NORMALS_DIR
from climate_pipelines.models.normals import ClimateNormals

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class NormalsStore:
    """
    Store for built climate normals, keyed by a stable location key.

    Each location gets a .npz file containing:
    - common: 365 normal values (float64)
    - leap: 366 normal values (float64)
    - source: "daily" or "monthly"
    """

    def __init__(self, output_dir: Path = NORMALS_DIR):
        """Initialize the normals store."""
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def get_path(self, key: str) -> Path:
        """Get the path for a location's normals file."""
        return self.output_dir / f"{_UNSAFE_CHARS.sub('_', key)}.npz"

    def exists(self, key: str) -> bool:
        """Check if normals for a location are stored."""
        return self.get_path(key).exists()

    def save(self, key: str, normals: ClimateNormals) -> Path:
        """Write normals for a location, replacing any previous file."""
        path = self.get_path(key)
        np.savez_compressed(
            path,
            common=normals.common,
            leap=normals.leap,
            source=np.array(normals.source),
        )
        return path

    def load(self, key: str) -> Optional[ClimateNormals]:
        """
        Load normals for a location.

        Returns:
            ClimateNormals, or None if nothing is stored under the key
        """
        path = self.get_path(key)
        if not path.exists():
            return None

        with np.load(path) as data:
            return ClimateNormals(
                common=data["common"],
                leap=data["leap"],
                source=str(data["source"]),
            )

    def get_all_keys(self) -> List[str]:
        """Get the file keys of all stored locations."""
        return sorted(p.stem for p in self.output_dir.glob("*.npz"))

    def delete(self, key: str) -> bool:
        """Delete stored normals for a location."""
        path = self.get_path(key)
        if path.exists():
            path.unlink()
            return True
        return False
