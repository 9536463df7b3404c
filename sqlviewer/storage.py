"""
File layout for uploaded and converted databases.
"""

import time
from pathlib import Path
from typing import List


class Storage:
    """Handles the uploads directory that holds every non-default database."""

    def __init__(self, uploads_dir: str = "uploads"):
        self.uploads_dir = Path(uploads_dir)
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def timestamp() -> int:
        """Millisecond creation stamp used to keep upload names apart."""
        return int(time.time() * 1000)

    def upload_path(self, filename: str) -> Path:
        """Location for a raw database upload: ``<name>-<timestamp>``."""
        name = Path(filename).name
        return self.uploads_dir / f"{name}-{self.timestamp()}"

    def converted_path(self, filename: str) -> Path:
        """Location for a converted dump: ``<stem>.sqlite-<timestamp>.sqlite``."""
        return self.uploads_dir / f"{self.converted_name(filename)}-{self.timestamp()}.sqlite"

    @staticmethod
    def converted_name(filename: str) -> str:
        """Display name of a converted dump, e.g. ``Seed.SQL`` -> ``seed.sqlite``."""
        name = Path(filename).name.lower()
        if name.endswith(".sql"):
            name = name[: -len(".sql")] + ".sqlite"
        return name

    def save_bytes(self, filename: str, data: bytes) -> Path:
        """Write an uploaded database file unmodified."""
        path = self.upload_path(filename)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def contains(self, path: str) -> bool:
        """Check if ``path`` resolves to somewhere inside the uploads directory."""
        root = self.uploads_dir.resolve()
        target = Path(path).resolve()
        return target != root and target.is_relative_to(root)

    def list_files(self) -> List[Path]:
        """All stored database files, sorted by name, hidden files skipped."""
        return sorted(
            (p for p in self.uploads_dir.iterdir() if p.is_file() and not p.name.startswith(".")),
            key=lambda p: p.name,
        )
