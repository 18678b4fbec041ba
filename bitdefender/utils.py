import hashlib
from pathlib import Path
from typing import Union


def sha256sum(file_path: Union[str, Path]) -> str:
    """Compute SHA256 hash of a file."""
    h = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def scan_id(file_path: Union[str, Path], override: str = "") -> str:
    """Document id for a scan: ``override`` (MALICE_SCANID) or the file's SHA256."""
    return override or sha256sum(file_path)
