"""Load shape signatures from disk.

Each signature file holds one value per line. Metadata comes from the
filename, e.g. ``s07n003.art``: label ``"07"`` (characters 1-2), sample
``"03"`` (characters 5-6), and the descriptor method found anywhere in
the name (case-insensitive).
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from .records import FeatureRecord


logger = logging.getLogger(__name__)

METHODS = ("ART", "ZRK", "E34", "GFD", "YNG")
UNKNOWN = "Unknown"

PathLike = Union[str, Path]


def parse_filename(filename: str, methods: Tuple[str, ...] = METHODS) -> Tuple[str, str, str]:
    """Extract ``(method, label, sample)`` from a signature filename.

    Fields that cannot be identified are ``"Unknown"``.
    """
    method = UNKNOWN
    for candidate in methods:
        if candidate.lower() in filename.lower():
            method = candidate
            break
    if method == UNKNOWN:
        logger.warning("Method not identified in filename: %s", filename)

    if filename.startswith("s"):
        label = filename[1:3]
        sample = filename[5:7]
    else:
        logger.warning("Label and sample not identified in filename: %s", filename)
        label = UNKNOWN
        sample = UNKNOWN

    return method, label, sample


def extract_from_file(path: PathLike, methods: Tuple[str, ...] = METHODS) -> FeatureRecord:
    """Read one signature file into a FeatureRecord.

    Lines that are not numbers are skipped with a warning.

    Args:
        path: Signature file.
        methods: Method identifiers to look for in the filename.

    Returns:
        The record, labeled from the filename.
    """
    path = Path(path)
    values: List[float] = []
    with open(path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                values.append(float(text))
            except ValueError:
                logger.warning("Couldn't convert '%s' to float in %s (line %d)", text, path, line_no)

    method, label, sample = parse_filename(path.name, methods)
    logger.debug("Extracted %d values from %s (method=%s, label=%s, sample=%s)",
                 len(values), path, method, label, sample)
    return FeatureRecord(values=tuple(values), label=label, method=method, sample=sample)


def extract_from_folder(folder: PathLike, methods: Tuple[str, ...] = METHODS) -> List[FeatureRecord]:
    """Read every regular file of a folder, in filename order.

    Args:
        folder: Directory of signature files.
        methods: Method identifiers to look for in filenames.

    Returns:
        One record per file.

    Raises:
        FileNotFoundError: If the folder doesn't exist.
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Signature folder not found: {folder}")

    logger.info("Starting extraction from folder: %s", folder)
    records = [
        extract_from_file(p, methods)
        for p in sorted(folder.iterdir())
        if p.is_file()
    ]
    logger.info("Finished extraction from folder: %s. Total files processed: %d", folder, len(records))
    return records
