"""Data module for feature records, loading and preprocessing."""

from .records import FeatureRecord
from .categories import CATEGORIES, get_category_name
from .load_dataset import (
    extract_from_file,
    extract_from_folder,
    parse_filename,
)
from .preprocessing import normalize_records

__all__ = [
    "FeatureRecord",
    "CATEGORIES",
    "get_category_name",
    "extract_from_file",
    "extract_from_folder",
    "parse_filename",
    "normalize_records",
]
