"""Engine header index."""

from unrealls.index.extraction import extract_classes, extract_methods, is_method_name
from unrealls.index.headers import HeaderIndex, ScanReport

__all__ = [
    "HeaderIndex",
    "ScanReport",
    "extract_classes",
    "extract_methods",
    "is_method_name",
]
