"""Filesystem scanning, categorisation and import/export extraction."""

from .classifier import DEFAULT_RULES, FALLBACK_CATEGORY, FileClassifier, PrefixRule
from .extractor import extract_exports, extract_imports, is_local_spec
from .models import DirectoryStructure, FileInfo, ScanResult, ScanWarning
from .scanner import VCS_MARKERS, FileScanner

__all__ = [
    "DEFAULT_RULES",
    "FALLBACK_CATEGORY",
    "FileClassifier",
    "PrefixRule",
    "extract_exports",
    "extract_imports",
    "is_local_spec",
    "DirectoryStructure",
    "FileInfo",
    "ScanResult",
    "ScanWarning",
    "VCS_MARKERS",
    "FileScanner",
]
