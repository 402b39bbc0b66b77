"""Markdown parsing and vault file scanning."""

from .markdown import DocumentParser, ParsedFile
from .scanner import FileScanner, build_pattern, resolve_base
from .types import Checkbox, DocumentRecord, FileInfo, FrontMatter, Heading

__all__ = [
    "DocumentParser",
    "ParsedFile",
    "FileScanner",
    "build_pattern",
    "resolve_base",
    "Checkbox",
    "DocumentRecord",
    "FileInfo",
    "FrontMatter",
    "Heading",
]
