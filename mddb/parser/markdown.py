"""Markdown parser for vault documents."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..errors import VaultParseError
from .types import DocumentRecord, FileInfo, FrontMatter

log = logging.getLogger(__name__)


# Regex patterns
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
LEGACY_ID_PATTERN = re.compile(r"^id = (\w+)$", re.MULTILINE)
TASK_MARKERS = {"[ ] ": False, "[x] ": True, "[X] ": True}


@dataclass
class ParsedFile:
    """A document record together with the file it came from."""

    path: Path
    record: DocumentRecord
    info: FileInfo
    content: str


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split a leading front-matter block from the body.

    Returns:
        Tuple of (raw front-matter payload or None, remaining content)
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content
    return match.group(1), content[match.end() :]


def decode_frontmatter(payload: str | None) -> FrontMatter:
    """Decode a YAML payload into the fixed metadata schema.

    Scalars are kept as their source text; ``0123`` stays ``"0123"`` and
    timestamps are not converted.

    Raises:
        ValueError: If the payload is not valid YAML or does not fit the schema.
    """
    if payload is None:
        return FrontMatter()
    try:
        data = yaml.load(payload, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid front matter: {e}") from e
    return FrontMatter.from_mapping(data)


def scrape_legacy_id(content: str) -> str | None:
    """Find an ``id = word`` line used by older root files."""
    match = LEGACY_ID_PATTERN.search(content)
    return match.group(1) if match else None


def _first_text(inline: Token) -> str | None:
    """Content of an inline token's first child if it is plain text."""
    if not inline.children:
        return None
    first = inline.children[0]
    if first.type != "text":
        return None
    return first.content


def _is_task_item(tokens: list[Token], i: int) -> bool:
    return (
        tokens[i].type == "inline"
        and i >= 2
        and tokens[i - 1].type == "paragraph_open"
        and tokens[i - 2].type == "list_item_open"
        and tokens[i].content[:4] in TASK_MARKERS
    )


class DocumentParser:
    """Turns markdown text into a DocumentRecord.

    Front matter is split off first and decoded with PyYAML; the body is
    tokenized with markdown-it and walked in document order to collect
    headings and task-list checkboxes.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._md = MarkdownIt("commonmark")

    def parse(self, path: Path) -> DocumentRecord:
        """Parse one file into its record.

        Raises:
            VaultParseError: If the file cannot be read, tokenized or decoded.
        """
        return self.parse_file(path).record

    def parse_file(self, path: Path) -> ParsedFile:
        """Parse one file, keeping its content and file info."""
        path = Path(path)
        try:
            content = path.read_text(encoding=self.encoding)
            info = FileInfo.from_content(path, content)
        except (OSError, UnicodeDecodeError) as e:
            raise VaultParseError(path, f"could not read file: {e}") from e

        record = self.parse_text(content, source=path)
        return ParsedFile(path=path, record=record, info=info, content=content)

    def parse_text(
        self, content: str, source: str | Path = "<string>"
    ) -> DocumentRecord:
        """Parse markdown text into a record.

        Only ATX (``#``) headings are recorded. Headings whose first inline
        child is not plain text are skipped, as are task items with no title
        text.
        """
        payload, body = split_frontmatter(content)
        try:
            metadata = decode_frontmatter(payload)
        except ValueError as e:
            raise VaultParseError(source, str(e)) from e

        try:
            tokens = self._md.parse(body)
        except Exception as e:
            raise VaultParseError(source, f"could not tokenize markdown: {e}") from e

        record = DocumentRecord(metadata=metadata)

        for i, token in enumerate(tokens):
            if token.type == "heading_open":
                # setext headings use = or - markup
                if not token.markup.startswith("#"):
                    continue
                title = _first_text(tokens[i + 1])
                if title is None:
                    log.debug(f"Skipping heading without leading text in {source}")
                    continue
                record.add_heading(title.strip(), int(token.tag[1]))
            elif _is_task_item(tokens, i):
                title = _first_text(token)
                if title is None or title[:4] not in TASK_MARKERS:
                    continue
                checked = TASK_MARKERS[title[:4]]
                title = title[4:].strip()
                if title:
                    record.add_checkbox(title, checked)

        return record
