"""Parsed representation of a single vault document."""

import hashlib
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

STRING_FIELDS = (
    "id",
    "title",
    "desc",
    "updated",
    "created",
    "status",
    "priority",
    "owner",
)


def _as_text(key: str, value: Any) -> str:
    """Check that a front-matter value is a scalar and return it as text."""
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple, set)):
        raise ValueError(f"field '{key}' must be a scalar, got {type(value).__name__}")
    return value if isinstance(value, str) else str(value)


@dataclass
class FrontMatter:
    """Fixed-schema metadata decoded from a document's front-matter block."""

    id: str = ""
    title: str = ""
    desc: str = ""
    updated: str = ""
    created: str = ""
    tags: list[str] = field(default_factory=list)
    status: str = ""
    priority: str = ""
    owner: str = ""

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "FrontMatter":
        """Build metadata from a decoded mapping.

        Unknown keys are ignored and missing keys take their defaults.
        Timestamps and numbers are kept as opaque strings.

        Raises:
            ValueError: If the block is not a mapping or a field has the
                wrong shape.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"front matter must be a mapping, got {type(data).__name__}"
            )

        values: dict[str, Any] = {
            key: _as_text(key, data[key]) for key in STRING_FIELDS if key in data
        }

        tags = data.get("tags")
        if tags is None:
            values["tags"] = []
        elif isinstance(tags, str):
            values["tags"] = [tags]
        elif isinstance(tags, list):
            values["tags"] = [_as_text("tags", tag) for tag in tags]
        else:
            raise ValueError(f"field 'tags' must be a list, got {type(tags).__name__}")

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class Heading:
    """A section heading in document order."""

    title: str
    level: int

    def render(self) -> str:
        """Render the heading back to an ATX markdown line."""
        return f"{'#' * self.level} {self.title}"


@dataclass
class Checkbox:
    """A task-list item and its state."""

    title: str = ""
    checked: bool = False

    def check(self) -> None:
        self.checked = True

    def uncheck(self) -> None:
        self.checked = False

    def set_title(self, title: str) -> None:
        self.title = title


@dataclass
class DocumentRecord:
    """Everything extracted from one markdown file."""

    metadata: FrontMatter = field(default_factory=FrontMatter)
    headings: list[Heading] = field(default_factory=list)
    checkboxes: list[Checkbox] = field(default_factory=list)

    def add_heading(self, title: str, level: int) -> None:
        self.headings.append(Heading(title=title, level=level))

    def add_checkbox(self, title: str, checked: bool = False) -> None:
        self.checkboxes.append(Checkbox(title=title, checked=checked))

    def tasks(self, checked: bool | None = None) -> list[Checkbox]:
        """Return checkboxes, optionally filtered by state."""
        if checked is None:
            return list(self.checkboxes)
        return [cb for cb in self.checkboxes if cb.checked is checked]

    @property
    def declared_id(self) -> str:
        return self.metadata.id


@dataclass
class FileInfo:
    """Filesystem facts about a document, kept beside its record."""

    path: Path
    checksum: str
    modified_at: datetime

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def hierarchy(self) -> list[str]:
        """Dendron-style hierarchy levels encoded in the file name."""
        return [part for part in self.stem.split(".") if part]

    @property
    def domain(self) -> str:
        """Top level of the hierarchy."""
        levels = self.hierarchy
        return levels[0] if levels else ""

    @classmethod
    def from_content(cls, path: Path, content: str) -> "FileInfo":
        stat = path.stat()
        return cls(
            path=path,
            checksum=hashlib.sha256(content.encode("utf-8")).hexdigest(),
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
