"""
OpenSpec document model and parser.

Turns a markdown file into a :class:`Document`: front matter, derived type,
display title, stable id and trimmed body.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Optional

from .config import ConversionConfig, DEFAULT_CONFIG
from .exceptions import DocumentNotFoundError, DocumentReadError
from .frontmatter_parser import parse_markdown_string_with_frontmatter

logger = logging.getLogger('openspec2html')

DOCUMENT_TYPES = (
    'requirements',
    'design',
    'tasks',
    'proposal',
    'spec',
    'research',
    'change',
    'archived',
    'document',
)

H1_RE = re.compile(r'^#[ \t]+(.+)$', re.MULTILINE)
H2_RE = re.compile(r'^##[ \t]+(.+)$', re.MULTILINE)
ID_UNSAFE_RE = re.compile(r'[^a-z0-9_-]+')
DASHES_RE = re.compile(r'-+')
KEY_UNSAFE_RE = re.compile(r'[^a-z0-9_-]')
PROJECT_RE = re.compile(r'^(?:changes|specs)/([^/]+)')


@dataclass(frozen=True)
class Document:
    """A parsed OpenSpec markdown document.

    ``content`` is the trimmed body; an empty string means there is nothing
    to render. ``document_id`` depends only on ``relative_path``.
    """

    document_id: str
    file_path: str
    relative_path: str
    type: str
    title: str
    frontmatter: dict = field(default_factory=dict)
    content: str = ""
    raw_content: str = ""
    modified_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.content == ""

    @property
    def project(self) -> Optional[str]:
        return extract_project_from_path(self.relative_path)

    def to_dict(self) -> dict:
        """JSON-serialisable view of the document."""
        return {
            'document_id': self.document_id,
            'file_path': self.file_path,
            'relative_path': self.relative_path,
            'type': self.type,
            'title': self.title,
            'frontmatter': self.frontmatter,
            'content': self.content,
            'raw_content': self.raw_content,
            'modified_at': self.modified_at.isoformat() if self.modified_at else None,
        }


def sanitize_key(value) -> str:
    """Lowercase *value* and drop everything outside ``[a-z0-9_-]``."""
    return KEY_UNSAFE_RE.sub('', str(value).lower())


def _strip_extension(path: str, config: ConversionConfig) -> str:
    lowered = path.lower()
    for ext in config.MARKDOWN_EXTENSIONS:
        if lowered.endswith(ext):
            return path[:-len(ext)]
    return path


def get_relative_path(file_path, root_path=None, config: ConversionConfig = None) -> str:
    """
    Compute the document path relative to the documents root.

    The markdown extension is removed. When *root_path* is given and contains
    the file, the path below it is used; otherwise everything up to and
    including the first ``ROOT_MARKER`` segment is dropped.

    Args:
        file_path: Path of the markdown file
        root_path: Optional explicit documents root
        config: Optional ConversionConfig

    Returns:
        Relative path using ``/`` separators, without extension
    """
    config = config if config is not None else DEFAULT_CONFIG
    path = _strip_extension(Path(file_path).as_posix(), config)

    if root_path is not None:
        root = Path(root_path).as_posix().rstrip('/') + '/'
        if path.startswith(root):
            return path[len(root):]

    marker = config.ROOT_MARKER
    position = path.find(marker)
    if position != -1:
        path = path[position + len(marker):]

    return path


def generate_document_id(relative_path: str) -> str:
    """Slug of *relative_path*: ``specs/auth/design`` -> ``specs-auth-design``."""
    doc_id = ID_UNSAFE_RE.sub('-', relative_path.lower())
    doc_id = DASHES_RE.sub('-', doc_id)
    return doc_id.strip('-')


def extract_project_from_path(relative_path: str) -> Optional[str]:
    """Project name from ``changes/<project>/...`` or ``specs/<project>/...``."""
    match = PROJECT_RE.match(relative_path)
    if match:
        return sanitize_key(match.group(1)) or None
    return None


def classify_document(frontmatter: dict, file_path, config: ConversionConfig = None) -> str:
    """
    Determine the document type from front matter, filename or path.

    Args:
        frontmatter: Parsed front matter
        file_path: Path of the markdown file
        config: Optional ConversionConfig

    Returns:
        Document type key; ``'document'`` when nothing matches
    """
    config = config if config is not None else DEFAULT_CONFIG

    phase = frontmatter.get('phase')
    if phase and not isinstance(phase, (list, dict)):
        phase = sanitize_key(phase)
        if phase:
            return phase

    if frontmatter.get('spec'):
        return 'spec'

    posix_path = Path(file_path).as_posix()

    filename = PurePosixPath(posix_path).name.lower()
    for keyword in config.FILENAME_TYPE_KEYWORDS:
        if keyword in filename:
            return keyword

    path = posix_path.lower()
    for segment, doc_type in config.PATH_TYPE_SEGMENTS:
        if segment in path:
            return doc_type

    return config.DEFAULT_DOCUMENT_TYPE


def _title_from_filename(file_path, config: ConversionConfig) -> str:
    stem = _strip_extension(PurePosixPath(Path(file_path).as_posix()).name, config)
    words = stem.replace('-', ' ').replace('_', ' ').split(' ')
    title = ' '.join(word[:1].upper() + word[1:] for word in words).strip()
    return title or stem or config.DEFAULT_TITLE


def resolve_title(frontmatter: dict, content: str, file_path, config: ConversionConfig = None) -> str:
    """
    Extract the title from front matter, first heading, or filename.

    Args:
        frontmatter: Parsed front matter
        content: Markdown body
        file_path: Path of the markdown file
        config: Optional ConversionConfig

    Returns:
        Non-empty title
    """
    config = config if config is not None else DEFAULT_CONFIG

    for key in ('title', 'name'):
        value = frontmatter.get(key)
        if value and not isinstance(value, (list, dict)):
            title = str(value).strip()
            if title:
                return title

    for pattern in (H1_RE, H2_RE):
        match = pattern.search(content)
        if match:
            return match.group(1).strip()

    return _title_from_filename(file_path, config)


def parse_document_string(raw_content: str, file_path, root_path=None,
                          modified_at: Optional[datetime] = None,
                          config: ConversionConfig = None) -> Document:
    """
    Build a Document from in-memory markdown text.

    Args:
        raw_content: Full markdown text including front matter
        file_path: Path the text belongs to (used for id, type and title)
        root_path: Optional explicit documents root
        modified_at: Source modification time, if known
        config: Optional ConversionConfig

    Returns:
        Document
    """
    config = config if config is not None else DEFAULT_CONFIG

    metadata, content = parse_markdown_string_with_frontmatter(raw_content)
    relative_path = get_relative_path(file_path, root_path, config)

    document = Document(
        document_id=generate_document_id(relative_path),
        file_path=str(file_path),
        relative_path=relative_path,
        type=classify_document(metadata, file_path, config),
        title=resolve_title(metadata, content, file_path, config),
        frontmatter=metadata,
        content=content,
        raw_content=raw_content,
        modified_at=modified_at,
    )
    logger.debug("Parsed %s: id=%s, type=%s", file_path, document.document_id, document.type)
    return document


def parse_document(file_path, root_path=None, config: ConversionConfig = None) -> Document:
    """
    Parse a markdown file into a Document.

    Args:
        file_path: Path to the markdown file
        root_path: Optional explicit documents root
        config: Optional ConversionConfig

    Returns:
        Document

    Raises:
        DocumentNotFoundError: If *file_path* does not exist.
        DocumentReadError: If the file cannot be read.
    """
    config = config if config is not None else DEFAULT_CONFIG
    path = Path(file_path)

    if not os.path.exists(path):
        raise DocumentNotFoundError(f"Markdown file not found: {file_path}")

    try:
        raw_content = path.read_bytes().decode(config.FILE_ENCODING, errors='replace')
        mtime = path.stat().st_mtime
    except OSError as e:
        raise DocumentReadError(f"Failed to read markdown file {file_path}: {e}") from e

    modified_at = datetime.fromtimestamp(mtime, tz=timezone.utc)
    return parse_document_string(raw_content, file_path, root_path, modified_at, config)
