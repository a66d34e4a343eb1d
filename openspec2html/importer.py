"""
Bulk import of an OpenSpec directory tree.

Runs every markdown file under a root through the parser and formatter and
records what happened to each one. Re-import decisions use an in-memory
index of ``document_id -> modified_at`` owned by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import ConversionConfig, DEFAULT_CONFIG
from .document import Document, parse_document
from .exceptions import ImporterError, OpenSpecError
from .html_formatter import HtmlFormatter

logger = logging.getLogger('openspec2html')

STATUS_IMPORTED = 'imported'
STATUS_UPDATED = 'updated'
STATUS_SKIPPED = 'skipped'
STATUS_ERROR = 'error'


@dataclass
class ImportRecord:
    """Outcome of importing a single file."""

    status: str
    file_path: str
    document_id: Optional[str] = None
    reason: Optional[str] = None
    title: Optional[str] = None
    project: Optional[str] = None
    document: Optional[Document] = None
    html: Optional[str] = None


@dataclass
class ImportReport:
    """Statistics plus one record per file."""

    stats: dict
    records: list[ImportRecord] = field(default_factory=list)


def _empty_stats() -> dict:
    return {STATUS_IMPORTED: 0, STATUS_SKIPPED: 0, 'errors': 0, STATUS_UPDATED: 0}


class DocumentImporter:
    """Imports all markdown documents below *root_path*.

    Args:
        root_path: Documents root; relative paths and ids are computed from it.
        index: Optional mapping of document id to the ``modified_at`` of the
            last import. Updated in place.
        config: Optional ConversionConfig instance.
    """

    def __init__(self, root_path, index: Optional[dict[str, datetime]] = None,
                 config: ConversionConfig = None):
        self.root_path = Path(root_path)
        self.index = index if index is not None else {}
        self.config = config if config is not None else DEFAULT_CONFIG
        self.formatter = HtmlFormatter(self.config)
        self.stats = _empty_stats()

    def find_markdown_files(self) -> list[Path]:
        """Recursively list markdown files, sorted by path."""
        if not self.root_path.is_dir():
            raise ImporterError(f"OpenSpec directory not found: {self.root_path}")

        extensions = tuple(ext.lower() for ext in self.config.MARKDOWN_EXTENSIONS)
        files = [
            p for p in self.root_path.rglob('*')
            if p.is_file() and p.suffix.lower() in extensions
        ]
        return sorted(files)

    def import_all(self) -> ImportReport:
        """
        Import every markdown file under the root.

        Returns:
            ImportReport with statistics and per-file records

        Raises:
            ImporterError: If the root is missing or holds no markdown files.
        """
        files = self.find_markdown_files()
        if not files:
            raise ImporterError(f"No markdown files found in OpenSpec directory: {self.root_path}")

        self.stats = _empty_stats()
        records = [self.import_document(path) for path in files]

        logger.info(
            "Import finished: %d imported, %d updated, %d skipped, %d errors",
            self.stats[STATUS_IMPORTED], self.stats[STATUS_UPDATED],
            self.stats[STATUS_SKIPPED], self.stats['errors'],
        )
        return ImportReport(stats=dict(self.stats), records=records)

    def import_document(self, file_path) -> ImportRecord:
        try:
            document = parse_document(file_path, root_path=self.root_path, config=self.config)
        except OpenSpecError as e:
            logger.warning("Failed to parse %s: %s", file_path, e)
            self.stats['errors'] += 1
            return ImportRecord(status=STATUS_ERROR, file_path=str(file_path), reason=str(e))

        if document.is_empty:
            logger.debug("Skipping empty document %s", document.document_id)
            self.stats[STATUS_SKIPPED] += 1
            return ImportRecord(
                status=STATUS_SKIPPED,
                file_path=document.file_path,
                document_id=document.document_id,
                reason='Empty document',
            )

        previous = self.index.get(document.document_id)
        if previous is not None and document.modified_at is not None and document.modified_at <= previous:
            self.stats[STATUS_SKIPPED] += 1
            return ImportRecord(
                status=STATUS_SKIPPED,
                file_path=document.file_path,
                document_id=document.document_id,
                reason='Already up to date',
                title=document.title,
            )

        status = STATUS_UPDATED if previous is not None else STATUS_IMPORTED
        self.index[document.document_id] = document.modified_at
        self.stats[status] += 1
        logger.debug("%s %s (%s)", status.capitalize(), document.document_id, document.type)

        return ImportRecord(
            status=status,
            file_path=document.file_path,
            document_id=document.document_id,
            title=document.title,
            project=document.project,
            document=document,
            html=self.formatter.format_page(document),
        )
