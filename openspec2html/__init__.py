"""
openspec2html - Convert OpenSpec markdown documents to HTML

This package parses markdown files with YAML-like front matter into
structured documents and renders them to HTML with a constrained
markdown transformer.
"""

__version__ = "0.1.0"

from .document import (
    Document,
    DOCUMENT_TYPES,
    parse_document,
    parse_document_string,
    classify_document,
    resolve_title,
    get_relative_path,
    generate_document_id,
)
from .MarkdownToHtml import MarkdownToHtml, render_markdown
from .html_formatter import HtmlFormatter, get_css, type_color
from .frontmatter_parser import (
    decode_yaml_subset,
    parse_markdown_string_with_frontmatter,
    metadata_to_yaml,
)
from .importer import DocumentImporter, ImportRecord, ImportReport
from .config import ConversionConfig, DEFAULT_CONFIG
from .exceptions import (
    OpenSpecError,
    DocumentNotFoundError,
    DocumentReadError,
    ImporterError,
    ConversionError,
)
from .converter_api import convert_string, convert_file

__all__ = [
    "Document",
    "DOCUMENT_TYPES",
    "parse_document",
    "parse_document_string",
    "classify_document",
    "resolve_title",
    "get_relative_path",
    "generate_document_id",
    "MarkdownToHtml",
    "render_markdown",
    "HtmlFormatter",
    "get_css",
    "type_color",
    "decode_yaml_subset",
    "parse_markdown_string_with_frontmatter",
    "metadata_to_yaml",
    "DocumentImporter",
    "ImportRecord",
    "ImportReport",
    "ConversionConfig",
    "DEFAULT_CONFIG",
    "OpenSpecError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "ImporterError",
    "ConversionError",
    "convert_string",
    "convert_file",
]
