"""
High-level convenience API for openspec2html.

Provides simple functions to convert OpenSpec markdown strings or files to
HTML without wiring the parser and formatter together by hand.
"""

import logging
import os

from .config import DEFAULT_CONFIG
from .document import parse_document, parse_document_string
from .exceptions import ConversionError
from .html_formatter import HtmlFormatter

logger = logging.getLogger('openspec2html')


def convert_string(markdown_string, file_path="document.md", root_path=None, config=None, include_css=False):
    """Convert a markdown string to a formatted HTML document fragment.

    Args:
        markdown_string: Markdown text (may include front matter)
        file_path: Path the text is attributed to; drives id, type and title
        root_path: Optional documents root for the relative path
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.
        include_css: Prefix the result with the stylesheet

    Returns:
        HTML string
    """
    config = config if config is not None else DEFAULT_CONFIG
    document = parse_document_string(markdown_string, file_path, root_path=root_path, config=config)

    formatter = HtmlFormatter(config)
    if include_css:
        return formatter.format_page(document)
    return formatter.format(document)


def convert_file(input_path, output_path=None, root_path=None, config=None):
    """Convert a markdown file to a full HTML page (stylesheet + document).

    Args:
        input_path: Markdown file path
        output_path: Optional output .html path; nothing is written if None
        root_path: Optional documents root for the relative path
        config: Optional ConversionConfig instance. Uses DEFAULT_CONFIG if None.

    Returns:
        HTML string

    Raises:
        DocumentNotFoundError: If the input file does not exist.
        DocumentReadError: If the input file cannot be read.
        ConversionError: If the output file cannot be written.
    """
    config = config if config is not None else DEFAULT_CONFIG
    document = parse_document(input_path, root_path=root_path, config=config)
    page = HtmlFormatter(config).format_page(document)

    if output_path is not None:
        write_output(output_path, page)
        logger.info("Wrote %s", output_path)

    return page


def write_output(output_path, text):
    """Write *text* to *output_path*, creating parent directories."""
    output_dir = os.path.dirname(output_path)
    try:
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ConversionError(f"Failed to write {output_path}: {e}") from e
