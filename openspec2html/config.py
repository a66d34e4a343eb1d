"""
Configuration constants for openspec2html.

This module centralizes the fixed values used by the document pipeline:
root-path conventions, markdown extensions, renderer defaults and the
presentation colours for each document type. Values can be overridden by
subclassing ConversionConfig and passing an instance as ``config``.
"""


class ConversionConfig:
    """Default configuration values for document parsing and rendering."""

    # === Source Layout ===
    ROOT_MARKER = '/openspec/'  # Path segment treated as the documents root
    MARKDOWN_EXTENSIONS = ('.md', '.markdown')
    FILE_ENCODING = 'utf-8'

    # === Document Defaults ===
    DEFAULT_DOCUMENT_TYPE = 'document'
    DEFAULT_TITLE = 'Untitled'

    # Filename keywords, checked in this order
    FILENAME_TYPE_KEYWORDS = ('requirements', 'design', 'tasks', 'proposal', 'spec', 'research')

    # Directory segments (lowercased path), checked in this order
    PATH_TYPE_SEGMENTS = (
        ('/specs/', 'spec'),
        ('/changes/', 'change'),
        ('/proposals/', 'proposal'),
        ('/archive/', 'archived'),
    )

    # === Renderer ===
    DEFAULT_CODE_LANGUAGE = 'plaintext'

    # === Presentation ===
    TYPE_COLORS = {
        'requirements': '#2196f3',
        'design': '#4caf50',
        'tasks': '#ff9800',
        'proposal': '#9c27b0',
        'spec': '#00bcd4',
        'research': '#795548',
        'change': '#f44336',
        'archived': '#9e9e9e',
        'document': '#607d8b',
    }
    DEFAULT_TYPE_COLOR = '#607d8b'
    CSS_VERSION = '1.0.0'

    # === Security Limits ===
    MAX_INPUT_FILE_SIZE = 50 * 1024 * 1024  # 50 MB max input file


# Global default config instance
DEFAULT_CONFIG = ConversionConfig()
