"""
HTML page formatting for parsed OpenSpec documents.

Wraps the rendered markdown body with a metadata header (type badge,
relative path, front matter preview) and provides the static stylesheet
keyed to the class names the renderer emits.
"""

import html

from .config import ConversionConfig, DEFAULT_CONFIG
from .document import Document
from .frontmatter_parser import metadata_to_yaml
from .MarkdownToHtml import MarkdownToHtml


CSS = """<style>
/* openspec2html stylesheet v{version} */
.openspec-document {{
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
    max-width: 900px;
    margin: 0 auto;
    line-height: 1.6;
    color: #24292e;
}}
.openspec-metadata {{
    background: #f6f8fa;
    padding: 15px;
    border-radius: 6px;
    margin-bottom: 20px;
    border-left: 4px solid #0366d6;
}}
.openspec-type-badge {{
    display: inline-block;
    padding: 4px 12px;
    border-radius: 12px;
    color: #fff;
    font-size: 12px;
    font-weight: bold;
    text-transform: uppercase;
    margin-bottom: 10px;
}}
.openspec-path {{ margin: 5px 0; font-size: 13px; color: #586069; }}
.openspec-path code {{ background: #e1e4e8; padding: 2px 6px; border-radius: 3px; font-size: 12px; }}
.openspec-frontmatter {{ margin-top: 10px; }}
.openspec-frontmatter summary {{ cursor: pointer; font-size: 13px; color: #586069; }}
.openspec-frontmatter-yaml {{
    background: #f1f8ff;
    padding: 10px;
    border-radius: 4px;
    font-size: 12px;
    overflow-x: auto;
    margin-top: 10px;
}}
.openspec-divider {{ border: none; border-top: 1px solid #e1e4e8; margin: 20px 0; }}
.openspec-content {{ padding: 10px 0; }}
.openspec-h1 {{ font-size: 28px; border-bottom: 1px solid #e1e4e8; padding-bottom: 10px; margin: 20px 0; color: #0366d6; }}
.openspec-h2 {{ font-size: 24px; border-bottom: 1px solid #e1e4e8; padding-bottom: 8px; margin: 18px 0; }}
.openspec-h3 {{ font-size: 20px; margin: 16px 0; }}
.openspec-h4 {{ font-size: 18px; margin: 14px 0; }}
.openspec-h5, .openspec-h6 {{ font-size: 16px; margin: 12px 0; color: #586069; }}
.openspec-code {{
    background: #24292e;
    color: #f6f8fa;
    padding: 16px;
    border-radius: 6px;
    overflow-x: auto;
    margin: 10px 0;
}}
.openspec-code code {{
    background: transparent;
    padding: 0;
    font-family: "SF Mono", Consolas, "Liberation Mono", Menlo, monospace;
    font-size: 14px;
}}
.openspec-inline-code {{
    background: #f6f8fa;
    padding: 2px 6px;
    border-radius: 3px;
    font-family: "SF Mono", Consolas, monospace;
    font-size: 0.9em;
    color: #d73a49;
}}
.openspec-table {{ border-collapse: collapse; width: 100%; margin: 15px 0; }}
.openspec-table th, .openspec-table td {{ border: 1px solid #dfe2e5; padding: 8px 12px; text-align: left; }}
.openspec-table th {{ background: #f6f8fa; font-weight: bold; }}
.openspec-table tr:nth-child(even) {{ background: #f6f8fa; }}
.openspec-list {{ margin: 10px 0; padding-left: 25px; }}
.openspec-list li {{ margin: 5px 0; }}
.openspec-list input[type="checkbox"] {{ margin-right: 8px; }}
.openspec-link {{ color: #0366d6; text-decoration: none; }}
.openspec-link:hover {{ text-decoration: underline; }}
.openspec-image {{ max-width: 100%; height: auto; }}
.openspec-quote {{ border-left: 4px solid #dfe2e5; padding-left: 16px; margin: 10px 0; color: #586069; font-style: italic; }}
.openspec-hr {{ border: none; border-top: 2px solid #e1e4e8; margin: 20px 0; }}
.openspec-paragraph {{ margin: 10px 0; }}
</style>
"""


def get_css(config: ConversionConfig = None) -> str:
    """Return the fixed stylesheet for formatted documents."""
    config = config if config is not None else DEFAULT_CONFIG
    return CSS.format(version=config.CSS_VERSION)


def type_color(doc_type: str, config: ConversionConfig = None) -> str:
    """Badge colour for a document type, with a fallback for unknown types."""
    config = config if config is not None else DEFAULT_CONFIG
    return config.TYPE_COLORS.get(doc_type, config.DEFAULT_TYPE_COLOR)


class HtmlFormatter:
    """Formats a Document as an HTML fragment with a metadata header."""

    def __init__(self, config=None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def format(self, document: Document) -> str:
        parts = [f'<div class="openspec-document" data-type="{html.escape(document.type)}">']
        parts.append(self.format_metadata(document))
        parts.append('<div class="openspec-content">')
        parts.append(MarkdownToHtml.render(document.content, self.config))
        parts.append('</div>')
        parts.append('</div>')
        return ''.join(parts)

    def format_page(self, document: Document) -> str:
        """Stylesheet followed by the formatted document."""
        return get_css(self.config) + self.format(document)

    def format_metadata(self, document: Document) -> str:
        color = type_color(document.type, self.config)
        label = document.type[:1].upper() + document.type[1:]

        parts = ['<div class="openspec-metadata">']
        parts.append(f'<span class="openspec-type-badge" style="background: {html.escape(color)}">')
        parts.append(html.escape(label))
        parts.append('</span>')

        if document.relative_path:
            parts.append('<p class="openspec-path">')
            parts.append(f'<strong>Path:</strong> <code>{html.escape(document.relative_path)}</code>')
            parts.append('</p>')

        if document.frontmatter:
            parts.append('<div class="openspec-frontmatter">')
            parts.append('<details><summary>Frontmatter</summary>')
            parts.append('<pre class="openspec-frontmatter-yaml">')
            parts.append(html.escape(metadata_to_yaml(document.frontmatter)))
            parts.append('</pre></details>')
            parts.append('</div>')

        parts.append('</div><hr class="openspec-divider">')
        return ''.join(parts)
