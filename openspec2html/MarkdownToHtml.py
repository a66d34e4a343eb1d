import html
import re

from .config import ConversionConfig, DEFAULT_CONFIG

# Placeholder for stashed code blocks; contains no markdown punctuation
CODE_PLACEHOLDER = '\x02CODEBLOCK{}\x03'
CODE_PLACEHOLDER_RE = re.compile(r'\x02CODEBLOCK(\d+)\x03')

BLOCK_START_RE = re.compile(r'^(?:<(?:h[1-6]|ul|ol|li|table|pre|blockquote|hr|div)\b|\x02CODEBLOCK\d+\x03)')
BLOCK_END_RE = re.compile(r'(?:</(?:h[1-6]|ul|ol|li|table|pre|blockquote|div|p)>|<hr[^>]*>|\x03)$')


class MarkdownToHtml:
    """
    Constrained markdown-to-HTML renderer.

    Applies a fixed sequence of regex transforms: code blocks, headers,
    tables, lists, inline spans, paragraphs, line breaks. Inline patterns
    are non-greedy and close on the first matching delimiter, so nested
    delimiters of the same kind are not supported (not CommonMark).
    Rendering never fails; unrecognised syntax is emitted as escaped text.
    """

    CODE_BLOCK_PATTERN = re.compile(r'```([\w+#.-]*)[ \t]*\n(.*?)```', re.DOTALL)
    HEADER_PATTERN = re.compile(r'^(#{1,6})[ \t]+(.+)$', re.MULTILINE)
    TABLE_PATTERN = re.compile(
        r'^\|(.+)\|[ \t]*\n'                 # header row
        r'\|[ \t:|]*-[-: \t|]*\|[ \t]*\n'    # separator row
        r'((?:\|.+\|[ \t]*(?:\n|$))+)',      # body rows
        re.MULTILINE,
    )
    BULLET_ITEM_PATTERN = re.compile(r'^[*-][ \t]+(.+)$')
    ORDERED_ITEM_PATTERN = re.compile(r'^\d+\.[ \t]+(.+)$')
    CHECKBOX_EMPTY_PATTERN = re.compile(r'\[[ \t]*\]')
    CHECKBOX_CHECKED_PATTERN = re.compile(r'\[[xX]\]')
    PARAGRAPH_SPLIT_PATTERN = re.compile(r'\n[ \t]*\n')

    # Order matters: later patterns must not eat earlier output
    INLINE_RULES = (
        (re.compile(r'\*\*(.+?)\*\*'), r'<strong>\1</strong>'),
        (re.compile(r'__(.+?)__'), r'<strong>\1</strong>'),
        (re.compile(r'\*(?!\*)(.+?)(?<!\*)\*'), r'<em>\1</em>'),
        (re.compile(r'(?<!\w)_(?!_)(.+?)(?<!_)_(?!\w)'), r'<em>\1</em>'),
        (re.compile(r'~~(.+?)~~'), r'<del>\1</del>'),
        (re.compile(r'`([^`]+)`'), r'<code class="openspec-inline-code">\1</code>'),
        (re.compile(r'(?<!!)\[([^\]]+)\]\(([^)]+)\)'), r'<a href="\2" class="openspec-link">\1</a>'),
        (re.compile(r'!\[([^\]]*)\]\(([^)]+)\)'), r'<img src="\2" alt="\1" class="openspec-image">'),
        (re.compile(r'^-{3,}[ \t]*$', re.MULTILINE), '<hr class="openspec-hr">'),
        (re.compile(r'^\*{3,}[ \t]*$', re.MULTILINE), '<hr class="openspec-hr">'),
        (re.compile(r'^&gt;[ \t]+(.+)$', re.MULTILINE), r'<blockquote class="openspec-quote">\1</blockquote>'),
    )

    @staticmethod
    def render(content, config=None):
        """
        Render markdown content to an HTML fragment.

        Args:
            content: Markdown body (without front matter)
            config: Optional ConversionConfig instance

        Returns:
            HTML fragment string
        """
        return MarkdownToHtml(content, config).convert()

    def __init__(self, content, config=None):
        self.content = content or ""
        self.config = config if config is not None else DEFAULT_CONFIG
        # Rendered code blocks, indexed by placeholder number
        self.code_blocks = []

    def convert(self):
        self.code_blocks = []
        # Placeholder delimiters are reserved for stashed code blocks
        content = self.content.replace('\r\n', '\n').replace('\x02', '').replace('\x03', '')

        content = self._format_code_blocks(content)
        content = html.escape(content, quote=True)
        content = self._format_headers(content)
        content = self._format_tables(content)
        content = self._format_lists(content)
        content = self._format_inline(content)
        blocks = self._format_paragraphs(content)
        content = self._format_line_breaks(blocks)

        return self._restore_code_blocks(content)

    def _format_code_blocks(self, content):
        def stash(match):
            language = match.group(1) or self.config.DEFAULT_CODE_LANGUAGE
            code = html.escape(match.group(2), quote=True)
            self.code_blocks.append(
                f'<pre class="openspec-code"><code class="language-{html.escape(language, quote=True)}">'
                f'{code}</code></pre>'
            )
            return CODE_PLACEHOLDER.format(len(self.code_blocks) - 1)

        return self.CODE_BLOCK_PATTERN.sub(stash, content)

    def _restore_code_blocks(self, content):
        return CODE_PLACEHOLDER_RE.sub(lambda m: self.code_blocks[int(m.group(1))], content)

    def _format_headers(self, content):
        def header(match):
            level = len(match.group(1))
            return f'<h{level} class="openspec-h{level}">{match.group(2).strip()}</h{level}>'

        return self.HEADER_PATTERN.sub(header, content)

    def _format_tables(self, content):
        return self.TABLE_PATTERN.sub(self._handle_table, content)

    def _handle_table(self, match):
        headers = [cell.strip() for cell in match.group(1).split('|')]

        rows = []
        for line in match.group(2).split('\n'):
            line = line.strip()
            if not line:
                continue
            rows.append([cell.strip() for cell in self._strip_pipes(line).split('|')])

        html_parts = ['<table class="openspec-table">', '<thead><tr>']
        html_parts.extend(f'<th>{cell}</th>' for cell in headers)
        html_parts.append('</tr></thead><tbody>')
        for row in rows:
            html_parts.append('<tr>')
            html_parts.extend(f'<td>{cell}</td>' for cell in row)
            html_parts.append('</tr>')
        html_parts.append('</tbody></table>')

        # Keep the line break that separated the table from what follows
        trailing = '\n' if match.group(0).endswith('\n') else ''
        return ''.join(html_parts) + trailing

    @staticmethod
    def _strip_pipes(line):
        if line.startswith('|'):
            line = line[1:]
        if line.endswith('|'):
            line = line[:-1]
        return line

    def _format_lists(self, content):
        result = []
        items = []
        list_tag = 'ul'

        def flush():
            if items:
                result.append(f'<{list_tag} class="openspec-list">' + ''.join(items) + f'</{list_tag}>')
                items.clear()

        for line in content.split('\n'):
            bullet = self.BULLET_ITEM_PATTERN.match(line)
            ordered = None if bullet else self.ORDERED_ITEM_PATTERN.match(line)
            match = bullet or ordered
            if match:
                if not items:
                    list_tag = 'ol' if ordered else 'ul'
                items.append(f'<li>{match.group(1)}</li>')
                continue
            flush()
            result.append(line)
        flush()

        content = '\n'.join(result)

        # Checkbox markers are replaced everywhere, not only inside list items
        content = self.CHECKBOX_EMPTY_PATTERN.sub('<input type="checkbox" disabled>', content)
        content = self.CHECKBOX_CHECKED_PATTERN.sub('<input type="checkbox" disabled checked>', content)
        return content

    def _format_inline(self, content):
        for pattern, replacement in self.INLINE_RULES:
            content = pattern.sub(replacement, content)
        return content

    def _format_paragraphs(self, content):
        blocks = []
        for block in self.PARAGRAPH_SPLIT_PATTERN.split(content):
            block = block.strip()
            if not block:
                continue
            if BLOCK_START_RE.match(block):
                blocks.append(block)
            else:
                blocks.append(f'<p class="openspec-paragraph">{block}</p>')
        return blocks

    def _format_line_breaks(self, blocks):
        result = []
        for block in blocks:
            lines = block.split('\n')
            for i in range(len(lines) - 1):
                if BLOCK_END_RE.search(lines[i]) or BLOCK_START_RE.match(lines[i + 1]):
                    continue
                lines[i] += '<br />'
            result.append('\n'.join(lines))
        return '\n'.join(result)


def render_markdown(content, config: ConversionConfig = None) -> str:
    """Render markdown *content* to an HTML fragment."""
    return MarkdownToHtml.render(content, config)
