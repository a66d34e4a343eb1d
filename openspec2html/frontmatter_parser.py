"""
Front matter handling using python-frontmatter.

OpenSpec documents carry a small YAML-like metadata block. Instead of the
full YAML loader, python-frontmatter is given a handler backed by a
line-oriented decoder that understands ``key: value`` pairs, one level of
``- item`` lists and inline ``[a, b]`` lists, and never fails.
"""

import re

import frontmatter
from frontmatter.default_handlers import BaseHandler


FRONTMATTER_RE = re.compile(
    r'\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n(.*))?\Z',
    re.DOTALL,
)
LIST_ITEM_RE = re.compile(r'^(\s*)-\s+(.+)$')
KEY_VALUE_RE = re.compile(r'^([^:]+):\s*(.*)$')
INLINE_LIST_RE = re.compile(r'^\[(.*)\]$')
NUMBER_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')


def parse_yaml_value(value: str):
    """
    Parse a scalar (or inline list) value.

    Args:
        value: Raw value text from the right-hand side of ``key:``

    Returns:
        bool, None, int, float, list or str
    """
    value = value.strip()

    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        value = value[1:-1]

    lowered = value.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    if lowered in ('null', '~'):
        return None

    if NUMBER_RE.match(value):
        if '.' in value:
            return float(value)
        try:
            return int(value)
        except ValueError:
            # Exponent notation without a decimal point, e.g. 1e3
            number = float(value)
            return int(number) if number.is_integer() else number

    match = INLINE_LIST_RE.match(value)
    if match:
        inner = match.group(1)
        if not inner.strip():
            return []
        return [parse_yaml_value(item.strip()) for item in inner.split(',')]

    return value


def decode_yaml_subset(text: str) -> dict:
    """
    Decode a block of ``key: value`` / ``- item`` lines into a dict.

    Single pass. A key with no inline value opens a list that subsequent
    ``- item`` lines append to; any other key/value line closes it. List
    items with no open key and lines matching neither form are dropped.

    Args:
        text: Front matter text without the ``---`` fences

    Returns:
        Decoded metadata dict (possibly empty)
    """
    data = {}
    current_key = None

    for line in text.split('\n'):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue

        match = LIST_ITEM_RE.match(line)
        if match:
            if current_key is not None and isinstance(data.get(current_key), list):
                data[current_key].append(parse_yaml_value(match.group(2)))
            continue

        match = KEY_VALUE_RE.match(line)
        if match:
            key = match.group(1).strip()
            value = match.group(2).strip()
            if value == '':
                data[key] = []
                current_key = key
            else:
                data[key] = parse_yaml_value(value)
                current_key = None

    return data


def metadata_to_yaml(metadata: dict, indent: int = 0) -> str:
    """
    Convert front matter metadata back to YAML-like text for display.

    Input:  {"title": "Doc", "tags": ["a", "b"], "owner": {"team": "core"}}
    Output: 'title: Doc\\ntags:\\n  - a\\n  - b\\nowner:\\n  team: core\\n'

    Args:
        metadata: Dictionary of metadata from front matter
        indent: Nesting level (two spaces per level)

    Returns:
        YAML-like string, one line per scalar
    """
    lines = []
    prefix = '  ' * indent

    for key, value in metadata.items():
        if isinstance(value, dict):
            if not value:
                lines.append(f"{prefix}{key}: {{}}\n")
            else:
                lines.append(f"{prefix}{key}:\n")
                lines.append(metadata_to_yaml(value, indent + 1))
        elif isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{prefix}{key}: []\n")
                continue
            lines.append(f"{prefix}{key}:\n")
            for item in value:
                if isinstance(item, dict):
                    lines.append(f"{prefix}  -\n")
                    lines.append(metadata_to_yaml(item, indent + 2))
                else:
                    lines.append(f"{prefix}  - {format_yaml_value(item)}\n")
        else:
            lines.append(f"{prefix}{key}: {format_yaml_value(value)}\n")

    return ''.join(lines)


def format_yaml_value(value) -> str:
    """Format a scalar for YAML output."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if value == '':
        return '""'
    if isinstance(value, str) and ('\n' in value or ':' in value):
        return '"' + value.replace('"', '\\"') + '"'
    if isinstance(value, (list, tuple)):
        return '[' + ', '.join(format_yaml_value(v) for v in value) + ']'
    return str(value)


class SubsetYAMLHandler(BaseHandler):
    """python-frontmatter handler for the line-oriented YAML subset."""

    FM_BOUNDARY = re.compile(r'^---[ \t]*$', re.MULTILINE)
    START_DELIMITER = END_DELIMITER = '---'

    def split(self, text):
        match = FRONTMATTER_RE.match(text)
        if match is None:
            raise ValueError("No front matter block found")
        return match.group(1) or '', (match.group(2) or '').strip()

    def load(self, fm, **kwargs):
        return decode_yaml_subset(fm)

    def export(self, metadata, **kwargs):
        return metadata_to_yaml(metadata).rstrip('\n')


SUBSET_HANDLER = SubsetYAMLHandler()


def parse_markdown_string_with_frontmatter(markdown_text: str) -> tuple[dict, str]:
    """
    Parse a Markdown string with YAML-subset front matter.

    Args:
        markdown_text: Markdown content as string

    Returns:
        (metadata_dict, markdown_content_without_frontmatter), content stripped
    """
    if not markdown_text.startswith('---'):
        return {}, markdown_text.strip()

    # parse() rather than loads(): Post(**metadata) rejects keys such as "content"
    metadata, content = frontmatter.parse(markdown_text, handler=SUBSET_HANDLER)
    return dict(metadata), content.strip()
