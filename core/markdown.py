"""
HTML to Markdown renderer.

Converts job description markup to Markdown so bullets, emphasis, links and
tables survive capture. Rendering is post-order: an element's children are
rendered first, then wrapped according to its tag.
"""

import re
from typing import Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

HEADING_LEVELS = {'h1': 1, 'h2': 2, 'h3': 3, 'h4': 4, 'h5': 5, 'h6': 6}

# Subtrees that never carry description text
SKIPPED_TAGS = {'script', 'style', 'noscript', 'iframe', 'svg', 'canvas'}

BLOCK_TAGS = {'div', 'section', 'article'}

UNSAFE_LINK_SCHEMES = ('javascript:', 'vbscript:', 'data:')

BULLET_GLYPHS = re.compile(r'^[ \t]*[•●○▪▸►][ \t]*', re.MULTILINE)
BOLD_SPAN = re.compile(r'\*\*([^*\n]+?)\*\*')
# An opening "*" with whitespace on both sides is literal text ("2 * 3")
ITALIC_SPAN = re.compile(r'(?:(?<![*\s])\*|(?<!\*)\*(?=\S))(?!\*)([^*\n]+?)(?<!\*)\*(?!\*)')


def html_to_markdown(markup: Union[str, Tag, None]) -> str:
    """
    Render HTML to Markdown.

    Args:
        markup: An HTML fragment, or an already parsed element whose
            contents (not the element itself) are rendered.

    Returns:
        Cleaned Markdown text, '' for empty input.
    """
    if markup is None:
        return ''

    if isinstance(markup, str):
        if not markup:
            return ''
        root = BeautifulSoup(markup, 'html.parser')
    else:
        root = markup

    return clean_markdown(_render_children(root))


def _render_children(node: Tag) -> str:
    return ''.join(_render_node(child) for child in node.children)


def _render_node(node) -> str:
    if isinstance(node, NavigableString):
        # Comments, doctypes and CDATA are not text
        if isinstance(node, PreformattedString):
            return ''
        return str(node)

    if not isinstance(node, Tag):
        return ''

    tag = node.name.lower()

    if tag in SKIPPED_TAGS:
        return ''
    if tag == 'ul':
        return f"\n{_render_list(node, ordered=False)}\n"
    if tag == 'ol':
        return f"\n{_render_list(node, ordered=True)}\n"
    if tag == 'table':
        return f"\n{_render_table(node)}\n"

    children = _render_children(node)

    if tag in HEADING_LEVELS:
        return f"\n{'#' * HEADING_LEVELS[tag]} {children.strip()}\n\n"

    if tag in ('strong', 'b'):
        return f"**{children.strip()}**"
    if tag in ('em', 'i'):
        return f"*{children.strip()}*"
    if tag == 'u':
        return f"_{children.strip()}_"
    if tag in ('s', 'strike', 'del'):
        return f"~~{children.strip()}~~"
    if tag == 'code':
        # The surrounding fence already marks code inside <pre>
        if node.parent is not None and node.parent.name == 'pre':
            return children
        return f"`{children.strip()}`"

    if tag == 'a':
        href = node.get('href')
        if href and not href.strip().lower().startswith(UNSAFE_LINK_SCHEMES):
            return f"[{children.strip()}]({href})"
        return children

    if tag == 'p':
        return f"\n{children.strip()}\n\n"
    if tag == 'br':
        return '\n'
    if tag == 'hr':
        return '\n---\n\n'

    if tag in BLOCK_TAGS:
        return f"\n{children}\n"

    if tag == 'blockquote':
        quoted = '\n> '.join(children.strip().split('\n'))
        return f"\n> {quoted}\n\n"

    if tag == 'pre':
        return f"\n```\n{children.strip()}\n```\n\n"

    return children


def _render_list(list_node: Tag, ordered: bool) -> str:
    """Render the direct <li> children of a list, indenting nested content."""
    rendered = []
    for index, item in enumerate(list_node.find_all('li', recursive=False)):
        prefix = f"{index + 1}." if ordered else '-'
        content = _render_node(item).strip()

        lines = content.split('\n')
        first_line = lines[0]
        rest = '\n'.join(f"  {line}" for line in lines[1:])

        rendered.append(f"{prefix} {first_line}" + (f"\n{rest}" if rest else ''))

    return '\n'.join(rendered)


def _render_table(table: Tag) -> str:
    """Render a table as pipe rows with a separator after the first row."""
    rows = table.find_all('tr')
    if not rows:
        return ''

    result = []
    for row_index, row in enumerate(rows):
        cells = row.find_all(['td', 'th'])
        contents = [_render_node(cell).strip().replace('|', '\\|') for cell in cells]
        result.append(f"| {' | '.join(contents)} |")

        if row_index == 0:
            result.append(f"| {' | '.join('---' for _ in cells)} |")

    return '\n'.join(result)


def _tighten(marker: str, drop_empty: bool = False):
    def replace(match: re.Match) -> str:
        inner = match.group(1).strip()
        if not inner:
            return '' if drop_empty else match.group(0)
        return f"{marker}{inner}{marker}"
    return replace


def clean_markdown(markdown: str) -> str:
    """Post-process rendered Markdown."""
    # Whitespace-only lines count as blank before collapsing
    text = '\n'.join(line.rstrip() for line in markdown.split('\n'))
    text = re.sub(r'\n{3,}', '\n\n', text)
    text = text.strip()

    # Whitespace just inside emphasis markers
    text = BOLD_SPAN.sub(_tighten('**', drop_empty=True), text)
    text = ITALIC_SPAN.sub(_tighten('*'), text)

    # Empty bold
    text = text.replace('****', '')

    text = BULLET_GLYPHS.sub('- ', text)

    # Empty list items
    text = text.replace('\n- \n', '\n')

    return text
