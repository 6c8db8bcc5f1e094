"""
Unit tests for the HTML to Markdown renderer.
"""
from bs4 import BeautifulSoup

from core.markdown import clean_markdown, html_to_markdown


def test_heading():
    assert html_to_markdown("<h1>Title</h1>") == "# Title"
    assert html_to_markdown("<h3>Missions</h3>") == "### Missions"


def test_unordered_list():
    assert html_to_markdown("<ul><li>a</li><li>b</li></ul>") == "- a\n- b"


def test_ordered_list():
    assert html_to_markdown("<ol><li>one</li><li>two</li></ol>") == "1. one\n2. two"


def test_nested_list_is_indented():
    html = "<ul><li>Parent<ul><li>Child</li></ul></li></ul>"
    assert html_to_markdown(html) == "- Parent\n  - Child"


def test_inline_emphasis():
    assert html_to_markdown("<strong>x</strong>") == "**x**"
    assert html_to_markdown("<b>x</b>") == "**x**"
    assert html_to_markdown("<em>x</em>") == "*x*"
    assert html_to_markdown("<u>x</u>") == "_x_"
    assert html_to_markdown("<del>x</del>") == "~~x~~"
    assert html_to_markdown("<code>pip install</code>") == "`pip install`"


def test_paragraph_with_inline_markup():
    assert html_to_markdown("<p>Hello <strong>world</strong></p>") == "Hello **world**"


def test_paragraphs_are_separated_by_blank_line():
    assert html_to_markdown("<p>First</p><p>Second</p>") == "First\n\nSecond"


def test_line_break_and_rule():
    assert html_to_markdown("<p>a<br>b</p>") == "a\nb"
    assert html_to_markdown("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"


def test_links():
    assert html_to_markdown('<a href="https://acme.example">site</a>') == "[site](https://acme.example)"
    assert html_to_markdown('<a href="javascript:alert(1)">click</a>') == "click"
    assert html_to_markdown('<a href="data:text/html,<script>alert(1)</script>">open</a>') == "open"
    assert html_to_markdown('<a href=" DATA:text/html;base64,PHNjcmlwdD4=">open</a>') == "open"
    assert html_to_markdown('<a>anchor</a>') == "anchor"


def test_blockquote():
    assert html_to_markdown("<blockquote>Quote</blockquote>") == "> Quote"


def test_preformatted_block():
    assert html_to_markdown("<pre><code>x = 1</code></pre>") == "```\nx = 1\n```"


def test_table():
    html = """<table>
    <tr><th>A</th><th>B</th></tr>
    <tr><td>1</td><td>a|b</td></tr>
    </table>"""
    assert html_to_markdown(html) == "| A | B |\n| --- | --- |\n| 1 | a\\|b |"


def test_skipped_tags_and_comments():
    html = "<p>Hello<!-- tracking --></p><script>var x = 1;</script><style>p {}</style>"
    assert html_to_markdown(html) == "Hello"


def test_unknown_tags_render_children():
    assert html_to_markdown("<span>plain <custom-tag>text</custom-tag></span>") == "plain text"


def test_bullet_glyphs_are_normalized():
    assert html_to_markdown("<p>• First</p><p>▸ Second</p>") == "- First\n\n- Second"


def test_empty_bold_is_dropped():
    assert html_to_markdown("<p>A<strong></strong>B</p>") == "AB"


def test_whitespace_inside_emphasis_is_closed_up():
    assert clean_markdown("** bold ** and *italic * text") == "**bold** and *italic* text"


def test_literal_asterisks_are_kept():
    assert html_to_markdown("<p>2 * 3 = 6 and 4 * 5 = 20</p>") == "2 * 3 = 6 and 4 * 5 = 20"
    assert clean_markdown("a * b *c*") == "a * b *c*"


# Lines are right-trimmed before blank lines are collapsed, so indentation
# left by pretty-printed HTML does not keep extra blank lines alive.
def test_excess_blank_lines_are_collapsed():
    assert clean_markdown("a\n\n\n\n\nb  \n") == "a\n\nb"


def test_empty_bullet_lines_are_removed():
    assert clean_markdown("Intro\n•\n• Item") == "Intro\n- Item"


def test_empty_input():
    assert html_to_markdown("") == ""
    assert html_to_markdown(None) == ""


def test_renders_contents_of_parsed_element():
    soup = BeautifulSoup('<div id="d"><h2>Profile</h2><p>Curious.</p></div>', 'html.parser')
    assert html_to_markdown(soup.select_one('#d')) == "## Profile\n\nCurious."


def test_rendering_is_idempotent():
    html = "<div><h2>Stack</h2><ul><li><b>Python</b></li><li>Go</li></ul></div>"
    assert html_to_markdown(html) == html_to_markdown(html)
