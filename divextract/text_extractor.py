"""
Plain text rendering of an extracted fragment
"""

from lxml import etree, html


def extract_text(fragment: str) -> str:
    """
    Render an HTML fragment as plain text

    Script and style contents are dropped, whitespace within each line is
    collapsed and blank lines are removed.
    """
    if not fragment or not fragment.strip():
        return ""

    tree = html.fromstring(fragment)
    etree.strip_elements(tree, 'script', 'style', with_tail=False)

    lines = []
    for line in tree.text_content().splitlines():
        line = " ".join(line.split())
        if line:
            lines.append(line)
    return "\n".join(lines)
