"""Pytest configuration and fixtures."""

import pytest

from divextract.logging_config import configure_logging

# configure before any module logger is cached
configure_logging(level="DEBUG")


@pytest.fixture
def article_html():
    """Wiki-style page with the article body nested among other divs."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Sample Article</title>
    <style>div { color: red; }</style>
</head>
<body>
    <div id="mw-navigation" class="noprint">
        <div class="menu">Navigation</div>
    </div>
    <div id="content" class="mw-body">
        <DIV id="mw-content-text" CLASS='mw-body-content mw-content-ltr mw-parser-output' lang="en">
            <div class="hatnote">See also: Other</div>
            <p>Lead paragraph.</p>
            <div class="thumb"><div class="thumbinner"><divider>x</divider></div></div>
            <p>Final paragraph.</p>
        </div>
    </div>
    <div class="footer">Footer</div>
</body>
</html>
"""


@pytest.fixture
def article_body():
    return """<DIV id="mw-content-text" CLASS='mw-body-content mw-content-ltr mw-parser-output' lang="en">
            <div class="hatnote">See also: Other</div>
            <p>Lead paragraph.</p>
            <div class="thumb"><div class="thumbinner"><divider>x</divider></div></div>
            <p>Final paragraph.</p>
        </div>"""
