"""
Markup scanning primitives
Locates a div by its class tokens and finds where that div ends
"""

import re
import structlog
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

logger = structlog.get_logger(__name__)

ELEMENT_NAME = "div"

# Characters that may appear inside a class token; anything else is a boundary
_TOKEN_CHARS = r"[\w-]"

# Attributes may follow a quoted value without separating whitespace
_OPENING_TAG_RE = re.compile(
    r"""<%s(?P<attrs>(?:(?:\s+|(?<=["']))[^\s=>/"']+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>"']*))?)*)\s*>"""
    % ELEMENT_NAME,
    re.IGNORECASE,
)

_ATTRIBUTE_RE = re.compile(
    r"""\s*(?P<name>[^\s=>/"']+)(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s>"']*)))?"""
)

# A bare "<div" only counts when the name ends there (rejects <divider>)
_NESTED_OPEN_RE = re.compile(r"<%s(?=[\s>]|\Z)" % ELEMENT_NAME, re.IGNORECASE)
_NESTED_CLOSE_RE = re.compile(r"</%s>" % ELEMENT_NAME, re.IGNORECASE)


class TagMatch(NamedTuple):
    start: int
    end: int
    tag: str


def split_class_tokens(value: Optional[str]) -> List[str]:
    """Split a whitespace separated class string, dropping duplicates but keeping order."""
    if not value:
        return []
    tokens = []
    for token in value.split():
        if token not in tokens:
            tokens.append(token)
    return tokens


def compile_class_predicate(tokens: Iterable[str]) -> Callable[[str], bool]:
    """
    Build a matcher for raw class attribute values

    Args:
        tokens: class tokens that must all be present

    Returns:
        callable taking a class attribute value and returning True when every
        token occurs in it as a whole token, in any order
    """
    tokens = [t for t in tokens if t and t.strip()]
    if not tokens:
        raise ValueError("At least one class token is required")

    lookaheads = "".join(
        r"(?=.*(?<!%s)%s(?!%s))" % (_TOKEN_CHARS, re.escape(token), _TOKEN_CHARS)
        for token in tokens
    )
    pattern = re.compile(lookaheads, re.DOTALL)

    def predicate(class_value: str) -> bool:
        return pattern.match(class_value) is not None

    return predicate


def class_attribute(attrs: str) -> Optional[str]:
    """Return the quoted value of the first `class` attribute, if any."""
    for attr in _ATTRIBUTE_RE.finditer(attrs):
        if attr.group("name").lower() != "class":
            continue
        if attr.group("dq") is not None:
            return attr.group("dq")
        if attr.group("sq") is not None:
            return attr.group("sq")
        # unquoted class values are not recognised
        return None
    return None


def find_opening_tags(markup: str, predicate: Callable[[str], bool]) -> List[TagMatch]:
    """Every opening div tag whose class attribute satisfies `predicate`, in document order."""
    matches = []
    for tag in _OPENING_TAG_RE.finditer(markup):
        value = class_attribute(tag.group("attrs"))
        if value is not None and predicate(value):
            matches.append(TagMatch(tag.start(), tag.end(), tag.group(0)))
    return matches


def locate_opening_tag(
    markup: str, predicate: Callable[[str], bool]
) -> Optional[Tuple[TagMatch, int]]:
    """
    Find the first opening div tag whose classes satisfy `predicate`

    More than one qualifying tag is not an error: the first by position wins
    and a warning is logged.

    Returns:
        the selected match and the number of qualifying tags, or None
    """
    matches = find_opening_tags(markup, predicate)
    if not matches:
        return None

    if len(matches) > 1:
        logger.warning("multiple_matches_found",
                       count=len(matches),
                       selected_offset=matches[0].start)
    return matches[0], len(matches)


def scan_balanced_extent(markup: str, after: int) -> Optional[int]:
    """
    Find the end of a div whose opening tag ends at `after`

    Nested divs are tracked with a depth counter. An opening tag wins only
    when it starts strictly before the next closing tag.

    Returns:
        offset just past the matching closing tag, or None when the element
        is never closed
    """
    depth = 1
    cursor = after
    # matches stay valid until the cursor passes them; a miss stays a miss
    next_open = _NESTED_OPEN_RE.search(markup, cursor)
    closing = _NESTED_CLOSE_RE.search(markup, cursor)

    while depth > 0:
        if closing is not None and closing.start() < cursor:
            closing = _NESTED_CLOSE_RE.search(markup, cursor)
        if closing is None:
            logger.debug("unclosed_element", depth=depth, offset=cursor)
            return None

        if next_open is not None and next_open.start() < cursor:
            next_open = _NESTED_OPEN_RE.search(markup, cursor)

        if next_open is not None and next_open.start() < closing.start():
            depth += 1
            cursor = next_open.end()
        else:
            depth -= 1
            cursor = closing.end()

    return cursor
