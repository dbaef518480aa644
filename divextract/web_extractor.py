import structlog
from enum import Enum
from typing import Optional

from divextract.markup import (
    compile_class_predicate,
    locate_opening_tag,
    scan_balanced_extent,
    split_class_tokens,
)

logger = structlog.get_logger(__name__)


class ExtractionError(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    EMPTY_EXTRACTION = "empty_extraction"


class ExtractionResult:
    def __init__(
        self,
        content: Optional[str] = None,
        error: Optional[ExtractionError] = None,
        reason: str = None,
        field: str = None,
        target_classes: str = None,
        match_count: int = 0,
    ):
        """Outcome of one extraction: either `content` or an `error` with a reason."""
        self.content = content
        self.error = error
        self.reason = reason
        self.field = field
        self.target_classes = target_classes
        self.match_count = match_count

    @property
    def success(self) -> bool:
        return self.error is None and self.content is not None

    @classmethod
    def failed(cls, error: ExtractionError, reason: str, **kwargs) -> "ExtractionResult":
        return cls(error=error, reason=reason, **kwargs)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "content": self.content,
            "error": self.error.value if self.error else None,
            "reason": self.reason,
            "field": self.field,
            "target_classes": self.target_classes,
            "match_count": self.match_count,
        }

    def __repr__(self) -> str:
        if self.success:
            return f"ExtractionResult(content=<{len(self.content)} chars>)"
        return f"ExtractionResult(error={self.error.value}, reason={self.reason!r})"


def extract_content(markup: str, target_classes: str) -> ExtractionResult:
    """
    Extract the first div whose class attribute holds every token in `target_classes`

    Args:
        markup: raw HTML document
        target_classes: whitespace separated class tokens, in any order

    Returns:
        ExtractionResult with the element's full markup, nested divs included,
        or the reason extraction failed. Failures are returned, never raised.
    """
    if not markup or not markup.strip():
        logger.warning("invalid_input", field="markup")
        return ExtractionResult.failed(
            ExtractionError.INVALID_INPUT,
            "Markup is empty",
            field="markup",
        )

    tokens = split_class_tokens(target_classes)
    if not tokens:
        logger.warning("invalid_input", field="target_classes")
        return ExtractionResult.failed(
            ExtractionError.INVALID_INPUT,
            "Target classes are empty",
            field="target_classes",
        )

    predicate = compile_class_predicate(tokens)
    located = locate_opening_tag(markup, predicate)

    if located is None:
        logger.warning("target_not_found", target_classes=target_classes)
        return ExtractionResult.failed(
            ExtractionError.NOT_FOUND,
            f"No div with classes '{target_classes}' found",
            target_classes=target_classes,
        )

    tag, match_count = located
    end = scan_balanced_extent(markup, tag.end)

    if end is None:
        logger.warning("unclosed_target_element",
                       target_classes=target_classes,
                       offset=tag.start)
        return ExtractionResult.failed(
            ExtractionError.MALFORMED,
            f"Div with classes '{target_classes}' at offset {tag.start} is never closed",
            target_classes=target_classes,
            match_count=match_count,
        )

    content = markup[tag.start:end]
    if not content.strip():
        logger.error("empty_extraction", target_classes=target_classes)
        return ExtractionResult.failed(
            ExtractionError.EMPTY_EXTRACTION,
            "Extracted content is empty",
            target_classes=target_classes,
            match_count=match_count,
        )

    logger.debug("element_extracted",
                 target_classes=target_classes,
                 start=tag.start,
                 end=end,
                 match_count=match_count)

    return ExtractionResult(
        content=content,
        target_classes=target_classes,
        match_count=match_count,
    )
