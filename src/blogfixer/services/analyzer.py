"""Structural SEO checks for article HTML."""

import re
from dataclasses import asdict, dataclass, field
from typing import Any

BODY_OPEN_PATTERN = re.compile(r"<body\b", re.IGNORECASE)
HEAD_OPEN_PATTERN = re.compile(r"<head\b", re.IGNORECASE)
TITLE_OPEN_PATTERN = re.compile(r"<title\b", re.IGNORECASE)
HEAD_BLOCK_PATTERN = re.compile(r"<head\b[^>]*>[\s\S]*?</head>", re.IGNORECASE)
IMG_TAG_PATTERN = re.compile(r"<img\b[^>]*>", re.IGNORECASE)


@dataclass
class IssueReport:
    """Structural problems found in a single article."""

    multiple_body_tags: bool = False
    multiple_head_tags: bool = False
    title_outside_head: bool = False
    multiple_titles: bool = False
    missing_alt_text: list[str] = field(default_factory=list)
    broken_structure: bool = False

    @property
    def has_issues(self) -> bool:
        """Whether any check failed."""
        return (
            self.multiple_body_tags
            or self.multiple_head_tags
            or self.title_outside_head
            or self.multiple_titles
            or self.broken_structure
            or bool(self.missing_alt_text)
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def analyze_article(content: str | None) -> IssueReport:
    """Run the structural checks against an article's HTML.

    This is plain pattern counting, not HTML parsing: tags inside comments
    or attribute values are counted too.

    Args:
        content: The article HTML. None or empty yields a clean report.

    Returns:
        An IssueReport for the content.
    """
    report = IssueReport()
    if not content:
        return report

    body_count = len(BODY_OPEN_PATTERN.findall(content))
    head_count = len(HEAD_OPEN_PATTERN.findall(content))
    title_count = len(TITLE_OPEN_PATTERN.findall(content))

    report.multiple_body_tags = body_count > 1
    report.multiple_head_tags = head_count > 1
    report.multiple_titles = title_count > 1

    if title_count:
        outside_head = HEAD_BLOCK_PATTERN.sub("", content)
        report.title_outside_head = TITLE_OPEN_PATTERN.search(outside_head) is not None

    report.missing_alt_text = [
        img for img in IMG_TAG_PATTERN.findall(content) if "alt=" not in img
    ]

    # Article content is a fragment, any document wrapper is misplaced
    report.broken_structure = body_count > 0 or head_count > 0

    return report
