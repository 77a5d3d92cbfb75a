"""Shared data models for Blogfixer."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from blogfixer.services.analyzer import IssueReport


class ProcessingMode(str, Enum):
    """Whether flagged articles are rewritten or only reported."""

    FIX = "fix"
    DRY_RUN = "dry-run"


class EventType(str, Enum):
    """Severity of a progress log line."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class ArticleStatus(str, Enum):
    """Outcome for a processed article."""

    FIXED = "Fixed"
    WOULD_FIX = "Would Fix"
    FAILED = "Failed"
    NO_ISSUES = "No Issues"


@dataclass
class ArticleRecord:
    """One row of the results table."""

    blog: str
    title: str
    issues: IssueReport
    status: ArticleStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "blog": self.blog,
            "title": self.title,
            "issues": self.issues.to_dict(),
            "status": self.status.value,
        }


@dataclass
class ProcessingResults:
    """Totals of a processing run."""

    total_processed: int = 0
    issues_found: int = 0
    fixed: int = 0
    articles: list[ArticleRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalProcessed": self.total_processed,
            "issuesFound": self.issues_found,
            "fixed": self.fixed,
            "articles": [a.to_dict() for a in self.articles],
        }


@dataclass
class LogEvent:
    """A progress line for the caller."""

    log: str
    type: EventType = EventType.INFO

    def to_dict(self) -> dict[str, Any]:
        return {"log": self.log, "type": self.type.value}


@dataclass
class ResultsEvent:
    """The terminal event of a successful run."""

    results: ProcessingResults

    def to_dict(self) -> dict[str, Any]:
        return {"results": self.results.to_dict()}


ProgressEvent = LogEvent | ResultsEvent


def encode_sse(event: ProgressEvent) -> str:
    """Frame an event as a server-sent event `data:` line."""
    return f"data: {json.dumps(event.to_dict())}\n\n"
