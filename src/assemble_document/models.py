"""Data models for the assemble_document stage."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class Heading:
    text: str
    kind: str = "heading"


@dataclass
class ArticleEntry:
    """A linked, bold title followed by the plain summary paragraph."""
    title: str
    url: str
    summary: str = ""
    kind: str = "entry"


@dataclass
class ErrorMarker:
    """Stands in for an article whose summary could not be produced."""
    url: str
    message: str
    kind: str = "error"

    @property
    def text(self) -> str:
        return f"Error processing article: {self.url} — {self.message}"


@dataclass
class Document:
    title: str
    blocks: list = field(default_factory=list)

    def add_heading(self, text: str) -> None:
        self.blocks.append(Heading(text=text))

    def add_entry(self, title: str, url: str, summary: str = "") -> None:
        self.blocks.append(ArticleEntry(title=title, url=url, summary=summary))

    def add_error(self, url: str, message: str) -> None:
        self.blocks.append(ErrorMarker(url=url, message=message))


@dataclass
class AssemblyResult:
    document: Document
    succeeded_links: list[str] = field(default_factory=list)
    failed_links: list[str] = field(default_factory=list)
    location: str = ""


class DocumentBuilder(Protocol):
    def create(self, title: str) -> Document: ...

    def save(self, document: Document) -> str:
        """Persist the document and return where it can be found."""
        ...
