"""Local document store: one JSON + HTML pair per document title."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict
from pathlib import Path

from assemble_document.models import Document
from assemble_document.render import render_full_html
from common.local_io import write_text_atomic

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^\w\-. ]+")


class LocalDocumentStore:
    """Saving a document with an existing title replaces it, so same-day reruns overwrite."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _stem(self, title: str) -> str:
        return _UNSAFE_FILENAME_RE.sub("_", title).strip() or "document"

    def create(self, title: str) -> Document:
        path = self.directory / f"{self._stem(title)}.json"
        if path.exists():
            logger.info("Replacing existing document: %s", title)
        else:
            logger.info("Created new document: %s", title)
        return Document(title=title)

    def save(self, document: Document) -> str:
        stem = self._stem(document.title)
        json_path = self.directory / f"{stem}.json"
        html_path = self.directory / f"{stem}.html"

        write_text_atomic(json_path, json.dumps(asdict(document), indent=2, ensure_ascii=False))
        write_text_atomic(html_path, render_full_html(document))

        logger.info("Saved document %s to %s", document.title, html_path)
        return str(html_path)
