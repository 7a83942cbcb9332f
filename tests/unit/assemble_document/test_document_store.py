"""Tests for assemble_document.store module."""

import json
from pathlib import Path

from assemble_document.store import LocalDocumentStore


class TestLocalDocumentStore:
    def test_save_writes_json_and_html(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path)
        document = store.create("Noticias GCP - 2024-05-01")
        document.add_heading("Noticias Compute")
        location = store.save(document)

        assert location == str(tmp_path / "Noticias GCP - 2024-05-01.html")
        data = json.loads((tmp_path / "Noticias GCP - 2024-05-01.json").read_text())
        assert data["blocks"][0]["text"] == "Noticias Compute"

    def test_same_title_overwrites(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path)
        first = store.create("Doc")
        first.add_heading("Old")
        store.save(first)

        second = store.create("Doc")
        second.add_heading("New")
        store.save(second)

        html = (tmp_path / "Doc.html").read_text()
        assert "New" in html
        assert "Old" not in html
        assert len(list(tmp_path.glob("*.html"))) == 1

    def test_unsafe_characters_in_title(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path)
        location = store.save(store.create("a/b:c"))
        assert Path(location).parent == tmp_path
