from __future__ import annotations

import unittest
from pathlib import Path

from fakeweb import read_fixture
from page_loader.content import (
    find_references,
    localize_resources,
    parse_document,
    render_document,
)

PAGE_URL = "https://ru.hexlet.io/courses"
ASSETS_DIR = Path("/srv/out/ru-hexlet-io-courses_files")
DIR_NAME = "ru-hexlet-io-courses_files"


class LocalizeResourcesTest(unittest.TestCase):
    def setUp(self) -> None:
        self.document = parse_document(read_fixture("before.html"))
        self.tasks = localize_resources(self.document, PAGE_URL, ASSETS_DIR)

    def test_tasks_follow_tag_table_order(self) -> None:
        self.assertEqual(
            [task.source_url for task in self.tasks],
            [
                "https://ru.hexlet.io/assets/professions/nodejs.png",
                "https://ru.hexlet.io/assets/application.css",
                "https://ru.hexlet.io/courses",
                "https://ru.hexlet.io/packs/js/runtime.js",
            ],
        )

    def test_destinations_live_in_assets_dir(self) -> None:
        self.assertEqual(
            [task.destination for task in self.tasks],
            [
                ASSETS_DIR / "ru-hexlet-io-assets-professions-nodejs.png",
                ASSETS_DIR / "ru-hexlet-io-assets-application.css",
                ASSETS_DIR / "ru-hexlet-io-courses.html",
                ASSETS_DIR / "ru-hexlet-io-packs-js-runtime.js",
            ],
        )

    def test_same_origin_attributes_are_rewritten(self) -> None:
        image = self.document.find("img", alt="Иконка профессии Node.js-программист")
        self.assertEqual(image["src"], f"{DIR_NAME}/ru-hexlet-io-assets-professions-nodejs.png")
        canonical = self.document.find("link", rel="canonical")
        self.assertEqual(canonical["href"], f"{DIR_NAME}/ru-hexlet-io-courses.html")
        runtime = self.document.find("script", src=f"{DIR_NAME}/ru-hexlet-io-packs-js-runtime.js")
        self.assertIsNotNone(runtime)

    def test_external_references_are_untouched(self) -> None:
        html = render_document(self.document)
        self.assertIn('href="https://cdn2.hexlet.io/assets/menu.css"', html)
        self.assertIn('src="https://js.stripe.com/v3/"', html)

    def test_unmatched_and_empty_attributes_are_untouched(self) -> None:
        self.assertEqual(self.document.find("a")["href"], "/professions/nodejs")
        self.assertEqual(self.document.find("img", alt="empty")["src"], "")

    def test_rewritten_page_is_a_fixed_point(self) -> None:
        reparsed = parse_document(render_document(self.document))
        local_values = [
            reference.original_value
            for _, reference in find_references(reparsed, PAGE_URL)
            if reference.is_same_origin(PAGE_URL)
        ]
        self.assertEqual(len(local_values), 4)
        for value in local_values:
            self.assertTrue(value.startswith(f"{DIR_NAME}/"), value)


class ScannerEdgeCasesTest(unittest.TestCase):
    def test_minimal_document_is_normalized(self) -> None:
        document = parse_document("<html></html>")
        self.assertEqual(localize_resources(document, PAGE_URL, ASSETS_DIR), [])
        self.assertEqual(render_document(document), "<html><head></head><body></body></html>")

    def test_protocol_relative_references(self) -> None:
        document = parse_document(
            '<img src="//cdn.example.org/a.png"><img src="//example.com/b.png">'
        )
        tasks = localize_resources(document, "https://example.com/", Path("/out/example-com_files"))
        self.assertEqual([task.source_url for task in tasks], ["https://example.com/b.png"])
        sources = [img["src"] for img in document.find_all("img")]
        self.assertEqual(sources, ["//cdn.example.org/a.png", "example-com_files/example-com-b.png"])

    def test_data_uri_is_not_downloaded(self) -> None:
        document = parse_document('<img src="data:image/png;base64,iVBORw0KGgo=">')
        self.assertEqual(localize_resources(document, PAGE_URL, ASSETS_DIR), [])

    def test_missing_attribute_is_skipped(self) -> None:
        document = parse_document("<script>var x = 1;</script><link rel=preconnect>")
        self.assertEqual(localize_resources(document, PAGE_URL, ASSETS_DIR), [])


if __name__ == "__main__":
    unittest.main()
