from __future__ import annotations

import asyncio
import tempfile
import unittest
from pathlib import Path

from fakeweb import FakeWeb
from page_loader.errors import HttpStatusError
from page_loader.mcp_server import save_page


class SavePageToolTest(unittest.TestCase):
    def test_returns_page_path(self) -> None:
        web = FakeWeb({"https://example.com/docs": (200, "<html></html>")})
        with tempfile.TemporaryDirectory() as tmp, web.patch():
            result = asyncio.run(save_page("https://example.com/docs", tmp))
            self.assertEqual(result, str(Path(tmp).absolute() / "example-com-docs.html"))
            self.assertTrue(Path(result).exists())

    def test_propagates_failures(self) -> None:
        web = FakeWeb({"https://example.com/docs": (503, "Unavailable")})
        with tempfile.TemporaryDirectory() as tmp, web.patch():
            with self.assertRaisesRegex(HttpStatusError, "503"):
                asyncio.run(save_page("https://example.com/docs", tmp))


if __name__ == "__main__":
    unittest.main()
