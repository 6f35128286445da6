"""Tests for the compilation driver."""

import os
import tempfile
import unittest
import webbrowser
from pathlib import Path
from unittest.mock import MagicMock, patch

from common.config.compiler_config import CompilerConfig
from lol_parser.driver import (
    compile_file,
    compile_source,
    file_url,
    open_in_browser,
    output_path_for,
)
from lol_parser.errors import ParseError, SemanticError

PAGE = "#HAI #MAEK HEAD #GIMMEH TITLE Test #MKAY #OIC #MAEK PARAGRAF hi #OIC #KTHXBYE"


class TestCompileSource(unittest.TestCase):

    def test_default_config(self):
        html = compile_source(PAGE)
        self.assertTrue(html.startswith("<html>\n    <head>\n"))
        self.assertIn("<title>Test</title>", html)

    def test_indent_from_config(self):
        config = CompilerConfig()
        config.output.indent = "  "
        html = compile_source("#HAI #MAEK PARAGRAF hi #OIC #KTHXBYE", config)
        self.assertEqual(html, "<html>\n  <p>hi</p>\n</html>\n")

    def test_strict_variables_from_config(self):
        config = CompilerConfig()
        config.semantic.strict_variables = True
        with self.assertRaises(SemanticError):
            compile_source("#HAI #LEMME SEE x #MKAY #KTHXBYE", config)


class TestOutputPath(unittest.TestCase):

    def test_same_directory(self):
        self.assertEqual(output_path_for("pages/home.lol"), Path("pages/home.html"))

    def test_output_directory(self):
        self.assertEqual(output_path_for("pages/home.lol", "build"), Path("build/home.html"))

    def test_other_extension(self):
        self.assertEqual(output_path_for("notes.txt"), Path("notes.html"))


class TestCompileFile(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.source = self.dir / "page.lol"
        self.source.write_text(PAGE, encoding="utf-8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_writes_next_to_input(self):
        out = compile_file(self.source)
        self.assertEqual(out, self.dir / "page.html")
        self.assertIn("<p>hi</p>", out.read_text(encoding="utf-8"))

    def test_explicit_output_path(self):
        target = self.dir / "custom.html"
        out = compile_file(self.source, output_path=target)
        self.assertEqual(out, target)
        self.assertTrue(target.exists())

    def test_output_directory_from_config(self):
        config = CompilerConfig()
        config.output.directory = str(self.dir / "build")
        out = compile_file(self.source, config=config)
        self.assertEqual(out, self.dir / "build" / "page.html")
        self.assertTrue(out.exists())

    def test_failed_compile_writes_nothing(self):
        bad = self.dir / "bad.lol"
        bad.write_text("#HAI #MAEK PARAGRAF unclosed", encoding="utf-8")
        with self.assertRaises(ParseError):
            compile_file(bad)
        self.assertFalse((self.dir / "bad.html").exists())

    def test_missing_input(self):
        with self.assertRaises(FileNotFoundError):
            compile_file(self.dir / "missing.lol")

    def test_non_lol_extension_warns(self):
        other = self.dir / "page.txt"
        other.write_text(PAGE, encoding="utf-8")
        with self.assertLogs("lol_parser.driver", level="WARNING"):
            out = compile_file(other)
        self.assertEqual(out, self.dir / "page.html")

    def test_html_input_is_not_overwritten(self):
        page = self.dir / "page.html"
        page.write_text(PAGE, encoding="utf-8")
        with self.assertLogs("lol_parser.driver", level="WARNING"):
            with self.assertRaises(ValueError):
                compile_file(page)
        self.assertEqual(page.read_text(encoding="utf-8"), PAGE)

    def test_explicit_output_same_as_input(self):
        with self.assertRaises(ValueError):
            compile_file(self.source, output_path=self.dir / "." / "page.lol")
        self.assertEqual(self.source.read_text(encoding="utf-8"), PAGE)

    def test_no_temp_files_left(self):
        compile_file(self.source)
        self.assertEqual(sorted(os.listdir(self.dir)), ["page.html", "page.lol"])


class TestOpenInBrowser(unittest.TestCase):

    def test_file_url(self):
        self.assertTrue(file_url("page.html").startswith("file://"))
        self.assertTrue(file_url("page.html").endswith("/page.html"))

    @patch("lol_parser.driver.webbrowser.get")
    def test_opens_default_browser(self, mock_get):
        controller = MagicMock()
        controller.open.return_value = True
        mock_get.return_value = controller

        self.assertTrue(open_in_browser("page.html"))
        mock_get.assert_called_once_with()
        controller.open.assert_called_once_with(file_url("page.html"))

    @patch("lol_parser.driver.webbrowser.get")
    def test_named_browser(self, mock_get):
        mock_get.return_value.open.return_value = True
        open_in_browser("page.html", browser="firefox")
        mock_get.assert_called_once_with("firefox")

    @patch("lol_parser.driver.webbrowser.get", side_effect=webbrowser.Error("none"))
    def test_no_browser(self, mock_get):
        self.assertFalse(open_in_browser("page.html"))

    @patch("lol_parser.driver.webbrowser.get")
    def test_browser_refuses(self, mock_get):
        mock_get.return_value.open.return_value = False
        self.assertFalse(open_in_browser("page.html"))


if __name__ == '__main__':
    unittest.main()
