"""
Test suite for lib/utils.py
"""

import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))
from lib.utils import jsonDumps, load_dotenv  # noqa: E402


class TestUtils(unittest.TestCase):

    def test_json_dumps_compact_by_default(self):
        """Test compact separators and sorted keys"""
        self.assertEqual(jsonDumps({"b": 1, "a": [1, 2]}), '{"a":[1,2],"b":1}')

    def test_json_dumps_pretty_with_indent(self):
        """Test that indent switches off compact separators"""
        result = jsonDumps({"a": 1}, indent=2)
        self.assertEqual(result, '{\n  "a": 1\n}')

    def test_json_dumps_keeps_unicode(self):
        """Test that non-ASCII text is not escaped"""
        self.assertEqual(jsonDumps("формула"), '"формула"')

    def test_json_dumps_falls_back_to_str(self):
        """Test that unknown objects are serialized with str()"""
        self.assertEqual(json.loads(jsonDumps({"v": object})), {"v": str(object)})

    def test_load_dotenv_missing_file(self):
        """Test that missing .env gives empty dict"""
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(load_dotenv(os.path.join(tmpdir, ".env")), {})

    def test_load_dotenv_parses_pairs(self):
        """Test parsing of key-value pairs, comments and quotes"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, ".env")
            with open(path, "w") as f:
                f.write('# comment\nLATEX_TEST_A="one"\n\nLATEX_TEST_B = two=2\ngarbage\n')

            try:
                result = load_dotenv(path)
                self.assertEqual(result, {"LATEX_TEST_A": "one", "LATEX_TEST_B": "two=2"})
                self.assertEqual(os.environ["LATEX_TEST_A"], "one")
            finally:
                os.environ.pop("LATEX_TEST_A", None)
                os.environ.pop("LATEX_TEST_B", None)

    def test_load_dotenv_does_not_override_environment(self):
        """Test that already exported variables win"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, ".env")
            with open(path, "w") as f:
                f.write("LATEX_TEST_C=file\n")

            os.environ["LATEX_TEST_C"] = "exported"
            try:
                load_dotenv(path)
                self.assertEqual(os.environ["LATEX_TEST_C"], "exported")
            finally:
                os.environ.pop("LATEX_TEST_C", None)

    def test_load_dotenv_without_populating(self):
        """Test populateEnv=False leaves environment alone"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, ".env")
            with open(path, "w") as f:
                f.write("LATEX_TEST_D=1\n")

            self.assertEqual(load_dotenv(path, populateEnv=False), {"LATEX_TEST_D": "1"})
            self.assertNotIn("LATEX_TEST_D", os.environ)


if __name__ == "__main__":
    unittest.main()
