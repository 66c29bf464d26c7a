import unittest
from unittest import mock

from typer.testing import CliRunner

from answergraph.cli import app


TEXT = "Apple Inc announced the iPhone in California."


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_analyze_json(self):
        res = self.runner.invoke(app, ["analyze", TEXT, "--no-enrich", "--json", "--seed", "1"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn('"entityCount": 6', res.output)
        self.assertIn('"source": "fallback"', res.output)

    def test_analyze_table(self):
        res = self.runner.invoke(app, ["analyze", TEXT, "--no-enrich"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("source: fallback", res.output)
        self.assertIn("questions:", res.output)

    def test_questions(self):
        res = self.runner.invoke(app, ["questions", "In conclusion, sales grew.", "--no-enrich"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("What are the key implications of these findings?", res.output)

    def test_questions_basic_skips_graph(self):
        with mock.patch("answergraph.cli.generate_follow_up_questions") as full:
            res = self.runner.invoke(app, ["questions", "The data suggests a pilot.", "--basic"])
        self.assertEqual(res.exit_code, 0, res.output)
        full.assert_not_called()
        self.assertIn("What additional data would strengthen this analysis?", res.output)
        self.assertIn("What are the potential risks of implementing these recommendations?", res.output)
        self.assertIn("How does this relate to other parts of the document?", res.output)


if __name__ == "__main__":
    unittest.main()
