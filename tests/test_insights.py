import unittest

from answergraph.graph.build import GRAY
from answergraph.graph.insights import (
    CONTEXT_QUESTION,
    fallback_insights,
    generate_insights,
    keyword_questions,
)
from answergraph.graph.models import Node


def _node(label: str, cluster: int, score: float = 1.0) -> Node:
    return Node(id=label.lower(), label=label, size=5, color=GRAY, cluster=cluster, type="Thing", score=score)


class TestGenerateInsights(unittest.TestCase):
    def test_pairing_question_uses_top_scores(self):
        nodes = [_node("Warsaw", 2, 3.0), _node("Marie Curie", 0, 9.0), _node("Radium", 5, 5.0)]
        ins = generate_insights(nodes, "")
        self.assertEqual(ins.questions[0], "What is the relationship between Marie Curie and Radium?")
        self.assertEqual(len(ins.questions), 3)
        self.assertEqual(ins.questions[-1], CONTEXT_QUESTION)

    def test_pairing_question_omitted_for_single_node(self):
        ins = generate_insights([_node("Paris", 2)], "")
        self.assertEqual(len(ins.questions), 2)
        for q in ins.questions:
            self.assertNotIn("None", q)

    def test_clusters_bucketed_and_empty_omitted(self):
        nodes = [_node(f"P{i}x", 0) for i in range(7)] + [_node("Moon", 5)]
        ins = generate_insights(nodes, "")
        labels = [c.label for c in ins.clusters]
        self.assertEqual(labels, ["People & Organizations", "Concepts & Things"])
        self.assertEqual(len(ins.clusters[0].concepts), 5)
        self.assertEqual(ins.clusters[1].id, 2)
        self.assertEqual(ins.clusters[1].concepts, ["Moon"])

    def test_gaps_are_generic(self):
        self.assertEqual(len(generate_insights([], "").gaps), 3)


class TestFallbackInsights(unittest.TestCase):
    def test_questions_from_entities_and_concepts(self):
        ins = fallback_insights(["Apple", "California", "Inc"], ["iphone", "announced"], "Apple in California")
        self.assertEqual(
            ins.questions,
            [
                "How do Apple and California relate to the main topic?",
                "What are the implications of iphone and announced?",
                CONTEXT_QUESTION,
            ],
        )
        self.assertEqual([c.label for c in ins.clusters], ["Key Entities", "Main Concepts"])

    def test_conclusion_triggers_implications_question(self):
        ins = fallback_insights([], [], "In conclusion, growth slowed.")
        self.assertIn("What are the key implications of these findings?", ins.questions)

    def test_empty_input_still_has_questions(self):
        ins = fallback_insights([], [], "")
        self.assertEqual(ins.questions, [CONTEXT_QUESTION])
        self.assertEqual(ins.clusters, [])
        self.assertEqual(len(ins.gaps), 3)

    def test_clusters_capped(self):
        ins = fallback_insights([f"E{i}xx" for i in range(9)], [], "")
        self.assertEqual(len(ins.clusters), 1)
        self.assertEqual(len(ins.clusters[0].concepts), 5)


class TestKeywordQuestions(unittest.TestCase):
    def test_keywords(self):
        qs = keyword_questions("The summary of the data suggests we recommend a pilot.")
        self.assertEqual(
            qs,
            [
                "What are the key implications of these findings?",
                "What additional data would strengthen this analysis?",
                "What are the potential risks of implementing these recommendations?",
            ],
        )

    def test_generic_only(self):
        qs = keyword_questions("Nothing special here.")
        self.assertEqual(
            qs,
            [
                "How does this relate to other parts of the document?",
                "What questions does this raise for further investigation?",
            ],
        )


if __name__ == "__main__":
    unittest.main()
