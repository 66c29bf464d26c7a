import unittest

from answergraph.graph.extract import (
    extract_entities,
    norm_entity,
    slugify,
    top_concepts,
    word_frequencies,
)


class TestGraphExtract(unittest.TestCase):
    def test_extract_entities_finds_proper_nouns(self):
        text = "Carl Jung wrote about Analytical Psychology in New York."
        ents = extract_entities(text)
        self.assertIn("Carl Jung", ents)
        self.assertIn("New York", ents)
        self.assertIn("Analytical Psychology", ents)

    def test_extract_entities_words_and_phrases(self):
        ents = extract_entities("Apple Inc announced the iPhone in California.")
        self.assertEqual(ents, ["Apple", "Inc", "California", "Apple Inc"])

    def test_stopwords_are_skipped(self):
        self.assertEqual(extract_entities("The results were clear. However it rained."), ["However"])
        # A phrase starting with a stopword is rejected, its words are not.
        ents = extract_entities("When Marie Curie arrived.")
        self.assertNotIn("When Marie Curie", ents)
        self.assertEqual(ents, ["Marie", "Curie"])

    def test_acronyms(self):
        ents = extract_entities("NASA and the EU met with WHO and UNESCOX officials.")
        self.assertIn("NASA", ents)
        self.assertIn("WHO", ents)
        self.assertNotIn("EU", ents)
        self.assertNotIn("UNESCOX", ents)
        self.assertIn("EU", extract_entities("the EU", min_chars=2))

    def test_no_duplicates_and_min_length(self):
        samples = [
            "Paris is in France. Paris is big. PARIS!",
            "AI and ML are fields. IBM built Watson. Watson won.",
            "A B C. Ok Go. Xy Zz Qq.",
            "New York, New York! The City That Never Sleeps?",
        ]
        for text in samples:
            ents = extract_entities(text)
            self.assertEqual(len(ents), len(set(ents)), text)
            for e in ents:
                self.assertGreater(len(e), 2, (text, e))

    def test_empty_text(self):
        self.assertEqual(extract_entities(""), [])
        self.assertEqual(extract_entities("   \n\t "), [])

    def test_deterministic(self):
        text = "Ada Lovelace worked with Charles Babbage in London on the Analytical Engine."
        self.assertEqual(extract_entities(text), extract_entities(text))

    def test_norm_entity(self):
        self.assertEqual(norm_entity("  New   York "), "new york")

    def test_slugify(self):
        self.assertEqual(slugify("Apple  Inc"), "apple-inc")

    def test_word_frequencies(self):
        freqs = word_frequencies("Graph graph, graphs. Nodes would link (graph)")
        self.assertEqual(freqs, {"graph": 3, "graphs": 1, "nodes": 1})

    def test_top_concepts_ties_keep_first_seen_order(self):
        freqs = word_frequencies("alpha bravo charlie bravo delta")
        self.assertEqual(top_concepts(freqs), ["bravo", "alpha", "charlie", "delta"])
        self.assertEqual(top_concepts(freqs, limit=2), ["bravo", "alpha"])


if __name__ == "__main__":
    unittest.main()
