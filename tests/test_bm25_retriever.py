import importlib.util
import unittest

from domain.entities import Chunk


def _chunks(*contents: str) -> list[Chunk]:
    return [Chunk(content=content, chunk_index=index) for index, content in enumerate(contents)]


@unittest.skipIf(importlib.util.find_spec("rank_bm25") is None, "rank_bm25 not installed")
class TestBm25Retriever(unittest.TestCase):
    def setUp(self) -> None:
        from infrastructure.query.bm25_retriever import Bm25Retriever

        self.retriever = Bm25Retriever()

    def test_ranks_matching_chunk_first(self):
        chunks = _chunks(
            "the cell wall protects plant cells",
            "osmosis moves water across membranes",
            "ribosomes build proteins",
        )

        results = self.retriever.find_relevant(chunks, "How does osmosis move water?", 1)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].chunk_index, 1)
        self.assertEqual(results[0].matched_words, 2)
        self.assertGreater(results[0].raw_score, 0.0)

    def test_query_without_usable_terms_falls_back_to_leading_chunks(self):
        chunks = _chunks("one", "two", "three", "four")

        results = self.retriever.find_relevant(chunks, "the and of", 2)

        self.assertEqual([result.chunk for result in results], chunks[:2])

    def test_empty_inputs_return_nothing(self):
        self.assertEqual(self.retriever.find_relevant([], "osmosis"), [])
        self.assertEqual(self.retriever.find_relevant(_chunks("osmosis"), None), [])

    def test_results_are_drawn_from_input(self):
        chunks = _chunks("alpha beta", "beta gamma", "gamma delta", "delta alpha", "epsilon")

        results = self.retriever.find_relevant(chunks, "alpha gamma", 5)

        self.assertTrue(results)
        for result in results:
            self.assertIn(result.chunk, chunks)

    def test_punctuation_only_chunks_do_not_break_scoring(self):
        chunks = _chunks("...", "!!!")

        results = self.retriever.find_relevant(chunks, "anything", 2)

        self.assertEqual([result.chunk_index for result in results], [0, 1])


if __name__ == "__main__":
    unittest.main()
