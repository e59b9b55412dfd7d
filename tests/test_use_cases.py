import tempfile
import unittest
from pathlib import Path

from application.use_cases.ingest_documents import ingest_document
from application.use_cases.manage_documents import delete_document, get_document
from application.use_cases.ingest_paths import ingest_paths
from application.use_cases.search import (
    build_grounding_context,
    document_text,
    explain_concept_context,
    find_relevant_chunks,
)
from domain.entities import Document
from domain.errors import DocumentNotFoundError, ExtractionError, NoRelevantContentError
from infrastructure.query.keyword_retriever import KeywordRetriever
from infrastructure.repositories import SqliteChunkRepository, SqliteDocumentRepository
from infrastructure.splitting.paragraph_splitter import ParagraphSplitter
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor

NOTES = (
    "Photosynthesis converts light energy into chemical energy.\n\n"
    "Chlorophyll absorbs mostly blue and red light.\n\n"
    "Cellular respiration releases energy stored in glucose.\n\n"
    "Mitochondria are the site of aerobic respiration."
)


class UseCaseTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp.name) / "studylens.db"
        self.documents = SqliteDocumentRepository(db_path=db_path)
        self.chunks = SqliteChunkRepository(db_path=db_path)
        self.splitter = ParagraphSplitter(target_size=10, overlap=2)
        self.retriever = KeywordRetriever()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def ingest(self, document_id: str, source: str) -> Document:
        return ingest_document(
            document_id,
            source,
            extractor=PlainTextExtractor(),
            splitter=self.splitter,
            document_repository=self.documents,
            chunk_repository=self.chunks,
            title=f"{document_id}.txt",
        )


class TestIngestDocument(UseCaseTestCase):
    def test_ingest_stores_ready_document_and_chunks(self):
        document = self.ingest("bio", NOTES)

        stored = self.documents.get("bio")
        chunks = self.chunks.list_for_document("bio")
        self.assertEqual(document.status, "ready")
        self.assertEqual(stored.status, "ready")
        self.assertEqual(stored.title, "bio.txt")
        self.assertEqual(stored.metadata["chunk_count"], len(chunks))
        self.assertEqual(chunks, self.splitter.split(NOTES))

    def test_reingest_replaces_previous_chunks(self):
        self.ingest("bio", NOTES)
        self.ingest("bio", "Only one short paragraph now.")

        chunks = self.chunks.list_for_document("bio")
        self.assertEqual([chunk.content for chunk in chunks], ["Only one short paragraph now."])

    def test_failed_reingest_drops_previous_chunks(self):
        self.ingest("bio", NOTES)

        with self.assertRaises(ExtractionError):
            self.ingest("bio", "   ")

        self.assertEqual(self.documents.get("bio").status, "failed")
        self.assertEqual(self.chunks.list_for_document("bio"), [])
        self.assertEqual(
            document_text("bio", document_repository=self.documents, chunk_repository=self.chunks),
            "",
        )

    def test_empty_text_marks_document_failed(self):
        with self.assertRaises(ExtractionError):
            self.ingest("blank", "  \n\n ")

        self.assertEqual(self.documents.get("blank").status, "failed")
        self.assertEqual(self.chunks.list_for_document("blank"), [])

class TestManageDocuments(UseCaseTestCase):
    def test_get_document(self):
        self.ingest("bio", NOTES)

        document = get_document("bio", document_repository=self.documents)

        self.assertEqual(document.title, "bio.txt")
        self.assertEqual(document.status, "ready")

    def test_get_missing_document(self):
        with self.assertRaises(DocumentNotFoundError):
            get_document("missing", document_repository=self.documents)

    def test_delete_removes_document_and_chunks(self):
        self.ingest("bio", NOTES)
        self.ingest("other", "Unrelated notes about algebra.")

        delete_document("bio", document_repository=self.documents, chunk_repository=self.chunks)

        self.assertIsNone(self.documents.get("bio"))
        self.assertEqual(self.chunks.list_for_document("bio"), [])
        self.assertEqual(len(self.chunks.list_for_document("other")), 1)

    def test_delete_missing_document(self):
        with self.assertRaises(DocumentNotFoundError):
            delete_document("missing", document_repository=self.documents, chunk_repository=self.chunks)


class TestIngestPaths(UseCaseTestCase):
    def test_ingests_supported_files_from_directory(self):
        root = Path(self._tmp.name) / "notes"
        root.mkdir()
        (root / "bio.txt").write_text(NOTES, encoding="utf-8")
        (root / "empty.md").write_text("   ", encoding="utf-8")
        (root / "image.png").write_bytes(b"\x89PNG")

        report = ingest_paths(
            [root],
            splitter=self.splitter,
            document_repository=self.documents,
            chunk_repository=self.chunks,
        )

        self.assertEqual(report.total, 2)
        self.assertEqual(report.indexed, 1)
        self.assertEqual(len(report.errors), 1)
        self.assertTrue(report.errors[0].path.endswith("empty.md"))
        self.assertTrue(self.chunks.list_for_document(report.document_ids[0]))


class TestSearchUseCases(UseCaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.ingest("bio", NOTES)

    def test_find_relevant_chunks_uses_stored_sequence(self):
        results = find_relevant_chunks(
            "bio",
            "mitochondria respiration",
            retriever=self.retriever,
            document_repository=self.documents,
            chunk_repository=self.chunks,
            max_results=1,
        )

        self.assertEqual(len(results), 1)
        self.assertIn("Mitochondria", results[0].content)

    def test_find_relevant_chunks_for_missing_document(self):
        with self.assertRaises(DocumentNotFoundError):
            find_relevant_chunks(
                "missing",
                "anything",
                retriever=self.retriever,
                document_repository=self.documents,
                chunk_repository=self.chunks,
            )

    def test_grounding_context_keeps_result_order(self):
        results = find_relevant_chunks(
            "bio",
            "chlorophyll light",
            retriever=self.retriever,
            document_repository=self.documents,
            chunk_repository=self.chunks,
            max_results=2,
        )

        context = build_grounding_context(results)

        self.assertEqual(context, "\n\n".join(result.content for result in results))
        self.assertEqual(build_grounding_context([]), "")

    def test_document_text_joins_chunks(self):
        text = document_text("bio", document_repository=self.documents, chunk_repository=self.chunks)

        expected = "\n\n".join(chunk.content for chunk in self.chunks.list_for_document("bio"))
        self.assertEqual(text, expected)

    def test_document_text_falls_back_to_content(self):
        self.documents.add(Document(id="raw", content="unsegmented text", status="ready"))

        text = document_text("raw", document_repository=self.documents, chunk_repository=self.chunks)

        self.assertEqual(text, "unsegmented text")

    def test_explain_concept_returns_context(self):
        context = explain_concept_context(
            "bio",
            "glucose",
            retriever=self.retriever,
            document_repository=self.documents,
            chunk_repository=self.chunks,
        )

        self.assertIn("glucose", context)

    def test_explain_concept_without_chunks(self):
        self.documents.add(Document(id="raw", content="", status="ready"))

        with self.assertRaises(NoRelevantContentError):
            explain_concept_context(
                "raw",
                "glucose",
                retriever=self.retriever,
                document_repository=self.documents,
                chunk_repository=self.chunks,
            )


if __name__ == "__main__":
    unittest.main()
