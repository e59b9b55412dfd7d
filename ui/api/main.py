"""FastAPI layer that exposes segmentation, ingest and retrieval operations."""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, Query as FastAPIQuery, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from application.use_cases.ingest_documents import ingest_document
from application.use_cases.manage_documents import delete_document, get_document
from application.use_cases.search import (
    build_grounding_context,
    document_text,
    explain_concept_context,
    find_relevant_chunks,
)
from domain.entities import Chunk, Document, ScoredChunk
from domain.errors import (
    DocumentNotFoundError,
    ExtractionError,
    InvalidParameterError,
    NoRelevantContentError,
)
from infrastructure.config import Container, ContainerConfig, build_default_container
from infrastructure.splitting.paragraph_splitter import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE, segment
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor
from ui.logging_utils import setup_logging

app = FastAPI(title="StudyLens API")


@lru_cache(maxsize=1)
def get_container() -> Container:
    setup_logging()
    return build_default_container(ContainerConfig.from_env())


class ChunkPayload(BaseModel):
    content: str
    chunk_index: int
    page_number: int = 0

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkPayload":
        return cls(content=chunk.content, chunk_index=chunk.chunk_index, page_number=chunk.page_number)


class ScoredChunkPayload(ChunkPayload):
    score: float
    raw_score: float
    matched_words: int

    @classmethod
    def from_result(cls, result: ScoredChunk) -> "ScoredChunkPayload":
        return cls(
            content=result.content,
            chunk_index=result.chunk_index,
            page_number=result.page_number,
            score=result.score,
            raw_score=result.raw_score,
            matched_words=result.matched_words,
        )


class SegmentRequest(BaseModel):
    text: str
    target_size: int = DEFAULT_TARGET_SIZE
    overlap: int = DEFAULT_OVERLAP


class SegmentResponse(BaseModel):
    chunks: list[ChunkPayload]


class DocumentRequest(BaseModel):
    id: str
    content: str
    title: str = ""


class DocumentResponse(BaseModel):
    id: str
    title: str
    status: str
    chunk_count: int | None = None

    @classmethod
    def from_document(cls, document: Document) -> "DocumentResponse":
        return cls(
            id=document.id,
            title=document.title,
            status=document.status,
            chunk_count=document.metadata.get("chunk_count"),
        )


class SearchResponse(BaseModel):
    query: str
    results: list[ScoredChunkPayload]
    context: str


class TextResponse(BaseModel):
    document_id: str
    text: str


class ExplainResponse(BaseModel):
    concept: str
    context: str = Field(description="Grounding text for the concept explanation")


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(InvalidParameterError)
async def invalid_parameter_handler(request: Request, exc: InvalidParameterError) -> JSONResponse:
    return _error(422, exc)


@app.exception_handler(ExtractionError)
async def extraction_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    return _error(422, exc)


@app.exception_handler(DocumentNotFoundError)
async def not_found_handler(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
    return _error(404, exc)


@app.exception_handler(NoRelevantContentError)
async def no_content_handler(request: Request, exc: NoRelevantContentError) -> JSONResponse:
    return _error(404, exc)


@app.post("/segment", response_model=SegmentResponse)
def segment_endpoint(payload: SegmentRequest) -> SegmentResponse:
    chunks = segment(payload.text, payload.target_size, payload.overlap)
    return SegmentResponse(chunks=[ChunkPayload.from_chunk(chunk) for chunk in chunks])


@app.post("/documents", response_model=DocumentResponse, status_code=201)
def ingest_endpoint(payload: DocumentRequest, container: Container = Depends(get_container)) -> DocumentResponse:
    document = ingest_document(
        payload.id,
        payload.content,
        extractor=PlainTextExtractor(),
        splitter=container.splitter,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
        title=payload.title,
    )
    return DocumentResponse.from_document(document)


@app.get("/documents", response_model=list[DocumentResponse])
def documents_endpoint(container: Container = Depends(get_container)) -> list[DocumentResponse]:
    return [DocumentResponse.from_document(doc) for doc in container.document_repository.list()]


@app.get("/documents/{document_id}", response_model=DocumentResponse)
def document_endpoint(document_id: str, container: Container = Depends(get_container)) -> DocumentResponse:
    document = get_document(document_id, document_repository=container.document_repository)
    return DocumentResponse.from_document(document)


@app.delete("/documents/{document_id}", status_code=204)
def delete_endpoint(document_id: str, container: Container = Depends(get_container)) -> Response:
    delete_document(
        document_id,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
    )
    return Response(status_code=204)


@app.get("/documents/{document_id}/chunks", response_model=list[ChunkPayload])
def chunks_endpoint(document_id: str, container: Container = Depends(get_container)) -> list[ChunkPayload]:
    get_document(document_id, document_repository=container.document_repository)
    return [ChunkPayload.from_chunk(chunk) for chunk in container.chunk_repository.list_for_document(document_id)]


@app.get("/documents/{document_id}/search", response_model=SearchResponse)
def search_endpoint(
    document_id: str,
    q: str = FastAPIQuery(..., description="User query"),
    max_results: int | None = FastAPIQuery(None, ge=0),
    container: Container = Depends(get_container),
) -> SearchResponse:
    results = find_relevant_chunks(
        document_id,
        q,
        retriever=container.retriever,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
        max_results=container.max_results if max_results is None else max_results,
    )
    return SearchResponse(
        query=q,
        results=[ScoredChunkPayload.from_result(result) for result in results],
        context=build_grounding_context(results),
    )


@app.get("/documents/{document_id}/text", response_model=TextResponse)
def text_endpoint(document_id: str, container: Container = Depends(get_container)) -> TextResponse:
    text = document_text(
        document_id,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
    )
    return TextResponse(document_id=document_id, text=text)


@app.get("/documents/{document_id}/explain", response_model=ExplainResponse)
def explain_endpoint(
    document_id: str,
    concept: str = FastAPIQuery(..., min_length=1),
    container: Container = Depends(get_container),
) -> ExplainResponse:
    context = explain_concept_context(
        document_id,
        concept,
        retriever=container.retriever,
        document_repository=container.document_repository,
        chunk_repository=container.chunk_repository,
        max_results=container.max_results,
    )
    return ExplainResponse(concept=concept, context=context)
