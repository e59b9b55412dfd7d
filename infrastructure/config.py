"""Dependency wiring for the StudyLens application."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal, Mapping

from domain.errors import InvalidParameterError
from domain.interfaces import (
    ChunkRepository,
    ChunkRetriever,
    ChunkSplitter,
    DocumentRepository,
)
from infrastructure.query.bm25_retriever import Bm25Retriever
from infrastructure.query.keyword_retriever import (
    DEFAULT_MAX_RESULTS,
    KeywordRetriever,
    ScoringWeights,
    validate_max_results,
)
from infrastructure.repositories.sqlite_chunk_repository import SqliteChunkRepository
from infrastructure.repositories.sqlite_document_repository import SqliteDocumentRepository
from infrastructure.splitting.paragraph_splitter import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE, ParagraphSplitter


RetrieverName = Literal["keyword", "bm25"]

ENV_PREFIX = "STUDYLENS_"
DB_FILENAME = "studylens.db"


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    splitter: ChunkSplitter
    retriever: ChunkRetriever
    document_repository: DocumentRepository
    chunk_repository: ChunkRepository
    max_results: int = DEFAULT_MAX_RESULTS


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for selecting implementations and tuning chunking and scoring."""

    retriever: RetrieverName = "keyword"
    chunk_size: int = DEFAULT_TARGET_SIZE
    chunk_overlap: int = DEFAULT_OVERLAP
    max_results: int = DEFAULT_MAX_RESULTS
    data_root: str = "data"
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    @property
    def db_path(self) -> Path:
        return Path(self.data_root) / DB_FILENAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContainerConfig":
        """Build a config from ``STUDYLENS_*`` variables, keeping defaults for unset ones."""

        env = os.environ if environ is None else environ
        defaults = cls()
        base_weights = defaults.weights

        def read(name: str, default, cast):
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw == "":
                return default
            try:
                return cast(raw)
            except ValueError as exc:
                raise InvalidParameterError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from exc

        return cls(
            retriever=read("RETRIEVER", defaults.retriever, str),
            chunk_size=read("CHUNK_SIZE", defaults.chunk_size, int),
            chunk_overlap=read("CHUNK_OVERLAP", defaults.chunk_overlap, int),
            max_results=read("MAX_RESULTS", defaults.max_results, int),
            data_root=read("DATA_ROOT", defaults.data_root, str),
            weights=ScoringWeights(
                exact_match=read("EXACT_MATCH_WEIGHT", base_weights.exact_match, float),
                partial_match=read("PARTIAL_MATCH_WEIGHT", base_weights.partial_match, float),
                co_occurrence=read("CO_OCCURRENCE_WEIGHT", base_weights.co_occurrence, float),
                position=read("POSITION_WEIGHT", base_weights.position, float),
            ),
        )


_RETRIEVER_FACTORIES: dict[RetrieverName, Callable[[ScoringWeights], ChunkRetriever]] = {
    "keyword": KeywordRetriever,
    "bm25": Bm25Retriever,
}


def build_retriever(config: ContainerConfig) -> ChunkRetriever:
    try:
        return _RETRIEVER_FACTORIES[config.retriever](config.weights)
    except KeyError as exc:
        raise InvalidParameterError(f"Unknown retriever '{config.retriever}'") from exc


def build_splitter(config: ContainerConfig) -> ChunkSplitter:
    return ParagraphSplitter(target_size=config.chunk_size, overlap=config.chunk_overlap)


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack, creating the database if needed."""

    cfg = config or ContainerConfig()
    retriever = build_retriever(cfg)
    splitter = build_splitter(cfg)
    validate_max_results(cfg.max_results)

    cfg.db_path.parent.mkdir(parents=True, exist_ok=True)
    document_repository = SqliteDocumentRepository(db_path=cfg.db_path)
    chunk_repository = SqliteChunkRepository(db_path=cfg.db_path)

    return Container(
        splitter=splitter,
        retriever=retriever,
        document_repository=document_repository,
        chunk_repository=chunk_repository,
        max_results=cfg.max_results,
    )


__all__ = [
    "Container",
    "ContainerConfig",
    "build_default_container",
    "build_retriever",
    "build_splitter",
]
