from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, constr

from chatrag.config import Settings


class MessageType(str, Enum):
    HUMAN = "human"
    AI = "ai"


class Message(BaseModel):
    """One chat turn, tagged with who said it."""

    model_config = ConfigDict(frozen=True)

    text: str
    type: MessageType


class RetrieverConfig(BaseModel):
    """Static wiring for the embedding client, vector store and retriever view."""

    model_config = ConfigDict(frozen=True)

    ollama_base_url: str = "http://localhost:11434"
    embedding_model: str = "nomic-embed-text"
    table_name: str = "documents"
    query_name: str = "match_documents"
    k: int = Field(default=4, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetrieverConfig":
        return cls(
            ollama_base_url=settings.ollama_base_url,
            embedding_model=settings.embedding_model,
            table_name=settings.documents_table,
            query_name=settings.match_query_name,
            k=settings.retriever_k,
        )


class FormatHistoryRequest(BaseModel):
    messages: List[Message] = Field(default_factory=list)


class FormatHistoryResponse(BaseModel):
    transcript: str


class RetrieveRequest(BaseModel):
    question: constr(strip_whitespace=True, min_length=1)


class RetrievedDocument(BaseModel):
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RetrieveResponse(BaseModel):
    documents: List[RetrievedDocument] = Field(default_factory=list)
    context: str = ""


class HealthResponse(BaseModel):
    status: str
    retriever: str
    embedding_model: str
    table: str
