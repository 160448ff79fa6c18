from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document
from pydantic import SecretStr, ValidationError

from chatrag.config import settings
from chatrag.database import get_supabase_client
from chatrag.exceptions import RetrieverConfigurationError
from chatrag.models import RetrieverConfig
from chatrag.rag.embeddings import build_embeddings
from chatrag.rag.retriever import (
    build_retriever, format_documents, get_retriever, retrieve_documents
)


@pytest.fixture(autouse=True)
def clear_cached_clients():
    get_retriever.cache_clear()
    get_supabase_client.cache_clear()
    yield
    get_retriever.cache_clear()
    get_supabase_client.cache_clear()


def test_default_config_values():
    config = RetrieverConfig()
    assert config.embedding_model == "nomic-embed-text"
    assert config.ollama_base_url == "http://localhost:11434"
    assert config.table_name == "documents"
    assert config.query_name == "match_documents"
    assert config.k == 4


def test_config_rejects_non_positive_k():
    with pytest.raises(ValidationError):
        RetrieverConfig(k=0)


def test_config_from_settings():
    assert RetrieverConfig.from_settings(settings) == RetrieverConfig()


@patch("chatrag.rag.vectorstore.SupabaseVectorStore")
@patch("chatrag.rag.embeddings.OllamaEmbeddings")
def test_build_retriever_passes_configuration(mock_embeddings, mock_store):
    client = MagicMock()

    retriever = build_retriever(RetrieverConfig(), client=client)

    mock_embeddings.assert_called_once_with(
        model="nomic-embed-text",
        base_url="http://localhost:11434",
    )
    mock_store.assert_called_once_with(
        embedding=mock_embeddings.return_value,
        client=client,
        table_name="documents",
        query_name="match_documents",
    )
    mock_store.return_value.as_retriever.assert_called_once_with(
        search_kwargs={"k": 4}
    )
    assert retriever is mock_store.return_value.as_retriever.return_value


@patch("chatrag.rag.vectorstore.SupabaseVectorStore")
@patch("chatrag.rag.embeddings.OllamaEmbeddings")
def test_build_retriever_uses_injected_embeddings(mock_embeddings, mock_store):
    embeddings = MagicMock()

    build_retriever(RetrieverConfig(k=2), client=MagicMock(), embeddings=embeddings)

    mock_embeddings.assert_not_called()
    assert mock_store.call_args.kwargs["embedding"] is embeddings
    mock_store.return_value.as_retriever.assert_called_once_with(
        search_kwargs={"k": 2}
    )


def test_build_retriever_with_real_collaborator_objects():
    client = MagicMock()

    first = build_retriever(RetrieverConfig(), client=client)
    second = build_retriever(RetrieverConfig(), client=client)

    assert first is not second
    for retriever in (first, second):
        assert retriever.search_kwargs == {"k": 4}
        assert retriever.vectorstore.table_name == "documents"
        assert retriever.vectorstore.query_name == "match_documents"
    client.assert_not_called()


def test_build_embeddings_targets_local_ollama():
    embeddings = build_embeddings(RetrieverConfig())
    assert embeddings.model == "nomic-embed-text"
    assert embeddings.base_url == "http://localhost:11434"


@patch("chatrag.rag.retriever.build_retriever")
def test_get_retriever_is_built_once(mock_build):
    assert get_retriever() is get_retriever()
    mock_build.assert_called_once_with()


def test_missing_supabase_credentials():
    with patch.object(settings, "supabase_url", None), \
            patch.object(settings, "supabase_api_key", None):
        with pytest.raises(RetrieverConfigurationError):
            get_supabase_client()


@patch("chatrag.database.create_client")
def test_supabase_client_from_settings(mock_create_client):
    with patch.object(settings, "supabase_url", "https://example.supabase.co"), \
            patch.object(settings, "supabase_api_key", SecretStr("service-key")):
        client = get_supabase_client()
        assert get_supabase_client() is client

    mock_create_client.assert_called_once_with(
        "https://example.supabase.co", "service-key"
    )


def test_retrieve_documents_skips_blank_question():
    retriever = MagicMock()
    assert retrieve_documents("   ", retriever=retriever) == []
    retriever.invoke.assert_not_called()


def test_retrieve_documents_delegates_to_retriever():
    docs = [Document(page_content="Supabase stores embeddings.")]
    retriever = MagicMock()
    retriever.invoke.return_value = docs

    assert retrieve_documents("Where are embeddings stored?", retriever=retriever) == docs
    retriever.invoke.assert_called_once_with("Where are embeddings stored?")


def test_retrieve_documents_propagates_collaborator_errors():
    retriever = MagicMock()
    retriever.invoke.side_effect = ConnectionError("ollama unreachable")

    with pytest.raises(ConnectionError):
        retrieve_documents("hello", retriever=retriever)


def test_format_documents():
    docs = [Document(page_content="first"), Document(page_content="second")]
    assert format_documents(docs) == "first\n\nsecond"
    assert format_documents([]) == ""
