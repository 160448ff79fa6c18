import structlog
from fastapi import APIRouter, HTTPException

from chatrag.config import settings
from chatrag.exceptions import RetrieverConfigurationError
from chatrag.models import (
    FormatHistoryRequest, FormatHistoryResponse,
    RetrieveRequest, RetrieveResponse, RetrievedDocument,
    HealthResponse,
)
from chatrag.rag.retriever import format_documents, retrieve_documents
from chatrag.services.history import format_conv_history

logger = structlog.get_logger()
router = APIRouter()


@router.post("/api/history/format", response_model=FormatHistoryResponse)
async def format_history(request: FormatHistoryRequest):
    """Render chat history as a plain-text transcript"""
    transcript = format_conv_history(request.messages)
    logger.info("history_formatted", messages=len(request.messages))
    return FormatHistoryResponse(transcript=transcript)


@router.post("/api/retrieve", response_model=RetrieveResponse)
def retrieve(request: RetrieveRequest):
    """Fetch the documents most similar to a question"""
    try:
        docs = retrieve_documents(request.question)
    except RetrieverConfigurationError as e:
        logger.error("retriever_not_configured", error=str(e))
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error("retrieval_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Retrieval failed: {str(e)}")

    return RetrieveResponse(
        documents=[
            RetrievedDocument(content=doc.page_content, metadata=doc.metadata)
            for doc in docs
        ],
        context=format_documents(docs),
    )


@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    retriever_status = "configured" if settings.supabase_configured else "unconfigured"

    return HealthResponse(
        status="healthy" if retriever_status == "configured" else "degraded",
        retriever=retriever_status,
        embedding_model=settings.embedding_model,
        table=settings.documents_table,
    )
