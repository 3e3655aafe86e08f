"""Shared dependencies for API routes.

Long-lived clients are created in the app lifespan and live on `app.state`;
the core objects built here receive them explicitly.
"""

import httpx
from fastapi import Depends, Request

from config import settings
from services.batch_analyzer import BatchAnalyzer, EmptyStorePolicy
from services.llm_client import GeminiClient
from services.llm_scorer import LLMScorer
from services.object_store import ObjectStore, build_object_store
from services.text_extractor import build_text_extractor


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_llm_client(request: Request) -> GeminiClient:
    return request.app.state.llm_client


def get_object_store(http_client: httpx.AsyncClient = Depends(get_http_client)) -> ObjectStore:
    return build_object_store(settings, http_client)


def get_batch_analyzer(
    store: ObjectStore = Depends(get_object_store),
    http_client: httpx.AsyncClient = Depends(get_http_client),
    llm_client: GeminiClient = Depends(get_llm_client),
) -> BatchAnalyzer:
    return BatchAnalyzer(
        extractor=build_text_extractor(settings, http_client),
        scorer=LLMScorer(llm_client),
        store=store,
        inter_call_delay=settings.inter_call_delay_seconds,
        empty_store_policy=EmptyStorePolicy(settings.empty_store_policy),
    )
