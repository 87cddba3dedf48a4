"""FastAPI dependencies backed by components on app.state."""
from fastapi import Request

from email_waterfall_api.settings import Settings
from email_waterfall_core.jobs import JobStore
from email_waterfall_core.providers import BaseProvider
from email_waterfall_core.validation import ValidationOrchestrator


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> JobStore:
    return request.app.state.store


def get_orchestrator(request: Request) -> ValidationOrchestrator:
    return request.app.state.orchestrator


def get_providers(request: Request) -> list[BaseProvider]:
    return list(request.app.state.validator.providers)
