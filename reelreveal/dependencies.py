"""
FastAPI dependency providers.
Collaborators are built per request from settings, so tests can swap any
layer through `app.dependency_overrides`.
"""
from __future__ import annotations
from fastapi import Depends

from .ai.generators import TextGenerator, build_generator
from .clients.tmdb import TMDBClient
from .config import Settings, settings
from .services.insight_service import InsightService
from .services.search_service import FilmCatalog, FilmSearchService


def get_settings() -> Settings:
    return settings


def get_film_catalog(cfg: Settings = Depends(get_settings)) -> FilmCatalog:
    return TMDBClient(cfg)


def get_text_generator(cfg: Settings = Depends(get_settings)) -> TextGenerator:
    return build_generator(cfg)


def get_search_service(catalog: FilmCatalog = Depends(get_film_catalog)) -> FilmSearchService:
    return FilmSearchService(catalog)


def get_insight_service(generator: TextGenerator = Depends(get_text_generator)) -> InsightService:
    return InsightService(generator)
