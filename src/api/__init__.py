"""
HTTP API for RecruitCRM search.

Exposes candidate CRUD, embedding rebuilds and semantic search through a
FastAPI application factory.
"""

from .app import create_app

__all__ = ["create_app"]
