"""
Main Application Entry Point

FastAPI application for LLM translation with per-user history.
Run with: uvicorn main:app --reload
"""

from core.app_factory import create_app

app = create_app()
