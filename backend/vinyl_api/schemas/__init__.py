"""Pydantic Schemas - request/response models for API endpoints.

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
