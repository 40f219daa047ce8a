"""Pydantic Schemas — request and response shapes for API endpoints.

Invariants:
    - Schemas are built from documents explicitly (from_document), never leak ORM objects
    - Request payloads pass core/request_rules.py first; requests.py then types them

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
