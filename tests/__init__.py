# tests/__init__.py
"""
Test suite for the flyer backend.

Organization:
- `core`: snapshot resolver, owner scoping and token/password helpers,
  exercised directly against an in-memory database session.
- `http_api`: route-level tests through FastAPI's TestClient.
"""
