"""
Schemas module - Request/Response schemas for API endpoints.

Difference from stored documents:
- Documents: what MongoDB holds (ObjectIds, password hashes)
- Schemas: API contract (what client sends/receives)
"""
