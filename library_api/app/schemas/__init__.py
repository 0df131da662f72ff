"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persistence records in ``app.models``
to decouple the API representation from storage.
"""
