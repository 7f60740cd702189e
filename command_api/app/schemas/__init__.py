"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persisted ``Command`` entity to
decouple the API representation from storage.
"""
