"""
Pydantic schema definitions for API payloads.

Users and exercises each define their request and response models.
Schemas are separated from the storage layer to decouple the API
representation from the table layout.
"""
