"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services orchestrate repositories, convert ORM models to response
schemas, and raise HTTP errors for missing or conflicting resources.
"""
