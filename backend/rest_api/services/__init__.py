"""
Services module for business logic.

- domain/: Application services and the visibility cascade engine - USE THESE
- crud/: Soft delete and audit trail helpers
- base_service: Transaction boundary and CRUD skeleton

Usage:
    from rest_api.services.domain import CategoryService
    service = CategoryService(db)
"""
