"""
FastAPI Dependency Providers for the Program Import API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Auth providers extract user from headers

Usage in routers:
    from api.deps import get_import_repo, get_current_user
    from application.ports import ProgramImportRepository

    @router.post("/programs/import")
    def import_program(
        user_id: str = Depends(get_current_user),
        import_repo: ProgramImportRepository = Depends(get_import_repo),
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_import_repo] = lambda: FakeProgramImportRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

from application.ports import ProgramImportRepository
from application.use_cases import ImportProgramUseCase
from infrastructure.db import SupabaseProgramImportRepository
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.
    Raises HTTPException 503 if database is not available.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_import_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramImportRepository:
    """
    Get ProgramImportRepository implementation.

    Returns a SupabaseProgramImportRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.

    Args:
        client: Supabase client (injected)

    Returns:
        ProgramImportRepository: Repository for program import persistence
    """
    return SupabaseProgramImportRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_import_program_use_case(
    import_repo: ProgramImportRepository = Depends(get_import_repo),
) -> ImportProgramUseCase:
    """
    Get ImportProgramUseCase with injected repository.

    Args:
        import_repo: Program import repository (injected)

    Returns:
        ImportProgramUseCase: Use case for spreadsheet imports
    """
    return ImportProgramUseCase(import_repo=import_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the current authenticated user ID.

    Extracts user ID from the Authorization header.
    Supports Bearer token authentication via Clerk.

    Args:
        authorization: Bearer token header
        settings: Application settings (injected)

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
        RuntimeError: If auth stub is used in production
    """
    # Block production deployment with the auth stub
    if settings.is_production:
        raise RuntimeError(
            "Authentication stub cannot be used in production. "
            "Implement proper Clerk JWT validation before deploying."
        )

    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing authorization header",
        )

    # Extract bearer token
    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format",
        )

    token = authorization[7:]  # Remove "Bearer " prefix

    # TODO: Validate the token against Clerk's JWKS and read the user id from its claims
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
        )

    # Stub: token doubles as the user id
    return token


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_import_repo",
    # Use cases
    "get_import_program_use_case",
    # Authentication
    "get_current_user",
]
