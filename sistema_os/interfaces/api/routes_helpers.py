"""Shared helpers for API route handlers."""

from __future__ import annotations

from fastapi import HTTPException, status

from sistema_os.domain.errors import NotFound, StoreError


def http_error_for(exc: Exception) -> HTTPException:
    """Translate a store or validation failure into the HTTP error returned."""

    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Serviço de armazenamento indisponível",
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


__all__ = ["http_error_for"]
