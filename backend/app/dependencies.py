"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException, status

from .database import SessionFactory, get_session_factory
from .services.errors import DuplicateRecordError, ManagementServiceError, RecordNotFoundError
from .services.gateway import SectorGateway, SqlAlchemySectorGateway
from .services.periods import PeriodKey


def get_sector_gateway(
    session_factory: SessionFactory = Depends(get_session_factory),
) -> SectorGateway:
    return SqlAlchemySectorGateway(session_factory)


def resolve_period(year: Optional[int], month: Optional[int], today: date) -> PeriodKey:
    """Fill only the missing parts from ``today``; explicit values pass through unchecked."""

    current = PeriodKey.from_date(today)
    return PeriodKey(year if year is not None else current.year, month if month is not None else current.month)


def http_error_from(exc: Exception) -> HTTPException:
    """Map a management service failure to the matching HTTP error."""

    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, DuplicateRecordError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ManagementServiceError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
