"""Endpoints exposing the notifications visible to the authenticated user."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inbox.application.use_cases.notifications import (
    count_unread_for_type as count_unread_for_type_uc,
    get_max_notification_id as get_max_notification_id_uc,
    get_notification_totals as get_notification_totals_uc,
    list_notifications as list_notifications_uc,
    list_recent_notification_ids as list_recent_notification_ids_uc,
)
from inbox.domain.entities import Notification, User
from inbox.infrastructure.database import get_db
from inbox.infrastructure.queries import (
    DEFAULT_LIMIT,
    RECENT_LIMIT,
    NotificationOrder,
    NotificationQueryError,
    ReadFilter,
)
from inbox.interfaces.api.dependencies import get_current_active_user
from inbox.interfaces.api.schemas import (
    MaxIdRead,
    NotificationRead,
    NotificationReadStatus,
    NotificationTotalsRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _unavailable(exc: NotificationQueryError) -> HTTPException:
    logger.warning("Consulta de notificaciones no disponible: %s", exc)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(0, ge=0),
    types: list[int] | None = Query(
        None, description="Limita el listado a los tipos de notificación indicados."
    ),
    read_filter: ReadFilter | None = Query(None, alias="filter"),
    order: NotificationOrder = NotificationOrder.DESC,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Devuelve las notificaciones visibles del usuario autenticado."""

    try:
        notifications = list_notifications_uc(
            db,
            current_user=current_user,
            limit=limit,
            offset=offset,
            types=types,
            read_filter=read_filter,
            order=order,
        )
    except NotificationQueryError as exc:
        raise _unavailable(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/recent", response_model=list[NotificationReadStatus])
def list_recent_notifications(
    limit: int = Query(RECENT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationReadStatus]:
    """Devuelve los identificadores recientes con su estado de lectura."""

    try:
        pairs = list_recent_notification_ids_uc(db, current_user=current_user, limit=limit)
    except NotificationQueryError as exc:
        raise _unavailable(exc) from exc
    return [NotificationReadStatus(id=notification_id, read=read) for notification_id, read in pairs]


@router.get("/totals", response_model=NotificationTotalsRead)
def read_notification_totals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationTotalsRead:
    """Devuelve los contadores de notificaciones no leídas."""

    try:
        totals = get_notification_totals_uc(db, current_user=current_user)
    except NotificationQueryError as exc:
        raise _unavailable(exc) from exc
    return NotificationTotalsRead(**asdict(totals))


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count_for_type(
    notification_type: int = Query(..., ge=1),
    since: datetime | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    """Cuenta las notificaciones no leídas de un tipo concreto."""

    try:
        count = count_unread_for_type_uc(
            db,
            current_user=current_user,
            notification_type=notification_type,
            since=since,
        )
    except NotificationQueryError as exc:
        raise _unavailable(exc) from exc
    return UnreadCountRead(notification_type=notification_type, count=count)


@router.get("/max-id", response_model=MaxIdRead)
def read_max_notification_id(
    since_id: int | None = Query(None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MaxIdRead:
    """Devuelve el identificador más alto entre las notificaciones visibles."""

    try:
        max_id = get_max_notification_id_uc(db, current_user=current_user, since_id=since_id)
    except NotificationQueryError as exc:
        raise _unavailable(exc) from exc
    return MaxIdRead(max_id=max_id)
