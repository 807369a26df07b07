"""Endpoints and websocket handler for fleet notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleetops.application.use_cases.notifications import (
    create_manual_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    run_automated_checks,
)
from fleetops.config import Settings
from fleetops.domain.entities import User
from fleetops.domain.errors import PersistenceFailure, Unauthorized
from fleetops.infrastructure.database import Database, get_db
from fleetops.infrastructure.notifications import notification_manager, serialize_notification
from fleetops.infrastructure.repositories import NotificationRepository
from fleetops.interfaces.api.access import Denied, authorize, require_identity
from fleetops.interfaces.api.dependencies import (
    get_app_settings,
    get_current_user,
    oauth2_scheme,
    require_admin,
)
from fleetops.interfaces.api.schemas import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationRead,
    OperationResult,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post("/check", response_model=OperationResult)
def run_notification_checks(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Run the automated fleet checks. Called by the scheduler."""

    try:
        report = run_automated_checks(db, settings=settings)
    except Exception:
        logger.exception("Notification check request failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to run notification checks"},
        )
    return OperationResult(
        success=True,
        message=(
            f"Notification checks completed: {report.created} created, "
            f"{report.retired + report.expired} cleared"
        ),
    )


def _mark_all_read_failure() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Failed to mark notifications as read"},
    )


def _mark_all_read(token: str | None, db: Session, settings: Settings):
    # Authorization runs in the handler: a failed user lookup answers with the failure body.
    try:
        user = require_identity(authorize(token, db, settings))
    except Unauthorized:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "error": "Unauthorized"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not resolve the caller of mark-all-read")
        return _mark_all_read_failure()

    try:
        updated = mark_all_notifications_read(db, user.id)
    except PersistenceFailure:
        logger.exception("Failed to mark notifications as read for user %s", user.id)
        return _mark_all_read_failure()
    return MarkAllReadResult(
        success=True, message="All notifications marked as read", updated=updated
    )


@router.post("/mark-all-read", response_model=MarkAllReadResult)
def mark_all_read(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Mark every active notification of the caller as read."""

    return _mark_all_read(token, db, settings)


@router.patch("/mark-all-read", response_model=MarkAllReadResult)
def mark_all_read_patch(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return _mark_all_read(token, db, settings)


@router.get("/", response_model=list[NotificationRead])
def read_notifications(
    include_read: bool = Query(False, description="Include notifications already read"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the caller's active notifications, most urgent first."""

    notifications = list_notifications(db, current_user.id, include_read=include_read)
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.put("/{notification_id}/read", response_model=OperationResult)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OperationResult:
    try:
        mark_notification_read(db, notification_id, user_id=current_user.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return OperationResult(success=True, message="Notification marked as read")


@router.post(
    "/",
    response_model=list[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    _: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Broadcast a manual notification. Requires administrator privileges."""

    try:
        notifications = create_manual_notification(
            db,
            settings=settings,
            title=payload.title,
            message=payload.message,
            notification_type=payload.type,
            priority=payload.priority,
            recipient_ids=payload.recipient_ids,
            action_url=payload.action_url,
            expires_at=payload.expires_at,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PersistenceFailure as exc:
        logger.exception("Failed to create manual notification")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create notification",
        ) from exc
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    database: Database = websocket.app.state.database
    settings: Settings = websocket.app.state.settings
    token = websocket.query_params.get("token")

    session = database.session()
    try:
        result = authorize(token, session, settings)
        if isinstance(result, Denied):
            await websocket.close(code=1008)
            return
        user = result.user
        pending_notifications = NotificationRepository(session).list_unread_for_user(user.id)
    except SQLAlchemyError:
        logger.exception("Could not open notification stream")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.register(user.id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {"type": "init", "data": [serialize_notification(n) for n in pending_notifications]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = database.session()
                    try:
                        NotificationRepository(ack_session).mark_many_as_read(
                            [i for i in ids if isinstance(i, int)], user_id=user.id
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        logger.debug("User %s closed the notification stream", user.id)
    finally:
        notification_manager.unregister(user.id, websocket)
