"""Widget API routes: one endpoint per user action plus status."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from shower_tracker.adapters.web.presenter import WebPresenter
from shower_tracker.domain.actions import (
    ActionResult,
    AddAlarm,
    DeleteAlarm,
    MarkOccurrence,
    Reset,
    SetInterval,
    ToggleNotifications,
)
from shower_tracker.domain.models import WidgetView
from shower_tracker.engine import ShowerEngine

RESET_CONFIRM_TEXT = "Are you sure you want to reset your shower history? This cannot be undone."


class IntervalRequest(BaseModel):
    hours: int


class AlarmRequest(BaseModel):
    time: str


class NotificationsRequest(BaseModel):
    enabled: bool


class ResetRequest(BaseModel):
    confirm: bool = False


class AlarmModel(BaseModel):
    id: int
    time: str


class StatusResponse(BaseModel):
    elapsed: str
    status: Optional[str]
    statusText: str
    interval: int
    notificationsEnabled: bool
    history: List[str]
    alarms: List[AlarmModel]
    alerts: List[str] = []


class ActionResponse(BaseModel):
    ok: bool
    message: Optional[str] = None
    state: StatusResponse


def _status(view: WidgetView, alerts: Optional[List[str]] = None) -> StatusResponse:
    return StatusResponse(
        elapsed=view.elapsed,
        status=view.status.value if view.status else None,
        statusText=view.status_text,
        interval=view.interval_hours,
        notificationsEnabled=view.notifications_enabled,
        history=view.history,
        alarms=[AlarmModel(id=a.id, time=a.time) for a in view.alarms],
        alerts=alerts or [],
    )


def create_router(engine: ShowerEngine, presenter: WebPresenter) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["Widget"])

    def respond(result: ActionResult, error_status: int = 400) -> ActionResponse:
        alerts = presenter.drain_alerts()
        if not result.ok and error_status:
            raise HTTPException(status_code=error_status, detail=result.message)
        return ActionResponse(
            ok=result.ok,
            message=result.message,
            state=_status(engine.view(), alerts),
        )

    @router.get("/status", response_model=StatusResponse)
    async def status():
        return _status(presenter.view or engine.view(), presenter.drain_alerts())

    @router.post("/occurrence", response_model=ActionResponse)
    async def mark_occurrence():
        return respond(await engine.handle(MarkOccurrence()))

    @router.post("/interval", response_model=ActionResponse)
    async def set_interval(req: IntervalRequest):
        return respond(await engine.handle(SetInterval(req.hours)))

    @router.post("/alarms", response_model=ActionResponse)
    async def add_alarm(req: AlarmRequest):
        return respond(await engine.handle(AddAlarm(req.time)))

    @router.delete("/alarms/{alarm_id}", response_model=ActionResponse)
    async def delete_alarm(alarm_id: int):
        return respond(await engine.handle(DeleteAlarm(alarm_id)), error_status=404)

    @router.post("/notifications", response_model=ActionResponse)
    async def toggle_notifications(req: NotificationsRequest):
        # Refused permission forces the flag off and is reported in the body
        return respond(await engine.handle(ToggleNotifications(req.enabled)), error_status=0)

    @router.post("/reset", response_model=ActionResponse)
    async def reset(req: ResetRequest):
        if not req.confirm:
            raise HTTPException(status_code=400, detail=RESET_CONFIRM_TEXT)
        return respond(await engine.handle(Reset()))

    return router
