"""GLP-1 medication tracking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from forq.api.models import (
    AppetiteRequest,
    DoseRequest,
    MedicationRequest,
    NotificationsRequest,
    ProgressionRequest,
    ProgressionUpdate,
    SideEffectRequest,
    SideEffectUpdate,
    WeightRequest,
)

if TYPE_CHECKING:
    from forq.containers import AppContainer

router = APIRouter(prefix="/api/db/glp", tags=["glp"])


@router.get("/medication/{user_id}")
async def get_medication(user_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"medication": container.glp_service.get_medication(user_id)}


@router.post("/medication")
async def save_medication(
    body: MedicationRequest, request: Request
) -> dict[str, object]:
    """Create or replace the user's medication info."""
    container: AppContainer = request.app.state.container
    medication = container.glp_service.save_medication(
        user_id=body.user_id,
        name=body.name,
        current_dose=body.current_dose,
        injection_day=body.injection_day,
        start_date=body.start_date,
    )
    return {"message": "Medication info saved", "medication": medication}


@router.get("/doses/{user_id}")
async def list_doses(
    user_id: int, request: Request, limit: int = 50
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"doses": container.glp_service.list_doses(user_id, limit)}


@router.post("/doses", status_code=status.HTTP_201_CREATED)
async def record_dose(body: DoseRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    dose = container.glp_service.record_dose(
        body.user_id, body.timestamp, body.dose, body.notes
    )
    return {"message": "Dose recorded", "dose": dose}


@router.get("/side-effects/{user_id}")
async def list_side_effects(
    user_id: int, request: Request, limit: int = 50
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"side_effects": container.glp_service.list_side_effects(user_id, limit)}


@router.post("/side-effects", status_code=status.HTTP_201_CREATED)
async def record_side_effect(
    body: SideEffectRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    side_effect = container.glp_service.record_side_effect(
        user_id=body.user_id,
        name=body.name,
        severity=body.severity,
        timestamp=body.timestamp,
        notes=body.notes,
    )
    return {"message": "Side effect recorded", "side_effect": side_effect}


@router.put("/side-effects/{side_effect_id}")
async def update_side_effect(
    side_effect_id: int, body: SideEffectUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    side_effect = container.glp_service.update_side_effect(
        side_effect_id, severity=body.severity, notes=body.notes
    )
    return {"message": "Side effect updated", "side_effect": side_effect}


@router.get("/appetite/{user_id}")
async def list_appetite_logs(
    user_id: int, request: Request, limit: int = 50
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"appetite_logs": container.glp_service.list_appetite_logs(user_id, limit)}


@router.post("/appetite", status_code=status.HTTP_201_CREATED)
async def record_appetite(body: AppetiteRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    entry = container.glp_service.record_appetite(
        user_id=body.user_id,
        timestamp=body.timestamp,
        hunger_level=body.hunger_level,
        cravings_intensity=body.cravings_intensity,
        notes=body.notes,
    )
    return {"message": "Appetite logged", "appetite_log": entry}


@router.get("/weight/{user_id}")
async def list_weight_entries(
    user_id: int, request: Request, limit: int = 50
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"weight_entries": container.glp_service.list_weight_entries(user_id, limit)}


@router.post("/weight", status_code=status.HTTP_201_CREATED)
async def record_weight(body: WeightRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    entry = container.glp_service.record_weight(
        body.user_id, body.timestamp, body.weight, body.unit
    )
    return {"message": "Weight recorded", "weight_entry": entry}


@router.get("/progression/{user_id}")
async def list_progression(user_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"progression": container.glp_service.list_progression(user_id)}


@router.post("/progression", status_code=status.HTTP_201_CREATED)
async def record_progression(
    body: ProgressionRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    phase = container.glp_service.record_progression(
        user_id=body.user_id,
        phase=body.phase,
        dose=body.dose,
        start_date=body.start_date,
        status=body.status,
        end_date=body.end_date,
    )
    return {"message": "Dose phase recorded", "progression": phase}


@router.put("/progression/{progression_id}")
async def update_progression(
    progression_id: int, body: ProgressionUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    phase = container.glp_service.update_progression(
        progression_id, status=body.status, end_date=body.end_date
    )
    return {"message": "Dose phase updated", "progression": phase}


@router.get("/notifications/{user_id}")
async def get_notifications(user_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {
        "notifications_enabled": container.glp_service.notifications_enabled(user_id)
    }


@router.post("/notifications")
async def set_notifications(
    body: NotificationsRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    enabled = container.glp_service.set_notifications(
        body.user_id, body.notifications_enabled
    )
    return {"notifications_enabled": enabled}


@router.get("/summary/{user_id}")
async def summary(user_id: int, request: Request) -> dict[str, object]:
    """Return the latest tracking data in one payload."""
    container: AppContainer = request.app.state.container
    return {"summary": container.glp_service.summary(user_id)}
