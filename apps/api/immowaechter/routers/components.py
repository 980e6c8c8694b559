"""Component endpoints: risk band, performed maintenance and deactivation."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from immowaechter.core.deps import get_db, get_today
from immowaechter.schemas.maintenance import ComponentScheduleRead, RecordMaintenanceRequest
from immowaechter.schemas.risk import ComponentRiskResponse
from immowaechter.services import maintenance_record_service, risk_score_service

router = APIRouter(prefix="/api/components", tags=["components"])


def _get_active_component_or_404(db: Session, component_id: UUID):
    component = maintenance_record_service.get_component(db, component_id)
    if component is None or not component.is_active:
        raise HTTPException(status_code=404, detail="Component not found")
    return component


@router.get("/{component_id}/risk", response_model=ComponentRiskResponse)
def get_component_risk(
    component_id: UUID,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Risk band (safe/warning/danger/critical/legal) for a single component."""
    data = risk_score_service.get_component_risk(db, component_id, today)
    if data is None:
        raise HTTPException(status_code=404, detail="Component not found")
    return ComponentRiskResponse(data=data)


@router.post("/{component_id}/maintenance", response_model=ComponentScheduleRead)
def record_maintenance(
    component_id: UUID,
    body: RecordMaintenanceRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Record a performed maintenance; the next due date follows from the interval."""
    if body.performed_on > today:
        raise HTTPException(status_code=422, detail="Maintenance date cannot be in the future")

    component = _get_active_component_or_404(db, component_id)
    component = maintenance_record_service.record_maintenance(db, component, body.performed_on)
    return ComponentScheduleRead(
        id=component.id,
        name=component.display_name,
        last_maintenance=component.last_maintenance,
        next_maintenance=component.next_maintenance,
        is_active=component.is_active,
    )


@router.delete("/{component_id}", status_code=204)
def deactivate_component(component_id: UUID, db: Session = Depends(get_db)):
    """Stop tracking a component. The row is kept for history."""
    component = _get_active_component_or_404(db, component_id)
    maintenance_record_service.deactivate_component(db, component)
    return Response(status_code=204)
