from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..domain.possession import PossessionOutcome
from ..services.possession_svc import (
    check_possession,
    fetch_possessions,
    create_possession,
    change_possession,
    remove_possession,
)

router = APIRouter()


class PossessionCreate(BaseModel):
    owner_id: int
    vehicle_id: int
    start_date: dt.date
    end_date: Optional[dt.date] = None


class PossessionDates(BaseModel):
    start_date: dt.date
    end_date: Optional[dt.date] = None


def _raise_for(outcome: PossessionOutcome, owner_id: int, vehicle_id: int):
    if outcome is PossessionOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"possession_not_found: {owner_id}/{vehicle_id}")
    if outcome is PossessionOutcome.DUPLICATE:
        raise HTTPException(status_code=409, detail=f"possession_exists: {owner_id}/{vehicle_id}")
    if outcome is PossessionOutcome.BACKEND_ERROR:
        raise HTTPException(status_code=500, detail="database_error")


@router.get("/api/possessions")
def api_possessions_list():
    outcome, items = fetch_possessions()
    if outcome is PossessionOutcome.BACKEND_ERROR:
        raise HTTPException(status_code=500, detail="database_error")
    return {"items": [p.to_dict() for p in items]}


@router.get("/api/possessions/exists")
def api_possessions_exists(owner_id: int = Query(...), vehicle_id: int = Query(...)):
    outcome = check_possession(owner_id, vehicle_id)
    if outcome is PossessionOutcome.BACKEND_ERROR:
        raise HTTPException(status_code=500, detail="database_error")
    return {"exists": outcome is PossessionOutcome.OK}


@router.post("/api/possessions", status_code=201)
def api_possessions_create(body: PossessionCreate):
    outcome = create_possession(body.owner_id, body.vehicle_id, body.start_date, body.end_date)
    _raise_for(outcome, body.owner_id, body.vehicle_id)
    return {"message": "ok"}


@router.put("/api/possessions/{owner_id}/{vehicle_id}")
def api_possessions_update(owner_id: int, vehicle_id: int, body: PossessionDates):
    outcome = change_possession(owner_id, vehicle_id, body.start_date, body.end_date)
    _raise_for(outcome, owner_id, vehicle_id)
    return {"message": "ok"}


@router.delete("/api/possessions/{owner_id}/{vehicle_id}")
def api_possessions_delete(owner_id: int, vehicle_id: int):
    outcome = remove_possession(owner_id, vehicle_id)
    _raise_for(outcome, owner_id, vehicle_id)
    return {"message": "ok"}
