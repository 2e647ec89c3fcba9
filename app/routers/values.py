from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from app import repositories
from app.db import get_db
from app.models import WebknotValue
from app.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/webknot-values", tags=["values"])


# Request schema. Accepts the canonical names and the legacy ones.
class ValueIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(validation_alias=AliasChoices("valueTitle", "title", "name"))
    pillar: str = Field(
        validation_alias=AliasChoices("valuePillarName", "valuePillar", "pillarName", "pillar")
    )
    description: str = Field("", validation_alias=AliasChoices("valueDescription", "description", "desc"))
    active: Optional[bool] = Field(None, validation_alias=AliasChoices("active", "isActive"))

    @field_validator("title", "pillar", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        if isinstance(v, dict):  # {"name": "..."} as we serve it
            v = v.get("name", "")
        return v.strip() if isinstance(v, str) else v

    @field_validator("title", "pillar")
    @classmethod
    def _required(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


# -------------------------------------------------------------------
# Serializer: rows go out in the legacy field naming
# -------------------------------------------------------------------
def _value_to_dict(v: WebknotValue) -> Dict[str, Any]:
    return {
        "valueId": v.value_id,
        "valueTitle": v.title,
        "valuePillar": {"name": v.pillar},
        "valueDescription": v.description,
        "active": v.active,
    }


@router.get("/list")
def list_values(
    activeOnly: bool = Query(True, description="Only active values"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    cursor: Optional[str] = Query(None, description="Opaque token from the previous page"),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Page through values.

    Response JSON:
      {"data": [ {valueId, valueTitle, valuePillar, valueDescription, active}, ... ],
       "nextCursor": "<token>" | null}
    """
    after = None
    if cursor:
        try:
            after = int(cursor)
        except ValueError:
            raise HTTPException(400, "Invalid cursor")
    rows, nxt = repositories.list_values(db, activeOnly, limit, after)
    return {
        "data": [_value_to_dict(v) for v in rows],
        "nextCursor": str(nxt) if nxt is not None else None,
    }


@router.post("/add")
def add_value(body: ValueIn, db: Session = Depends(get_db)) -> Dict[str, Any]:
    row = repositories.create_value(
        db, body.title, body.pillar, body.description,
        active=True if body.active is None else body.active,
    )
    db.commit()
    return _value_to_dict(row)


@router.put("/update/{value_id}")
def update_value(value_id: int, body: ValueIn, db: Session = Depends(get_db)) -> Dict[str, Any]:
    row = repositories.update_value(db, value_id, body.title, body.pillar, body.description, body.active)
    if row is None:
        raise HTTPException(404, "Value not found")
    db.commit()
    return _value_to_dict(row)


@router.delete("/delete/{value_id}", status_code=204)
def delete_value(value_id: int, db: Session = Depends(get_db)):
    if not repositories.delete_value(db, value_id):
        raise HTTPException(404, "Value not found")
    db.commit()
    return Response(status_code=204)
