import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models import WebknotValue

log = logging.getLogger(__name__)

DEMO_VALUES = [
    ("Own The Outcome", "Ownership", "Take responsibility for results, not just tasks."),
    ("Integrity", "Ownership", "Do the right thing, even when no one is watching."),
    ("Customer First", "Impact", "Start from the problem the customer actually has."),
    ("Learn Relentlessly", "Growth", "Get a little better every week."),
]


def list_values(
    db: Session, active_only: bool, limit: int, cursor: Optional[int] = None
) -> tuple[list[WebknotValue], Optional[int]]:
    """
    One page ordered by value_id. `cursor` is the last id of the previous page.
    Returns (rows, next_cursor); next_cursor is None on the last page.
    """
    q = select(WebknotValue).order_by(WebknotValue.value_id)
    if active_only:
        q = q.where(WebknotValue.active.is_(True))
    if cursor is not None:
        q = q.where(WebknotValue.value_id > cursor)
    rows = list(db.execute(q.limit(limit + 1)).scalars())
    if len(rows) > limit:
        rows = rows[:limit]
        return rows, rows[-1].value_id
    return rows, None


def create_value(db: Session, title: str, pillar: str, description: str = "", active: bool = True) -> WebknotValue:
    row = WebknotValue(title=title, pillar=pillar, description=description or "", active=active)
    db.add(row)
    db.flush()
    log.info("value created: value_id=%s title=%s", row.value_id, title)
    return row


def update_value(db: Session, value_id: int, title: str, pillar: str,
                 description: str = "", active: Optional[bool] = None) -> Optional[WebknotValue]:
    row = db.get(WebknotValue, value_id)
    if row is None:
        log.warning("update rejected, no such value: value_id=%s", value_id)
        return None
    row.title       = title
    row.pillar      = pillar
    row.description = description or ""
    if active is not None:
        row.active = active
    db.flush()
    return row


def delete_value(db: Session, value_id: int) -> bool:
    row = db.get(WebknotValue, value_id)
    if row is None:
        log.warning("delete rejected, no such value: value_id=%s", value_id)
        return False
    db.delete(row)
    db.flush()
    log.info("value deleted: value_id=%s", value_id)
    return True


def seed_demo_values(db: Session) -> int:
    """Insert DEMO_VALUES if the table is empty. Returns rows added."""
    if db.execute(select(WebknotValue.value_id).limit(1)).first():
        return 0
    for title, pillar, desc in DEMO_VALUES:
        db.add(WebknotValue(title=title, pillar=pillar, description=desc))
    db.commit()
    return len(DEMO_VALUES)
