import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from client.errors import DraftValidationError, RequestCancelled, SyncError
from client.normalizers import (
    CanonicalRecord,
    ListNormalizer,
    get_default_normalizer,
    extract_next_cursor,
    normalize_echo,
    sort_records,
    unwrap_envelope,
)

log = logging.getLogger(__name__)


class MutationState(str, Enum):
    DRAFTING = "drafting"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class Draft:
    """What the user typed into the add/edit form."""
    title: str = ""
    pillar: str = ""
    description: str = ""

    @classmethod
    def from_record(cls, rec: CanonicalRecord) -> "Draft":
        return cls(title=rec.title, pillar=rec.pillar, description=rec.description)

    def cleaned(self) -> "Draft":
        return Draft(
            title=(self.title or "").strip(),
            pillar=(self.pillar or "").strip(),
            description=(self.description or "").strip(),
        )

    def validate(self) -> "Draft":
        """Return the trimmed draft or raise DraftValidationError."""
        d = self.cleaned()
        missing = [name for name in ("title", "pillar", "description") if not getattr(d, name)]
        if missing:
            raise DraftValidationError(missing)
        return d

    def as_payload(self) -> dict:
        return {"title": self.title, "pillar": self.pillar, "description": self.description}


@dataclass
class Toast:
    title: str
    message: str = ""


class DirectoryController:
    """
    Owns the canonical values list for the directory page.

    Successful mutations are merged into the list right away, then a full
    reload replaces the list with what the server says. Failed mutations
    never touch the list.

    Reloads are sequence-stamped: a reload only applies its snapshot if no
    other reload started and no mutation succeeded while it was in flight.
    So a slow reload that began before a delete cannot bring the deleted
    record back. A reload that gets cancelled does not count as started.
    """
    def __init__(self, client, normalizer: Optional[ListNormalizer] = None, active_only: bool = False):
        self.client = client
        self.normalizer = normalizer or get_default_normalizer()
        self.active_only = active_only

        self._values: List[CanonicalRecord] = []
        self._generation = 0
        self._pending = set()

        self.loading = False
        self.error = ""
        self.state = MutationState.DRAFTING
        self.toast: Optional[Toast] = None
        self.last_error: Optional[Exception] = None

    @property
    def values(self) -> Tuple[CanonicalRecord, ...]:
        return tuple(self._values)

    def visible(self, query: str = "") -> List[CanonicalRecord]:
        """Search by title, pillar or description (case-insensitive)."""
        q = (query or "").strip().lower()
        if not q:
            return list(self._values)
        return [
            v for v in self._values
            if q in v.title.lower() or q in v.pillar.lower() or q in v.description.lower()
        ]

    def find(self, value_id: str) -> Optional[CanonicalRecord]:
        return next((v for v in self._values if v.id == str(value_id)), None)

    # ------------------------------------------------------------------
    # Authoritative reload
    # ------------------------------------------------------------------
    async def reload(self, cancel: Optional[asyncio.Event] = None) -> bool:
        """
        Fetch every page, normalize and replace the whole list.
        Returns True if this snapshot was applied. Cancellation is silent;
        other failures set `error` and leave the list alone.
        """
        self._generation += 1
        ticket = self._generation
        self._pending.add(ticket)
        self.error = ""
        self.loading = True
        try:
            rows = await self._fetch_all(cancel)
        except RequestCancelled:
            # Hand the ticket back so an older reload still in flight can land.
            if ticket == self._generation:
                self._generation -= 1
            return False
        except SyncError as e:
            log.warning("reload failed: %s", e)
            if ticket == self._generation:
                self.error = str(e) or "Failed to load values."
                self.last_error = e
            return False
        finally:
            self._pending.discard(ticket)
            self.loading = self._generation in self._pending

        if ticket != self._generation:
            log.debug("discarding stale reload snapshot (ticket=%s current=%s)", ticket, self._generation)
            return False
        self._values = sort_records(self.normalizer.normalize_list(rows))
        return True

    async def _fetch_all(self, cancel: Optional[asyncio.Event]) -> list:
        """Raw rows of every page, following the body's next cursor."""
        rows: list = []
        cursor = None
        seen = set()
        while True:
            body = await self.client.list_values(active_only=self.active_only, cursor=cursor, cancel=cancel)
            rows.extend(unwrap_envelope(body))
            cursor = extract_next_cursor(body)
            if cursor is None:
                return rows
            if cursor in seen:
                log.warning("list cursor %r repeated; stopping after %d rows", cursor, len(rows))
                return rows
            seen.add(cursor)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def open_draft(self, record: Optional[CanonicalRecord] = None) -> Draft:
        """Start a new add (no record) or edit form."""
        self.state = MutationState.DRAFTING
        return Draft.from_record(record) if record is not None else Draft()

    async def submit(self, draft: Draft, editing_id: Optional[str] = None) -> Optional[CanonicalRecord]:
        """
        Create (editing_id=None) or update a value.
        Returns the optimistically merged record, or None if the draft was
        rejected or the call failed (see `toast` / `last_error`).
        """
        editing = editing_id is not None
        try:
            clean = draft.validate()
        except DraftValidationError as e:
            self.last_error = e
            self.toast = Toast("Missing fields", "Fill value, evaluation criteria, and description.")
            return None

        payload = clean.as_payload()
        self.state = MutationState.SUBMITTING
        try:
            if editing:
                echo = await self.client.update_value(str(editing_id), payload)
            else:
                echo = await self.client.create_value(payload)
        except SyncError as e:
            self.state = MutationState.FAILED
            self.last_error = e
            self.toast = Toast("Update failed" if editing else "Add failed", str(e) or "Please try again.")
            log.warning("%s failed: %s", "update" if editing else "create", e)
            self.state = MutationState.DRAFTING
            return None

        self.state = MutationState.SUCCEEDED
        self.last_error = None
        fallback_id = str(editing_id) if editing else f"local-{int(time.time() * 1000)}"
        rec = normalize_echo(echo, payload, fallback_id)
        self._merge(rec)
        self.toast = Toast("Value updated" if editing else "Value added", rec.title)
        log.info("%s value id=%s title=%r", "updated" if editing else "created", rec.id, rec.title)

        await self.reload()
        return rec

    async def delete(self, record: CanonicalRecord) -> bool:
        try:
            await self.client.delete_value(str(record.id))
        except SyncError as e:
            self.last_error = e
            self.toast = Toast("Delete failed", str(e) or "Please try again.")
            log.warning("delete failed: id=%s %s", record.id, e)
            return False

        self._generation += 1
        self._values = [v for v in self._values if v.id != record.id]
        self.last_error = None
        self.toast = Toast("Value deleted", record.title)
        log.info("deleted value id=%s", record.id)

        await self.reload()
        return True

    def _merge(self, rec: CanonicalRecord) -> None:
        """Replace by id, otherwise prepend. Invalidates in-flight reloads."""
        self._generation += 1
        for i, v in enumerate(self._values):
            if v.id == rec.id:
                self._values[i] = rec
                return
        self._values.insert(0, rec)
