"""
supabase_gateway.py: Read/write the dashboard collections in Supabase.

Collections:
  transactions : petty-cash movements (caja chica)
  inventory    : product stock movements
  settings     : single 'global' row holding the report logo

Every wire row <-> record translation lives in the *_from_row / *_to_row
helpers below; callers only ever see sanavi_dashboard.models records.
Nothing here retries: a failed call raises RemoteError once.
"""

import os
from datetime import date, datetime, timezone

import httpx
from postgrest.exceptions import APIError

from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import (
    BRANDING_ID,
    BrandingSetting,
    InventoryEntry,
    Transaction,
    to_amount,
    with_identity,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

TRANSACTIONS = "transactions"
INVENTORY = "inventory"
SETTINGS = "settings"
COLLECTIONS = (TRANSACTIONS, INVENTORY)

PAGE_SIZE = 1000

log = get_logger(__name__)

_client = None


class RemoteError(Exception):
    """A Supabase call failed, or its response did not have the expected shape."""

    def __init__(self, message, payload=None):
        super().__init__(message)
        self.payload = payload


# ── Supabase client ─────────────────────────────────────────────────────────

def _get_supabase_client():
    """Return a cached Supabase client built from .env / environment."""
    global _client
    if _client is not None:
        return _client

    from dotenv import load_dotenv
    load_dotenv(os.path.join(BASE_DIR, ".env"))

    url = os.environ.get("SUPABASE_URL", "")
    key = os.environ.get("SUPABASE_KEY", "")
    if not url or not key or "YOUR_PROJECT" in url:
        raise RemoteError("SUPABASE_URL / SUPABASE_KEY are not configured")

    from supabase import create_client
    try:
        _client = create_client(url, key)
    except Exception as e:
        raise RemoteError(f"Could not create Supabase client: {e}", str(e)) from e
    return _client


def _resolve(client):
    return client if client is not None else _get_supabase_client()


def _execute(query, action: str):
    """Run a PostgREST query, converting any failure to RemoteError."""
    try:
        return query.execute()
    except APIError as e:
        log.error("%s failed: %s", action, e.json())
        raise RemoteError(f"{action} failed: {e.message}", e.json()) from e
    except httpx.HTTPError as e:
        log.error("%s failed: %s", action, e)
        raise RemoteError(f"{action} failed: {e}", str(e)) from e


def _fetch_all(client, table: str) -> list[dict]:
    """Fetch every row, newest date first, paginating past the 1000-row limit."""
    rows: list[dict] = []
    offset = 0
    while True:
        query = (
            client.table(table)
            .select("*")
            .order("date", desc=True)
            .order("created_at", desc=True)
            .range(offset, offset + PAGE_SIZE - 1)
        )
        batch = _execute(query, f"Reading {table}").data
        if not isinstance(batch, list):
            raise RemoteError(f"Unexpected response reading {table}", batch)
        rows.extend(batch)
        if len(batch) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return rows


def _single_row(resp, action):
    rows = resp.data
    if not isinstance(rows, list) or not rows:
        raise RemoteError(f"{action} returned no row", rows)
    return rows[0]


# ── Row mapping ─────────────────────────────────────────────────────────────

def _parse_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def transaction_from_row(row: dict) -> Transaction:
    try:
        return Transaction(
            id=row["id"],
            created_at=row.get("created_at"),
            date=_parse_date(row["date"]),
            detail=row["detail"],
            amount=to_amount(row["amount"]),
            kind=row["type"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteError(f"Malformed transaction row: {e}", row) from e


def transaction_to_row(record: Transaction) -> dict:
    return {
        "date": record.date.isoformat(),
        "detail": record.detail.strip(),
        "amount": str(record.amount),
        "type": record.kind.value,
    }


def inventory_from_row(row: dict) -> InventoryEntry:
    try:
        return InventoryEntry(
            id=row["id"],
            created_at=row.get("created_at"),
            date=_parse_date(row["date"]),
            product=row["product"],
            quantity=int(row["quantity"]),
            movement=row["type"],
            reason=row.get("reason"),
            order_number=row.get("order_number"),
            detail=row.get("detail"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteError(f"Malformed inventory row: {e}", row) from e


def inventory_to_row(record: InventoryEntry) -> dict:
    return {
        "date": record.date.isoformat(),
        "product": record.product,
        "quantity": record.quantity,
        "type": record.movement.value,
        "reason": record.reason.value if record.reason else None,
        "order_number": record.order_number,
        "detail": record.detail,
    }


def branding_from_row(row: dict) -> BrandingSetting:
    try:
        dims = row.get("logo_dims")
        setting = BrandingSetting(
            id=row.get("id", BRANDING_ID),
            logo_image=row.get("logo_url"),
            logo_dimensions=(int(dims["w"]), int(dims["h"])) if dims else None,
            updated_at=row.get("updated_at"),
        )
        return setting.validate()
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteError(f"Malformed settings row: {e}", row) from e


def branding_to_row(setting: BrandingSetting) -> dict:
    dims = setting.logo_dimensions
    return {
        "id": BRANDING_ID,
        "logo_url": setting.logo_image,
        "logo_dims": {"w": dims[0], "h": dims[1]} if dims else None,
        "updated_at": setting.updated_at,
    }


# ── Reads ───────────────────────────────────────────────────────────────────

def list_transactions(client=None) -> list[Transaction]:
    rows = _fetch_all(_resolve(client), TRANSACTIONS)
    return [transaction_from_row(r) for r in rows]


def list_inventory(client=None) -> list[InventoryEntry]:
    rows = _fetch_all(_resolve(client), INVENTORY)
    return [inventory_from_row(r) for r in rows]


def get_branding_setting(client=None) -> BrandingSetting:
    """The 'global' settings row; an empty setting if it was never saved."""
    query = (
        _resolve(client).table(SETTINGS)
        .select("*")
        .eq("id", BRANDING_ID)
        .limit(1)
    )
    rows = _execute(query, "Reading settings").data
    if not isinstance(rows, list):
        raise RemoteError("Unexpected response reading settings", rows)
    if not rows:
        return BrandingSetting()
    return branding_from_row(rows[0])


# ── Writes ──────────────────────────────────────────────────────────────────

def create_transaction(record: Transaction, client=None) -> Transaction:
    """Insert a transaction; returns it with the store-assigned id/created_at."""
    record.validate()
    query = _resolve(client).table(TRANSACTIONS).insert(transaction_to_row(record))
    row = _single_row(_execute(query, "Inserting transaction"), "Inserting transaction")
    stored = transaction_from_row(row)
    return with_identity(record, stored.id, stored.created_at)


def create_inventory_entry(record: InventoryEntry, client=None) -> InventoryEntry:
    """Insert an inventory movement; returns it with id/created_at."""
    record.validate()
    query = _resolve(client).table(INVENTORY).insert(inventory_to_row(record))
    row = _single_row(_execute(query, "Inserting inventory entry"), "Inserting inventory entry")
    stored = inventory_from_row(row)
    return with_identity(record, stored.id, stored.created_at)


def delete_record(collection: str, record_id: str, client=None):
    """Delete one row by id. A missing id raises RemoteError like any failure."""
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    query = _resolve(client).table(collection).delete().eq("id", record_id)
    deleted = _execute(query, f"Deleting from {collection}").data
    if not deleted:
        log.warning("Delete of %s/%s matched no row", collection, record_id)
        raise RemoteError(f"No {collection} row with id {record_id}", {"id": record_id})


def upsert_branding_setting(image, dimensions, client=None) -> BrandingSetting:
    """Replace the global settings row (last write wins)."""
    setting = BrandingSetting(
        logo_image=image,
        logo_dimensions=dimensions,
        updated_at=datetime.now(timezone.utc).isoformat(),
    )
    setting.validate()
    query = _resolve(client).table(SETTINGS).upsert(branding_to_row(setting))
    resp = _execute(query, "Saving logo")
    if isinstance(resp.data, list) and resp.data:
        return branding_from_row(resp.data[0])
    return setting
