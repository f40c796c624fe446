from datetime import date

import pytest
from postgrest.exceptions import APIError

import supabase_gateway as gw
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.models import Transaction

from conftest import entry


@pytest.fixture
def ledgers(seeded_db, monkeypatch):
    cash = ds.CashLedger(client=seeded_db)
    stock = ds.InventoryLedger(client=seeded_db)
    branding = ds.BrandingStore(client=seeded_db)
    monkeypatch.setattr(ds, "CASH", cash)
    monkeypatch.setattr(ds, "STOCK", stock)
    monkeypatch.setattr(ds, "BRANDING", branding)
    monkeypatch.setattr(ds, "LOAD_ERRORS", [])
    return cash, stock, branding


def test_money_formatting():
    assert ds.money(1234.5) == "$1,234.50"
    assert ds.money(-3) == "-$3.00"


def test_load_orders_newest_first(ledgers):
    cash, stock, _ = ledgers
    cash.load()
    stock.load()

    assert [r.id for r in cash.records] == ["t2", "t3", "t1"]
    assert [r.id for r in stock.records] == ["i2", "i1"]


def test_add_prepends_confirmed_record(ledgers, seeded_db):
    cash, _, _ = ledgers
    cash.load()
    stored = cash.add(Transaction(date=date(2025, 1, 2), detail="old receipt", amount="4", kind="egreso"))

    assert cash.records[0] is stored
    assert stored.id is not None
    assert len(cash) == 4
    assert len(seeded_db.tables["transactions"]) == 4


def test_add_failure_leaves_ledger_unchanged(ledgers, seeded_db):
    _, stock, _ = ledgers
    stock.load()
    before = list(stock.records)
    seeded_db.fail = APIError({"message": "boom", "code": "500", "hint": None, "details": None})

    with pytest.raises(gw.RemoteError):
        stock.add(entry(date(2025, 3, 1), 2, "entrada"))
    assert stock.records == before


def test_remove_drops_local_row_after_remote_delete(ledgers, seeded_db):
    cash, _, _ = ledgers
    cash.load()
    cash.remove("t3")

    assert cash.get("t3") is None
    assert [r["id"] for r in seeded_db.tables["transactions"]] == ["t1", "t2"]


def test_remove_missing_row_keeps_state(ledgers):
    cash, _, _ = ledgers
    cash.load()
    with pytest.raises(gw.RemoteError):
        cash.remove("nope")
    assert len(cash) == 3


def test_branding_replace(ledgers, seeded_db):
    _, _, branding = ledgers
    assert not branding.load().has_logo

    branding.replace("data:image/png;base64,AAAA", (120, 60))
    assert branding.setting.logo_dimensions == (120, 60)
    assert seeded_db.tables["settings"][0]["id"] == "global"


def test_reload_all_reports_counts(ledgers):
    result = ds.reload_all()
    assert result == {"transactions": 3, "inventory": 2, "logo": False, "errors": []}


def test_reload_all_keeps_old_data_on_failure(ledgers, seeded_db):
    ds.reload_all()
    seeded_db.fail = APIError({"message": "offline", "code": "503", "hint": None, "details": None})

    result = ds.reload_all()
    assert result["transactions"] == 3
    assert result["inventory"] == 2
    assert len(result["errors"]) == 3
    assert ds.LOAD_ERRORS == result["errors"]


def test_branding_replace_can_clear_logo(ledgers, seeded_db):
    _, _, branding = ledgers
    branding.replace("data:image/png;base64,AAAA", (120, 60))

    cleared = branding.replace(None, None)
    assert not cleared.has_logo
    assert branding.setting is cleared
    assert seeded_db.tables["settings"][0]["logo_url"] is None
    assert seeded_db.tables["settings"][0]["logo_dims"] is None
