from datetime import date

import pytest

from sanavi_dashboard import data_state as ds
from sanavi_dashboard.callbacks.navigation_cb import parse_month, render_page
from sanavi_dashboard.pages.inventory import field_visibility


def _ids(component):
    """Every component id in a rendered layout tree."""
    found = set()
    stack = [component]
    while stack:
        node = stack.pop()
        if node is None or isinstance(node, (str, int, float)):
            continue
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        node_id = getattr(node, "id", None)
        if isinstance(node_id, str):
            found.add(node_id)
        stack.append(getattr(node, "children", None))
    return found


@pytest.fixture
def loaded(seeded_db, monkeypatch):
    cash = ds.CashLedger(client=seeded_db)
    stock = ds.InventoryLedger(client=seeded_db)
    cash.load()
    stock.load()
    monkeypatch.setattr(ds, "CASH", cash)
    monkeypatch.setattr(ds, "STOCK", stock)
    monkeypatch.setattr(ds, "LOAD_ERRORS", [])
    return cash, stock


def test_parse_month():
    assert parse_month("2025-03-17") == date(2025, 3, 1)
    assert parse_month(None) == date.today().replace(day=1)


def test_cash_page_renders(loaded):
    ids = _ids(render_page("/", date(2025, 3, 1)))
    assert {"cash-add-btn", "cash-export-btn", "cash-modal", "cash-form-body"} <= ids


def test_inventory_page_renders(loaded):
    ids = _ids(render_page("/inventario", date(2025, 2, 1)))
    assert {"inv-add-btn", "inv-export-btn", "inv-modal"} <= ids


def test_unknown_page_is_404(loaded):
    page = render_page("/nowhere", date(2025, 2, 1))
    assert "404" in page.children[0].children


@pytest.mark.parametrize("movement, reason, reason_shown, order_shown", [
    ("entrada", "venta", False, False),
    ("salida", "venta", True, True),
    ("salida", "regalia", True, False),
])
def test_exit_fields_follow_movement(movement, reason, reason_shown, order_shown):
    reason_style, order_style = field_visibility(movement, reason)
    assert (reason_style["display"] == "block") is reason_shown
    assert (order_style["display"] == "block") is order_shown


def test_health_endpoint(loaded):
    from sanavi_dashboard.app import server

    resp = server.test_client().get("/api/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["transactions"] == 3
    assert body["inventory"] == 2
    assert body["errors"] == []
