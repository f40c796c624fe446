import base64
import io
from datetime import date
from decimal import Decimal

import pytest
from PIL import Image

from sanavi_dashboard import forms
from sanavi_dashboard.models import ExitReason, Movement, TransactionKind, ValidationError


def _png_data_url(width, height):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (206, 253, 123)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()


def test_blank_drafts_use_today():
    today = date(2025, 3, 9)
    assert forms.blank_cash_draft(today) == {
        "detail": "", "amount": None, "date": "2025-03-09", "kind": "ingreso",
    }
    draft = forms.blank_inventory_draft(today)
    assert draft["movement"] == "entrada"
    assert draft["orderNumber"] == ""
    assert draft["product"] == "Paquete Standard"


def test_blank_drafts_are_fresh_each_time():
    first = forms.blank_cash_draft(date(2025, 3, 9))
    first["detail"] = "edited"
    assert forms.blank_cash_draft(date(2025, 3, 9))["detail"] == ""


def test_transaction_from_form():
    record = forms.transaction_from_form("  Taxi ", 12.5, "2025-03-09", "comision")
    assert record.detail == "Taxi"
    assert record.amount == Decimal("12.50")
    assert record.kind == TransactionKind.COMMISSION
    assert record.date == date(2025, 3, 9)


@pytest.mark.parametrize("args, field", [
    (("", 10, "2025-03-09", "ingreso"), "detail"),
    (("x", None, "2025-03-09", "ingreso"), "amount"),
    (("x", "abc", "2025-03-09", "ingreso"), "amount"),
    (("x", -5, "2025-03-09", "egreso"), "amount"),
    (("x", 5, "", "egreso"), "date"),
    (("x", 5, "09/03/2025", "egreso"), "date"),
    (("x", 5, "2025-03-09", "refund"), "kind"),
])
def test_transaction_form_errors(args, field):
    with pytest.raises(ValidationError) as excinfo:
        forms.transaction_from_form(*args)
    assert excinfo.value.field == field


def test_inventory_sale_from_form():
    record = forms.inventory_entry_from_form(
        "Paquete Profesional", 5.0, "2025-02-15", "salida", "venta", " ORD-7 ", "")
    assert record.quantity == 5
    assert record.movement == Movement.OUTBOUND
    assert record.reason == ExitReason.SALE
    assert record.order_number == "ORD-7"
    assert record.detail is None


def test_inbound_form_ignores_exit_fields():
    record = forms.inventory_entry_from_form(
        "Paquete Standard", "3", "2025-02-15", "entrada", "venta", "ORD-1")
    assert record.reason is None
    assert record.order_number is None


@pytest.mark.parametrize("args, field", [
    (("Paquete Gold", 1, "2025-02-15", "entrada"), "product"),
    (("Paquete Standard", 0, "2025-02-15", "entrada"), "quantity"),
    (("Paquete Standard", 2.5, "2025-02-15", "entrada"), "quantity"),
    (("Paquete Standard", 1, "2025-02-15", "salida", None), "reason"),
    (("Paquete Standard", 1, "2025-02-15", None), "movement"),
])
def test_inventory_form_errors(args, field):
    with pytest.raises(ValidationError) as excinfo:
        forms.inventory_entry_from_form(*args)
    assert excinfo.value.field == field


def test_logo_dimensions_reads_image_size():
    assert forms.logo_dimensions(_png_data_url(64, 32)) == (64, 32)


@pytest.mark.parametrize("data_url", [
    None,
    "",
    "data:text/plain;base64,aGVsbG8=",
    "data:image/png;base64,not-base64!!",
    "data:image/png;base64," + base64.b64encode(b"not an image").decode(),
])
def test_logo_dimensions_rejects_bad_uploads(data_url):
    with pytest.raises(ValidationError):
        forms.logo_dimensions(data_url)


@pytest.mark.parametrize("amount", ["NaN", "nan", "sNaN", "Infinity", "-inf", float("nan")])
def test_non_finite_amounts_are_rejected(amount):
    with pytest.raises(ValidationError) as excinfo:
        forms.transaction_from_form("x", amount, "2025-03-09", "ingreso")
    assert excinfo.value.field == "amount"
