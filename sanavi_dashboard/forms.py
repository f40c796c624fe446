"""Form drafts and form-value parsing for the add-movement modals and logo upload."""

import base64
import binascii
import io
from datetime import date

from PIL import Image, UnidentifiedImageError

from sanavi_dashboard.models import (
    ExitReason,
    InventoryEntry,
    Movement,
    PRODUCT_CATALOG,
    Transaction,
    TransactionKind,
    ValidationError,
    to_amount,
)


def blank_cash_draft(today: date) -> dict:
    return {"detail": "", "amount": None, "date": today.isoformat(),
            "kind": TransactionKind.INCOME.value}


def blank_inventory_draft(today: date) -> dict:
    return {"product": PRODUCT_CATALOG[0], "quantity": None, "date": today.isoformat(),
            "movement": Movement.INBOUND.value, "reason": ExitReason.SALE.value,
            "orderNumber": "", "detail": ""}


def _required(value, field, label):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(field, f"{label} es obligatorio")
    return value


def _parse_date(value) -> date:
    _required(value, "date", "Fecha")
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError("date", f"Fecha inválida: {value}") from None


def _parse_enum(enum_cls, value, field, label):
    _required(value, field, label)
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(field, f"{label} inválido: {value}") from None


def transaction_from_form(detail, amount, date_value, kind) -> Transaction:
    detail = _required(detail, "detail", "Detalle").strip()
    _required(amount, "amount", "Monto")
    value = to_amount(amount)
    if value < 0:
        raise ValidationError("amount", "El monto debe ser positivo")
    record = Transaction(
        date=_parse_date(date_value),
        detail=detail,
        amount=value,
        kind=_parse_enum(TransactionKind, kind, "kind", "Tipo"),
    )
    return record.validate()


def inventory_entry_from_form(product, quantity, date_value, movement,
                              reason=None, order_number=None, detail=None) -> InventoryEntry:
    _required(product, "product", "Producto")
    if product not in PRODUCT_CATALOG:
        raise ValidationError("product", f"Producto desconocido: {product}")
    _required(quantity, "quantity", "Cantidad")
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    try:
        qty = int(str(quantity).strip())
    except ValueError:
        raise ValidationError("quantity", f"Cantidad inválida: {quantity}") from None
    if qty <= 0:
        raise ValidationError("quantity", "La cantidad debe ser mayor a cero")

    move = _parse_enum(Movement, movement, "movement", "Tipo")
    exit_reason = None
    if move == Movement.OUTBOUND:
        exit_reason = _parse_enum(ExitReason, reason, "reason", "Motivo")

    record = InventoryEntry(
        date=_parse_date(date_value),
        product=product,
        quantity=qty,
        movement=move,
        reason=exit_reason,
        order_number=order_number,
        detail=detail,
    )
    return record.validate()


def logo_dimensions(data_url: str):
    """(width, height) of an uploaded image given as a data URL."""
    if not data_url or "," not in data_url:
        raise ValidationError("logo", "No se recibió ninguna imagen")
    header, payload = data_url.split(",", 1)
    if not header.startswith("data:image/"):
        raise ValidationError("logo", "El archivo no es una imagen")
    try:
        raw = base64.b64decode(payload, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            return img.size
    except (binascii.Error, UnidentifiedImageError, OSError) as e:
        raise ValidationError("logo", f"Imagen ilegible: {e}") from e
