"""
models.py: Record types for the petty-cash ledger, inventory ledger and branding.

Enum values are the exact strings stored in Supabase, so a record can be
written back without translation tables.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional

CENTS = Decimal("0.01")

PRODUCT_CATALOG = ("Paquete Standard", "Paquete Profesional", "Paquete temporada")

BRANDING_ID = "global"


class ValidationError(ValueError):
    """A required field is missing or a value is out of range."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class TransactionKind(str, Enum):
    INCOME = "ingreso"
    EXPENSE = "egreso"
    COMMISSION = "comision"


class Movement(str, Enum):
    INBOUND = "entrada"
    OUTBOUND = "salida"


class ExitReason(str, Enum):
    SALE = "venta"
    GIFT = "regalia"


# Display labels (Spanish, as shown in the UI and in the PDF reports)
KIND_LABELS = {
    TransactionKind.INCOME: "Ingreso",
    TransactionKind.EXPENSE: "Egreso",
    TransactionKind.COMMISSION: "Comisión",
}
MOVEMENT_LABELS = {Movement.INBOUND: "Entrada", Movement.OUTBOUND: "Salida"}
REASON_LABELS = {ExitReason.SALE: "Venta", ExitReason.GIFT: "Regalía"}


def to_amount(value) -> Decimal:
    """Coerce a number or numeric string to a 2-place Decimal."""
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
        # NaN survives quantize and only fails at the first comparison
        if not amount.is_finite():
            raise ValueError("not a finite number")
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as e:
        raise ValidationError("amount", f"Invalid amount: {value!r}") from e


def _blank_to_none(text):
    if text is None:
        return None
    text = str(text).strip()
    return text or None


@dataclass
class Transaction:
    date: date
    detail: str
    amount: Decimal
    kind: TransactionKind
    id: Optional[str] = None
    created_at: Optional[str] = None

    def __post_init__(self):
        if self.amount is not None and not isinstance(self.amount, Decimal):
            self.amount = to_amount(self.amount)
        if self.kind is not None and not isinstance(self.kind, TransactionKind):
            self.kind = TransactionKind(self.kind)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by its kind (income positive)."""
        if self.kind == TransactionKind.INCOME:
            return self.amount
        return -self.amount

    def validate(self):
        if not (self.detail or "").strip():
            raise ValidationError("detail", "Detail is required")
        if self.amount is None:
            raise ValidationError("amount", "Amount is required")
        if self.amount < 0:
            raise ValidationError("amount", "Amount must be a positive magnitude")
        if not isinstance(self.date, date):
            raise ValidationError("date", "Date is required")
        if self.kind is None:
            raise ValidationError("kind", "Type is required")
        return self


@dataclass
class InventoryEntry:
    date: date
    product: str
    quantity: int
    movement: Movement
    reason: Optional[ExitReason] = None
    order_number: Optional[str] = None
    detail: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[str] = None

    def __post_init__(self):
        if self.movement is not None and not isinstance(self.movement, Movement):
            self.movement = Movement(self.movement)
        if self.reason is not None and not isinstance(self.reason, ExitReason):
            self.reason = ExitReason(self.reason)
        self.order_number = _blank_to_none(self.order_number)
        self.detail = _blank_to_none(self.detail)

        # reason only exists on outbound rows; order number only on sales
        if self.movement == Movement.INBOUND:
            self.reason = None
            self.order_number = None
        elif self.reason != ExitReason.SALE:
            self.order_number = None

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.movement == Movement.INBOUND else -self.quantity

    def validate(self):
        if not self.product:
            raise ValidationError("product", "Product is required")
        if self.product not in PRODUCT_CATALOG:
            raise ValidationError("product", f"Unknown product: {self.product}")
        if self.quantity is None:
            raise ValidationError("quantity", "Quantity is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValidationError("quantity", "Quantity must be a positive integer")
        if not isinstance(self.date, date):
            raise ValidationError("date", "Date is required")
        if self.movement is None:
            raise ValidationError("movement", "Movement type is required")
        if self.movement == Movement.OUTBOUND and self.reason is None:
            raise ValidationError("reason", "Outbound movements need a reason")
        return self


@dataclass
class BrandingSetting:
    logo_image: Optional[str] = None
    logo_dimensions: Optional[tuple] = None
    updated_at: Optional[str] = None
    id: str = BRANDING_ID

    def __post_init__(self):
        if self.logo_dimensions is not None:
            self.logo_dimensions = tuple(self.logo_dimensions)

    @property
    def has_logo(self) -> bool:
        return bool(self.logo_image) and self.logo_dimensions is not None

    def validate(self):
        dims = self.logo_dimensions
        if dims is not None:
            if len(dims) != 2 or any(d is None for d in dims):
                raise ValidationError("logo_dimensions", "Width and height must be given together")
            if any(int(d) <= 0 for d in dims):
                raise ValidationError("logo_dimensions", "Logo dimensions must be positive")
        if self.logo_image and dims is None:
            raise ValidationError("logo_dimensions", "Logo image needs its dimensions")
        return self


def with_identity(record, row_id, created_at):
    """Copy of a record stamped with the store-assigned id and timestamp."""
    return replace(record, id=row_id, created_at=created_at)
