"""
aggregator.py: Month views and totals over the in-memory ledgers.

Everything here is pure: inputs are never mutated, outputs are new objects.
Flow figures (income, expense, inbound, outbound) are month-scoped; stock is
a running balance over the whole history.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

import pandas as pd

from sanavi_dashboard.models import (
    Movement,
    PRODUCT_CATALOG,
    TransactionKind,
)

ZERO = Decimal("0.00")

MONTH_NAMES_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

REPORT_PREFIXES = {
    "caja": "Caja_Chica",
    "inventario": "Inventario",
}


@dataclass(frozen=True)
class CashTotals:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    commission: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        # commission is reported on its own and not netted
        return self.income - self.expense

    def __add__(self, other):
        if not isinstance(other, CashTotals):
            return NotImplemented
        return CashTotals(
            income=self.income + other.income,
            expense=self.expense + other.expense,
            commission=self.commission + other.commission,
        )


@dataclass(frozen=True)
class InventoryTotals:
    month_inbound: int = 0
    month_outbound: int = 0
    running_stock: int = 0


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


# ── Month navigation ─────────────────────────────────────────────────────────

def month_window(reference):
    """(first day, last day) of the reference date's month, both inclusive."""
    ref = _as_date(reference)
    last = calendar.monthrange(ref.year, ref.month)[1]
    return date(ref.year, ref.month, 1), date(ref.year, ref.month, last)


def shift_month(reference, months: int) -> date:
    """First day of the month `months` away from the reference (negative = back)."""
    ref = _as_date(reference)
    index = ref.year * 12 + (ref.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_label(reference) -> str:
    """e.g. 'MARZO 2025'."""
    ref = _as_date(reference)
    return f"{MONTH_NAMES_ES[ref.month - 1]} {ref.year}".upper()


def report_filename(kind: str, reference) -> str:
    """Caja_Chica_2025_03.pdf / Inventario_2025_03.pdf"""
    ref = _as_date(reference)
    try:
        prefix = REPORT_PREFIXES[kind]
    except KeyError:
        raise ValueError(f"Unknown report kind: {kind}") from None
    return f"{prefix}_{ref.year:04d}_{ref.month:02d}.pdf"


# ── Filtering ────────────────────────────────────────────────────────────────

def filter_by_month(records, window):
    """Records dated inside window=(start, end), in their original order."""
    start, end = window
    return [r for r in records if start <= r.date <= end]


# ── Totals ───────────────────────────────────────────────────────────────────

def cash_totals(transactions) -> CashTotals:
    sums = {kind: ZERO for kind in TransactionKind}
    for t in transactions:
        sums[t.kind] += t.amount
    return CashTotals(
        income=sums[TransactionKind.INCOME],
        expense=sums[TransactionKind.EXPENSE],
        commission=sums[TransactionKind.COMMISSION],
    )


def _quantity_by_movement(entries):
    inbound = sum(e.quantity for e in entries if e.movement == Movement.INBOUND)
    outbound = sum(e.quantity for e in entries if e.movement == Movement.OUTBOUND)
    return inbound, outbound


def inventory_totals(month_entries, all_entries) -> InventoryTotals:
    """Month in/out from month_entries; stock from the full history."""
    month_in, month_out = _quantity_by_movement(month_entries)
    total_in, total_out = _quantity_by_movement(all_entries)
    return InventoryTotals(
        month_inbound=month_in,
        month_outbound=month_out,
        running_stock=total_in - total_out,
    )


# ── Chart / table frames ─────────────────────────────────────────────────────

def stock_by_product(entries) -> pd.DataFrame:
    """Inbound, outbound and stock per catalog product over all history."""
    products = list(PRODUCT_CATALOG)
    products += sorted({e.product for e in entries} - set(PRODUCT_CATALOG))
    summary = pd.DataFrame({
        "product": products,
        "inbound": 0,
        "outbound": 0,
    }).set_index("product")
    for e in entries:
        col = "inbound" if e.movement == Movement.INBOUND else "outbound"
        summary.loc[e.product, col] += e.quantity
    summary["stock"] = summary["inbound"] - summary["outbound"]
    return summary.reset_index()


def monthly_cash_history(transactions, reference, months: int = 6) -> pd.DataFrame:
    """Per-month income/expense/commission/balance for the months ending at reference."""
    starts = [shift_month(reference, -i) for i in range(months - 1, -1, -1)]
    rows = []
    for start in starts:
        totals = cash_totals(filter_by_month(transactions, month_window(start)))
        rows.append({
            "month": start.strftime("%Y-%m"),
            "income": float(totals.income),
            "expense": float(totals.expense),
            "commission": float(totals.commission),
            "balance": float(totals.balance),
        })
    return pd.DataFrame(rows, columns=["month", "income", "expense", "commission", "balance"])
