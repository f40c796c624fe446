"""Inventario page: the month's stock movements against the running stock."""
from dash import html
import dash_bootstrap_components as dbc

from sanavi_dashboard.theme import *
from sanavi_dashboard.components.kpi import kpi_pill, signed_color
from sanavi_dashboard.components.cards import section, form_modal, load_error_banner
from sanavi_dashboard.components.tables import inventory_table, stock_table
from sanavi_dashboard.models import (
    ExitReason,
    Movement,
    MOVEMENT_LABELS,
    PRODUCT_CATALOG,
    REASON_LABELS,
)
from sanavi_dashboard import aggregator as agg
from sanavi_dashboard import data_state as ds


def field_visibility(movement, reason):
    """(reason style, order-number style): reason only for outbound, order only for sales."""
    show_reason = movement == Movement.OUTBOUND.value
    show_order = show_reason and reason == ExitReason.SALE.value
    return ({"display": "block" if show_reason else "none"},
            {"display": "block" if show_order else "none"})


def form_body(draft):
    """Fields of the inventory modal, pre-filled from a draft."""
    reason_style, order_style = field_visibility(draft["movement"], draft["reason"])
    return html.Div([
        dbc.Label("Producto", html_for="inv-product"),
        dbc.Select(
            id="inv-product",
            value=draft["product"],
            options=[{"label": p, "value": p} for p in PRODUCT_CATALOG],
            className="mb-2",
        ),
        dbc.Row([
            dbc.Col([
                dbc.Label("Cantidad", html_for="inv-quantity"),
                dbc.Input(id="inv-quantity", type="number", min=1, step=1, value=draft["quantity"]),
            ], md=6),
            dbc.Col([
                dbc.Label("Fecha", html_for="inv-date"),
                dbc.Input(id="inv-date", type="date", value=draft["date"]),
            ], md=6),
        ], className="g-2 mb-2"),
        dbc.Label("Tipo", html_for="inv-movement"),
        dbc.Select(
            id="inv-movement",
            value=draft["movement"],
            options=[{"label": MOVEMENT_LABELS[m], "value": m.value} for m in Movement],
            className="mb-2",
        ),
        html.Div([
            dbc.Label("Motivo", html_for="inv-reason"),
            dbc.Select(
                id="inv-reason",
                value=draft["reason"],
                options=[{"label": REASON_LABELS[r], "value": r.value} for r in ExitReason],
                className="mb-2",
            ),
        ], id="inv-reason-wrap", style=reason_style),
        html.Div([
            dbc.Label("Número de orden", html_for="inv-order"),
            dbc.Input(id="inv-order", value=draft["orderNumber"], placeholder="ORD-001",
                      className="mb-2"),
        ], id="inv-order-wrap", style=order_style),
        dbc.Label("Detalle (opcional)", html_for="inv-detail"),
        dbc.Input(id="inv-detail", value=draft["detail"]),
    ])


def layout(reference):
    """Build the Inventario page for the month containing `reference`."""
    window = agg.month_window(reference)
    month_entries = agg.filter_by_month(ds.STOCK.records, window)
    totals = agg.inventory_totals(month_entries, ds.STOCK.records)
    summary = agg.stock_by_product(ds.STOCK.records)

    return html.Div([
        load_error_banner(ds.LOAD_ERRORS),

        # KPI strip
        dbc.Row([
            dbc.Col(kpi_pill("↓", "Entradas (mes)", str(totals.month_inbound), GREEN), md=4),
            dbc.Col(kpi_pill("↑", "Salidas (mes)", str(totals.month_outbound), ORANGE), md=4),
            dbc.Col(kpi_pill("▣", "Stock total", str(totals.running_stock),
                             signed_color(totals.running_stock),
                             "todas las fechas"), md=4),
        ], className="g-2 mb-3"),

        dbc.Row([
            dbc.Col([
                section(f"Movimientos — {agg.month_label(reference)}", [inventory_table(month_entries)],
                        PRIME, actions=[
                            dbc.Button("+ Nuevo movimiento", id="inv-add-btn", color="success", size="sm"),
                            dbc.Button("Exportar PDF", id="inv-export-btn", color="secondary", size="sm",
                                       outline=True),
                        ]),
            ], md=8),
            dbc.Col([
                section("Stock por producto", [stock_table(summary)], GREEN),
            ], md=4),
        ], className="g-3 mb-3"),

        form_modal("inv-modal", "Nuevo movimiento de inventario", "inv-form-body",
                   "inv-submit-btn", "inv-form-error"),
    ])
