"""Caja Chica page for one month of petty-cash movements."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from sanavi_dashboard.theme import *
from sanavi_dashboard.components.kpi import kpi_pill, signed_color
from sanavi_dashboard.components.cards import section, make_chart, form_modal, load_error_banner
from sanavi_dashboard.components.tables import cash_table
from sanavi_dashboard.models import KIND_LABELS, TransactionKind
from sanavi_dashboard import aggregator as agg
from sanavi_dashboard import data_state as ds


def form_body(draft):
    """Fields of the 'Nuevo movimiento' modal, pre-filled from a draft."""
    return html.Div([
        dbc.Label("Detalle", html_for="cash-detail"),
        dbc.Input(id="cash-detail", value=draft["detail"], placeholder="Ej. Pago de servicios",
                  className="mb-2"),
        dbc.Row([
            dbc.Col([
                dbc.Label("Monto", html_for="cash-amount"),
                dbc.Input(id="cash-amount", type="number", min=0, step=0.01, value=draft["amount"],
                          placeholder="0.00"),
            ], md=6),
            dbc.Col([
                dbc.Label("Fecha", html_for="cash-date"),
                dbc.Input(id="cash-date", type="date", value=draft["date"]),
            ], md=6),
        ], className="g-2 mb-2"),
        dbc.Label("Tipo", html_for="cash-kind"),
        dbc.Select(
            id="cash-kind",
            value=draft["kind"],
            options=[{"label": KIND_LABELS[k], "value": k.value} for k in TransactionKind],
        ),
    ])


def _trend_chart(reference):
    history = agg.monthly_cash_history(ds.CASH.records, reference)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=history["month"], y=history["income"], name="Ingresos", marker_color=GREEN))
    fig.add_trace(go.Bar(x=history["month"], y=history["expense"], name="Egresos", marker_color=RED))
    fig.add_trace(go.Bar(x=history["month"], y=history["commission"], name="Comisiones",
                         marker_color=PURPLE))
    fig.add_trace(go.Scatter(x=history["month"], y=history["balance"], name="Balance",
                             mode="lines+markers", line=dict(color=PRIME, width=3)))
    make_chart(fig, 300)
    fig.update_layout(title="Últimos 6 meses", barmode="group")
    return fig


def layout(reference):
    """Build the Caja Chica page for the month containing `reference`."""
    window = agg.month_window(reference)
    month_txns = agg.filter_by_month(ds.CASH.records, window)
    totals = agg.cash_totals(month_txns)

    return html.Div([
        load_error_banner(ds.LOAD_ERRORS),

        # KPI strip
        dbc.Row([
            dbc.Col(kpi_pill("↑", "Ingresos", ds.money(totals.income), GREEN), md=3),
            dbc.Col(kpi_pill("↓", "Egresos", ds.money(totals.expense), RED), md=3),
            dbc.Col(kpi_pill("%", "Comisiones", ds.money(totals.commission), PURPLE,
                             "informativo, no afecta el balance"), md=3),
            dbc.Col(kpi_pill("$", "Balance", ds.money(totals.balance),
                             signed_color(totals.balance),
                             f"{len(month_txns)} movimientos"), md=3),
        ], className="g-2 mb-3"),

        dbc.Row([
            dbc.Col([
                section(f"Movimientos — {agg.month_label(reference)}", [cash_table(month_txns)],
                        PRIME, actions=[
                            dbc.Button("+ Nuevo movimiento", id="cash-add-btn", color="success", size="sm"),
                            dbc.Button("Exportar PDF", id="cash-export-btn", color="secondary", size="sm",
                                       outline=True),
                        ]),
            ], md=8),
            dbc.Col([
                dbc.Card(dbc.CardBody(dcc.Graph(figure=_trend_chart(reference),
                                                config={"displayModeBar": False}))),
            ], md=4),
        ], className="g-3 mb-3"),

        form_modal("cash-modal", "Nuevo movimiento de caja", "cash-form-body",
                   "cash-submit-btn", "cash-form-error"),
    ])
