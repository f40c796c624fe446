"""Caja Chica callbacks: add-movement modal and PDF export."""
from datetime import date

from dash import Input, Output, State, dcc, no_update
import dash_bootstrap_components as dbc

import supabase_gateway as gw
from sanavi_dashboard import aggregator as agg
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.callbacks.navigation_cb import parse_month
from sanavi_dashboard.components.cards import toast
from sanavi_dashboard.forms import blank_cash_draft, transaction_from_form
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import ValidationError
from sanavi_dashboard.pages.cash import form_body
from sanavi_dashboard.reports import build_cash_report

log = get_logger(__name__)


def register_callbacks(app):
    # ── Open modal with a fresh draft ─────────────────────────────────────
    @app.callback(
        Output("cash-modal", "is_open"),
        Output("cash-form-body", "children"),
        Output("cash-form-error", "children"),
        Input("cash-add-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def open_modal(n_clicks):
        if not n_clicks:
            return no_update, no_update, no_update
        return True, form_body(blank_cash_draft(date.today())), None

    # ── Save ──────────────────────────────────────────────────────────────
    @app.callback(
        Output("cash-modal", "is_open", allow_duplicate=True),
        Output("cash-form-error", "children", allow_duplicate=True),
        Output("data-version", "data", allow_duplicate=True),
        Output("toast-container", "children", allow_duplicate=True),
        Input("cash-submit-btn", "n_clicks"),
        State("cash-detail", "value"),
        State("cash-amount", "value"),
        State("cash-date", "value"),
        State("cash-kind", "value"),
        State("data-version", "data"),
        prevent_initial_call=True,
    )
    def save_transaction(n_clicks, detail, amount, date_value, kind, version):
        if not n_clicks:
            return no_update, no_update, no_update, no_update
        try:
            record = transaction_from_form(detail, amount, date_value, kind)
        except ValidationError as e:
            return no_update, dbc.Alert(str(e), color="danger", className="mb-0 py-2"), no_update, no_update

        try:
            ds.CASH.add(record)
        except gw.RemoteError as e:
            log.error("Saving transaction failed: %s (%s)", e, e.payload)
            return no_update, None, no_update, toast(
                "No se pudo guardar en Supabase", "Error", icon="danger")

        return False, None, (version or 0) + 1, toast(
            f"{record.detail}: {ds.money(record.amount)}", "Movimiento guardado")

    # ── PDF export ────────────────────────────────────────────────────────
    @app.callback(
        Output("report-download", "data", allow_duplicate=True),
        Input("cash-export-btn", "n_clicks"),
        State("month-ref", "data"),
        prevent_initial_call=True,
    )
    def export_pdf(n_clicks, month_ref):
        if not n_clicks:
            return no_update
        reference = parse_month(month_ref)
        month_txns = agg.filter_by_month(ds.CASH.records, agg.month_window(reference))
        pdf = build_cash_report(month_txns, agg.cash_totals(month_txns), reference,
                                branding=ds.BRANDING.setting)
        filename = agg.report_filename("caja", reference)
        log.info("Exported %s (%d movements)", filename, len(month_txns))
        return dcc.send_bytes(pdf, filename)
