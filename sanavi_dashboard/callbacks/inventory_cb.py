"""Inventario callbacks: the add-movement modal with its exit fields, and PDF export."""
from datetime import date

from dash import Input, Output, State, dcc, no_update
import dash_bootstrap_components as dbc

import supabase_gateway as gw
from sanavi_dashboard import aggregator as agg
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.callbacks.navigation_cb import parse_month
from sanavi_dashboard.components.cards import toast
from sanavi_dashboard.forms import blank_inventory_draft, inventory_entry_from_form
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import MOVEMENT_LABELS, ValidationError
from sanavi_dashboard.pages.inventory import field_visibility, form_body
from sanavi_dashboard.reports import build_inventory_report

log = get_logger(__name__)


def register_callbacks(app):
    # ── Open modal with a fresh draft ─────────────────────────────────────
    @app.callback(
        Output("inv-modal", "is_open"),
        Output("inv-form-body", "children"),
        Output("inv-form-error", "children"),
        Input("inv-add-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def open_modal(n_clicks):
        if not n_clicks:
            return no_update, no_update, no_update
        return True, form_body(blank_inventory_draft(date.today())), None

    # ── Reason / order number only where they apply ──────────────────────
    @app.callback(
        Output("inv-reason-wrap", "style"),
        Output("inv-order-wrap", "style"),
        Input("inv-movement", "value"),
        Input("inv-reason", "value"),
        prevent_initial_call=True,
    )
    def toggle_exit_fields(movement, reason):
        return field_visibility(movement, reason)

    # ── Save ──────────────────────────────────────────────────────────────
    @app.callback(
        Output("inv-modal", "is_open", allow_duplicate=True),
        Output("inv-form-error", "children", allow_duplicate=True),
        Output("data-version", "data", allow_duplicate=True),
        Output("toast-container", "children", allow_duplicate=True),
        Input("inv-submit-btn", "n_clicks"),
        State("inv-product", "value"),
        State("inv-quantity", "value"),
        State("inv-date", "value"),
        State("inv-movement", "value"),
        State("inv-reason", "value"),
        State("inv-order", "value"),
        State("inv-detail", "value"),
        State("data-version", "data"),
        prevent_initial_call=True,
    )
    def save_entry(n_clicks, product, quantity, date_value, movement, reason, order_number,
                   detail, version):
        if not n_clicks:
            return no_update, no_update, no_update, no_update
        try:
            record = inventory_entry_from_form(product, quantity, date_value, movement,
                                               reason, order_number, detail)
        except ValidationError as e:
            return no_update, dbc.Alert(str(e), color="danger", className="mb-0 py-2"), no_update, no_update

        try:
            ds.STOCK.add(record)
        except gw.RemoteError as e:
            log.error("Saving inventory entry failed: %s (%s)", e, e.payload)
            return no_update, None, no_update, toast(
                "No se pudo guardar en Supabase", "Error", icon="danger")

        return False, None, (version or 0) + 1, toast(
            f"{MOVEMENT_LABELS[record.movement]}: {record.quantity}x {record.product}",
            "Inventario actualizado")

    # ── PDF export ────────────────────────────────────────────────────────
    @app.callback(
        Output("report-download", "data", allow_duplicate=True),
        Input("inv-export-btn", "n_clicks"),
        State("month-ref", "data"),
        prevent_initial_call=True,
    )
    def export_pdf(n_clicks, month_ref):
        if not n_clicks:
            return no_update
        reference = parse_month(month_ref)
        month_entries = agg.filter_by_month(ds.STOCK.records, agg.month_window(reference))
        totals = agg.inventory_totals(month_entries, ds.STOCK.records)
        pdf = build_inventory_report(month_entries, totals, reference, branding=ds.BRANDING.setting)
        filename = agg.report_filename("inventario", reference)
        log.info("Exported %s (%d movements)", filename, len(month_entries))
        return dcc.send_bytes(pdf, filename)
