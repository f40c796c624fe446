"""Delete confirmation: one modal shared by both ledgers."""
from dash import Input, Output, State, ALL, callback_context, no_update

import supabase_gateway as gw
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.components.cards import toast
from sanavi_dashboard.logging_utils import get_logger

log = get_logger(__name__)

def ledger_for(collection):
    """The live container behind a delete button, or None for an unknown collection."""
    return {gw.TRANSACTIONS: ds.CASH, gw.INVENTORY: ds.STOCK}.get(collection)


def register_callbacks(app):
    # ── Row delete button -> pending target + confirm modal ──────────────
    @app.callback(
        Output("delete-target", "data"),
        Output("delete-modal", "is_open"),
        Input({"type": "delete-btn", "collection": ALL, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def ask_delete(_clicks):
        trigger = callback_context.triggered_id
        # re-rendered tables fire with n_clicks=None; only a real click counts
        if not trigger or not callback_context.triggered[0]["value"]:
            return no_update, no_update
        return {"collection": trigger["collection"], "id": trigger["index"]}, True

    # ── Cancel ────────────────────────────────────────────────────────────
    @app.callback(
        Output("delete-target", "data", allow_duplicate=True),
        Output("delete-modal", "is_open", allow_duplicate=True),
        Input("delete-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def cancel_delete(n_clicks):
        if not n_clicks:
            return no_update, no_update
        return None, False

    # ── Confirm ───────────────────────────────────────────────────────────
    @app.callback(
        Output("delete-target", "data", allow_duplicate=True),
        Output("delete-modal", "is_open", allow_duplicate=True),
        Output("data-version", "data", allow_duplicate=True),
        Output("toast-container", "children", allow_duplicate=True),
        Input("delete-confirm-btn", "n_clicks"),
        State("delete-target", "data"),
        State("data-version", "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(n_clicks, target, version):
        if not n_clicks or not target:
            return no_update, no_update, no_update, no_update

        ledger = ledger_for(target["collection"])
        if ledger is None:
            log.error("Delete requested for unknown collection %s", target["collection"])
            return None, False, no_update, no_update

        # the pending target is cleared whatever the outcome
        try:
            ledger.remove(target["id"])
        except gw.RemoteError as e:
            log.error("Delete %s/%s failed: %s (%s)", target["collection"], target["id"], e, e.payload)
            return None, False, no_update, toast(
                "No se pudo eliminar de Supabase", "Error", icon="danger")

        return None, False, (version or 0) + 1, toast("Registro eliminado", "Eliminado", icon="info")
