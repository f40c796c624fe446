"""
SANAVI Dashboard: Caja Chica & Inventario
Run:  python -m sanavi_dashboard.app
Open: http://127.0.0.1:8070
"""

import os
import sys

# Ensure project root is on the path for supabase_gateway
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
import flask

from sanavi_dashboard import config
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.callbacks.branding_cb import logo_style, placeholder_style
from sanavi_dashboard.callbacks.navigation_cb import current_month
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.theme import PRIME, GRAY, DARKGRAY, SIDEBAR_WIDTH, CONTENT_MARGIN

log = get_logger(__name__)

# ── Create the Dash app ──────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    ],
    title=config.BRAND_NAME,
)
server = app.server  # For deployment (Gunicorn)

# ── Sidebar navigation ──────────────────────────────────────────────────────
NAV_ITEMS = [
    {"label": "Caja Chica", "icon": "\U0001f4b0", "value": "/"},
    {"label": "Inventario", "icon": "\U0001f4e6", "value": "/inventario"},
]


def _build_sidebar():
    nav_links = [
        dbc.NavLink(
            [html.Span(item["icon"], className="nav-icon me-2"), item["label"]],
            href=item["value"],
            active="exact",
        )
        for item in NAV_ITEMS
    ]
    return html.Div([
        html.Div([
            html.H4(config.BRAND_NAME, style={"color": PRIME, "fontWeight": "900"}),
            html.Small("Caja chica & inventario", style={"color": GRAY}),
        ], className="sidebar-brand mb-4"),
        dbc.Nav(nav_links, vertical=True, pills=True),
    ], className="sidebar", style={"position": "fixed", "top": 0, "left": 0, "bottom": 0,
                                   "width": SIDEBAR_WIDTH, "padding": "24px 16px",
                                   "borderRight": "1px solid #ffffff10"})


def _build_brand():
    """Logo (click to upload a new one), brand name and signatory."""
    setting = ds.BRANDING.setting
    return html.Div([
        dcc.Upload(
            id="logo-upload",
            accept="image/*",
            children=html.Div([
                html.Img(id="brand-logo", src=setting.logo_image or "",
                         style=logo_style(setting.has_logo)),
                html.Div("S", id="brand-placeholder", style=placeholder_style(not setting.has_logo)),
            ], title="Cambiar logo", style={"cursor": "pointer"}),
        ),
        html.Div([
            html.H3(config.BRAND_NAME, style={"margin": 0, "fontWeight": "900"}),
            html.Div(config.SIGNATORY, style={"color": GRAY, "fontSize": "11px", "fontWeight": "bold",
                                               "textTransform": "uppercase"}),
            html.Div(config.SIGNATORY_TITLE, style={"color": DARKGRAY, "fontSize": "10px",
                                                     "textTransform": "uppercase"}),
        ], style={"marginLeft": "14px"}),
    ], style={"display": "flex", "alignItems": "center"})


def _build_month_nav():
    return html.Div([
        dbc.Button("‹", id="month-prev", color="secondary", outline=True, size="sm"),
        html.Span(id="month-label", style={"minWidth": "150px", "textAlign": "center",
                                           "fontWeight": "bold", "letterSpacing": "1px"}),
        dbc.Button("›", id="month-next", color="secondary", outline=True, size="sm"),
    ], style={"display": "flex", "alignItems": "center", "gap": "8px"})


def _build_delete_modal():
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle("¿Eliminar registro?")),
        dbc.ModalBody("Esta acción no se puede deshacer."),
        dbc.ModalFooter([
            dbc.Button("Cancelar", id="delete-cancel-btn", color="secondary"),
            dbc.Button("Eliminar", id="delete-confirm-btn", color="danger"),
        ]),
    ], id="delete-modal", is_open=False, centered=True)


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout():
    return html.Div([
        dcc.Location(id="url", refresh=False),

        # Sidebar
        _build_sidebar(),

        # Main content area
        html.Div([
            # Header
            html.Div([
                _build_brand(),
                _build_month_nav(),
            ], className="app-header mb-4",
               style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"}),

            # Page content (rendered by routing callback)
            html.Div(id="page-content"),

            # Toast notification container
            html.Div(id="toast-container"),

            _build_delete_modal(),
            dcc.Download(id="report-download"),

            # Hidden stores
            dcc.Store(id="month-ref", data=current_month().isoformat()),
            dcc.Store(id="data-version", data=0),
            dcc.Store(id="delete-target", data=None),
        ], className="main-content", style={"marginLeft": CONTENT_MARGIN, "padding": "24px"}),
    ])


app.layout = serve_layout


# ── API routes ───────────────────────────────────────────────────────────────
@server.route("/api/reload")
def api_reload():
    """Re-fetch every collection from Supabase (hit by gunicorn after boot)."""
    return flask.jsonify(ds.reload_all())


@server.route("/api/health")
def api_health():
    return flask.jsonify({
        "transactions": len(ds.CASH),
        "inventory": len(ds.STOCK),
        "logo": ds.BRANDING.setting.has_logo,
        "errors": list(ds.LOAD_ERRORS),
    })


# ── Register callbacks ───────────────────────────────────────────────────────
# Import callback modules AFTER app is created so they can reference `app`
from sanavi_dashboard.callbacks import navigation_cb, cash_cb, inventory_cb, delete_cb, branding_cb
navigation_cb.register_callbacks(app)
cash_cb.register_callbacks(app)
inventory_cb.register_callbacks(app)
delete_cb.register_callbacks(app)
branding_cb.register_callbacks(app)

# ── Initial load ─────────────────────────────────────────────────────────────
if os.environ.get("SANAVI_SKIP_INITIAL_LOAD") != "1":
    _loaded = ds.reload_all()
    if _loaded["errors"]:
        log.warning("Started without some data: %s", "; ".join(_loaded["errors"]))

# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    print(f"\n  {config.BRAND_NAME} — Caja Chica & Inventario")
    print(f"  http://127.0.0.1:{config.PORT}\n")
    app.run(debug=False, host="0.0.0.0", port=config.PORT)
