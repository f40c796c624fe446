"""Logo upload callback. Persists the logo used in the header and PDF reports."""
from dash import Input, Output, State, no_update

import supabase_gateway as gw
from sanavi_dashboard import data_state as ds
from sanavi_dashboard.components.cards import toast
from sanavi_dashboard.forms import logo_dimensions
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import ValidationError
from sanavi_dashboard.theme import BG, PRIME

log = get_logger(__name__)


def register_callbacks(app):
    @app.callback(
        Output("brand-logo", "src"),
        Output("brand-logo", "style"),
        Output("brand-placeholder", "style"),
        Output("toast-container", "children", allow_duplicate=True),
        Input("logo-upload", "contents"),
        State("logo-upload", "filename"),
        prevent_initial_call=True,
    )
    def upload_logo(contents, filename):
        if contents is None:
            return no_update, no_update, no_update, no_update
        try:
            dims = logo_dimensions(contents)
        except ValidationError as e:
            return no_update, no_update, no_update, toast(str(e), "Logo no válido", icon="warning")

        try:
            setting = ds.BRANDING.replace(contents, dims)
        except gw.RemoteError as e:
            log.error("Saving logo %s failed: %s (%s)", filename, e, e.payload)
            return no_update, no_update, no_update, toast(
                "Error al guardar el logo en la base de datos", "Error", icon="danger")

        return setting.logo_image, logo_style(True), placeholder_style(False), toast(
            f"{filename} ({dims[0]}x{dims[1]} px)", "Logo actualizado")


def logo_style(visible):
    return {
        "width": "48px", "height": "48px", "objectFit": "contain",
        "borderRadius": "12px", "padding": "4px",
        "backgroundColor": "#ffffff0d", "border": "1px solid #ffffff1a",
        "display": "block" if visible else "none",
    }


def placeholder_style(visible):
    return {
        "width": "48px", "height": "48px", "borderRadius": "12px",
        "backgroundColor": PRIME, "color": BG,
        "alignItems": "center", "justifyContent": "center",
        "fontWeight": "900", "fontStyle": "italic", "fontSize": "20px",
        "boxShadow": "0 0 20px rgba(206,253,123,0.4)",
        "display": "flex" if visible else "none",
    }
