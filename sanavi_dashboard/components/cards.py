"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from sanavi_dashboard.theme import *


def section(title, children, color=PRIME, actions=None):
    """Titled section card with colored top border and optional header buttons."""
    header = [html.Span(title)]
    if actions:
        header.append(html.Div(actions, style={"display": "flex", "gap": "8px", "marginLeft": "auto"}))
    return dbc.Card([
        dbc.CardHeader(header, style={"color": color, "fontWeight": "bold", "fontSize": "16px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "12px 16px",
                                      "display": "flex", "alignItems": "center"}),
        dbc.CardBody(children, style={"padding": "16px"}),
    ], className="mb-3")


def make_chart(fig, height=300, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def form_modal(modal_id, title, body_id, submit_id, error_id):
    """Add-movement modal; the body is filled with a fresh draft each time it opens."""
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle(title, style={"color": PRIME})),
        dbc.ModalBody([
            html.Div(id=body_id),
            html.Div(id=error_id, className="mt-2"),
        ]),
        dbc.ModalFooter(
            dbc.Button("Guardar", id=submit_id, color="success", className="w-100"),
        ),
    ], id=modal_id, is_open=False, centered=True)


def load_error_banner(errors):
    """Warning shown when the last reload could not reach Supabase."""
    if not errors:
        return None
    return dbc.Alert(
        [html.Strong("No se pudieron cargar algunos datos. "), "; ".join(errors)],
        color="warning", className="mb-3",
    )


def toast(message, header, icon="success"):
    return dbc.Toast(
        message,
        header=header,
        icon=icon,
        duration=3000 if icon != "danger" else 5000,
        style=TOAST_STYLE,
    )
