"""Headline figures shown above each ledger table."""
from dash import html
import dash_bootstrap_components as dbc
from sanavi_dashboard.theme import *


def signed_color(value, positive=PRIME):
    """Colour for a balance or stock figure: `positive` at zero or above, red below."""
    return positive if value >= 0 else RED


def icon_badge(text, color):
    return html.Div(text, style={
        "width": "34px", "height": "34px", "borderRadius": "10px",
        "backgroundColor": f"{color}22", "color": color,
        "border": f"1px solid {color}66",
        "display": "inline-flex", "alignItems": "center", "justifyContent": "center",
        "fontSize": "15px", "fontWeight": "bold", "flexShrink": "0",
    })


def kpi_pill(icon, label, value, color, subtitle=""):
    """One month figure: badge, upper-case label, monospace value, optional note."""
    lines = [
        html.Small(label, style={"color": GRAY, "fontWeight": "600", "letterSpacing": "1px",
                                 "textTransform": "uppercase"}),
        html.Div(value, style={"color": color, "fontSize": "24px", "fontWeight": "bold",
                               "fontFamily": "monospace"}),
    ]
    if subtitle:
        lines.append(html.Small(subtitle, style={"color": DARKGRAY}))
    return dbc.Card(
        dbc.CardBody(
            dbc.Stack([icon_badge(icon, color), html.Div(lines)], direction="horizontal", gap=3),
            style={"padding": "12px 16px"},
        ),
        style={"borderLeft": f"3px solid {color}", "height": "100%"},
    )
