"""Reusable table builders."""
from dash import html
import dash_bootstrap_components as dbc
from sanavi_dashboard.theme import *
from sanavi_dashboard.data_state import money
from sanavi_dashboard.models import KIND_LABELS, MOVEMENT_LABELS, REASON_LABELS


def _empty(message):
    return html.P(message, style={"color": GRAY, "textAlign": "center", "padding": "40px"})


def _tag(label, color):
    return html.Span(label, style={
        "color": color, "border": f"1px solid {color}55", "borderRadius": "6px",
        "padding": "1px 8px", "fontSize": "11px", "fontWeight": "600",
        "textTransform": "uppercase",
    })


def _delete_button(collection, record_id):
    return dbc.Button(
        "✕", id={"type": "delete-btn", "collection": collection, "index": record_id},
        color="link", size="sm", style={"color": RED, "textDecoration": "none"},
        title="Eliminar",
    )


def cash_table(transactions):
    """Month's petty-cash movements with signed amounts and delete buttons."""
    if not transactions:
        return _empty("No hay movimientos en este mes.")

    rows = []
    for t in transactions:
        color = KIND_COLORS.get(t.kind.value, GRAY)
        signed = t.signed_amount
        rows.append(html.Tr([
            html.Td(t.date.strftime("%d/%m/%Y"), style={"color": GRAY, "fontFamily": "monospace",
                                                          "fontSize": "12px"}),
            html.Td(t.detail, style={"color": WHITE, "fontSize": "13px"}),
            html.Td(_tag(KIND_LABELS[t.kind], color)),
            html.Td(money(signed), style={"fontFamily": "monospace", "textAlign": "right",
                                          "color": GREEN if signed >= 0 else RED}),
            html.Td(_delete_button("transactions", t.id), style={"width": "40px"}),
        ]))

    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Fecha"),
            html.Th("Detalle"),
            html.Th("Tipo"),
            html.Th("Monto", style={"textAlign": "right"}),
            html.Th(""),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def inventory_table(entries):
    """Month's inventory movements with reason, order number and delete buttons."""
    if not entries:
        return _empty("No hay movimientos de inventario en este mes.")

    rows = []
    for e in entries:
        color = MOVEMENT_COLORS.get(e.movement.value, GRAY)
        rows.append(html.Tr([
            html.Td(e.date.strftime("%d/%m/%Y"), style={"color": GRAY, "fontFamily": "monospace",
                                                          "fontSize": "12px"}),
            html.Td([
                html.Div(e.product, style={"color": WHITE, "fontSize": "13px", "fontWeight": "600"}),
                html.Div(e.detail, style={"color": DARKGRAY, "fontSize": "11px"}) if e.detail else None,
            ]),
            html.Td(_tag(MOVEMENT_LABELS[e.movement], color)),
            html.Td(f"{e.signed_quantity:+d}", style={"fontFamily": "monospace", "textAlign": "center",
                                                     "color": color, "fontWeight": "bold"}),
            html.Td(REASON_LABELS[e.reason] if e.reason else "-", style={"color": GRAY}),
            html.Td(e.order_number or "-", style={"color": GRAY, "fontFamily": "monospace",
                                                  "fontSize": "12px"}),
            html.Td(_delete_button("inventory", e.id), style={"width": "40px"}),
        ]))

    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Fecha"),
            html.Th("Producto"),
            html.Th("Tipo"),
            html.Th("Cant", style={"textAlign": "center"}),
            html.Th("Motivo"),
            html.Th("Orden"),
            html.Th(""),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")


def stock_level_bar(stock, inbound):
    """Stock left as a share of everything received."""
    if inbound <= 0:
        return html.Div(style={"width": "80px", "display": "inline-block"})
    pct = max(0, min(100, (stock / inbound) * 100))
    color = GREEN if pct > 50 else (ORANGE if pct > 20 else RED)
    return html.Div([
        html.Div(style={"width": f"{max(pct, 4)}%", "height": "8px",
                         "background": f"linear-gradient(90deg, {color}88, {color})",
                         "borderRadius": "4px",
                         "transition": "width 0.3s ease"}),
    ], style={"width": "80px", "height": "8px", "backgroundColor": "#0d0d1a",
              "borderRadius": "4px", "display": "inline-block", "verticalAlign": "middle",
              "overflow": "hidden"})


def stock_table(summary):
    """Per-product stock (all history) from aggregator.stock_by_product."""
    rows = []
    for _, row in summary.iterrows():
        stock = int(row["stock"])
        inbound = int(row["inbound"])
        stock_color = GREEN if stock > 5 else ORANGE if stock > 0 else RED
        rows.append(html.Tr([
            html.Td(row["product"], style={"color": WHITE, "fontSize": "13px"}),
            html.Td([
                html.Span(str(stock), style={"color": stock_color, "fontWeight": "bold",
                                             "fontFamily": "monospace", "fontSize": "16px"}),
                html.Div(stock_level_bar(stock, inbound), style={"marginTop": "2px"}),
            ], style={"textAlign": "center", "width": "100px"}),
            html.Td(str(inbound), style={"color": GRAY, "textAlign": "center", "fontFamily": "monospace"}),
            html.Td(str(int(row["outbound"])), style={"color": GRAY, "textAlign": "center",
                                                      "fontFamily": "monospace"}),
        ]))

    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Producto"),
            html.Th("Stock", style={"textAlign": "center"}),
            html.Th("Entradas", style={"textAlign": "center"}),
            html.Th("Salidas", style={"textAlign": "center"}),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")
