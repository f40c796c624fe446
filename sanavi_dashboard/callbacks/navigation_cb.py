"""Page routing and month navigation callbacks."""
from datetime import date

from dash import html, Input, Output, State, callback_context, no_update

from sanavi_dashboard import aggregator as agg


def current_month():
    return date.today().replace(day=1)


def parse_month(value):
    """Month store value (ISO date string) -> first day of that month."""
    if not value:
        return current_month()
    return date.fromisoformat(value[:10]).replace(day=1)


def render_page(pathname, reference):
    if pathname in ("/", None, "/caja"):
        from sanavi_dashboard.pages.cash import layout
        return layout(reference)
    elif pathname == "/inventario":
        from sanavi_dashboard.pages.inventory import layout
        return layout(reference)
    return html.Div([
        html.H3("404: Página no encontrada", style={"color": "#e74c3c"}),
        html.P(f"No existe la página '{pathname}'"),
    ], style={"padding": "40px"})


def register_callbacks(app):
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        Input("month-ref", "data"),
        Input("data-version", "data"),
    )
    def route_page(pathname, month_ref, _version):
        return render_page(pathname, parse_month(month_ref))

    @app.callback(
        Output("month-ref", "data"),
        Input("month-prev", "n_clicks"),
        Input("month-next", "n_clicks"),
        State("month-ref", "data"),
        prevent_initial_call=True,
    )
    def step_month(_prev, _next, month_ref):
        trigger = callback_context.triggered_id
        if trigger not in ("month-prev", "month-next"):
            return no_update
        step = -1 if trigger == "month-prev" else 1
        return agg.shift_month(parse_month(month_ref), step).isoformat()

    @app.callback(
        Output("month-label", "children"),
        Input("month-ref", "data"),
    )
    def show_month(month_ref):
        return agg.month_label(parse_month(month_ref))
