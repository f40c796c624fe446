"""
SANAVI palette (lime on near-black), plus chart and toast styling shared by the pages.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
BG = "#09090b"
PRIME = "#cefd7b"
GREEN = "#2ecc71"
RED = "#e74c3c"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
WHITE = "#ffffff"
GRAY = "#a1a1aa"
DARKGRAY = "#52525b"

# ── Movement Colors ──────────────────────────────────────────────────────────
KIND_COLORS = {
    "ingreso": GREEN,
    "egreso": RED,
    "comision": PURPLE,
}

MOVEMENT_COLORS = {
    "entrada": GREEN,
    "salida": ORANGE,
}

# ── Trend chart ──────────────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": GRAY, "family": "Inter, sans-serif", "size": 11},
    margin=dict(t=40, b=24, l=48, r=12),
    hovermode="x unified",
    yaxis=dict(tickprefix="$", gridcolor="#ffffff10"),
)

# ── Sidebar Dimensions ───────────────────────────────────────────────────────
SIDEBAR_WIDTH = "250px"
CONTENT_MARGIN = "266px"  # sidebar + gap

# ── Toast placement ──────────────────────────────────────────────────────────
TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
