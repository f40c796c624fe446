import base64
import io
from datetime import date, datetime

from PIL import Image

from sanavi_dashboard import aggregator as agg
from sanavi_dashboard import reports
from sanavi_dashboard.models import BrandingSetting

from conftest import entry, txn

ISSUED = datetime(2025, 4, 2, 9, 30)


def _logo(width=80, height=40):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (9, 9, 11)).save(buf, format="PNG")
    data_url = "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()
    return BrandingSetting(logo_image=data_url, logo_dimensions=(width, height))


def test_cash_report_is_pdf(march_cash):
    ref = date(2025, 3, 1)
    month = agg.filter_by_month(march_cash, agg.month_window(ref))
    pdf = reports.build_cash_report(month, agg.cash_totals(month), ref, issued_at=ISSUED)
    assert pdf.startswith(b"%PDF")


def test_cash_report_with_logo_and_many_rows():
    ref = date(2025, 3, 1)
    rows = [txn(date(2025, 3, 1 + i % 28), "1.50", "egreso", f"item <{i}> & co") for i in range(120)]
    pdf = reports.build_cash_report(rows, agg.cash_totals(rows), ref, branding=_logo(), issued_at=ISSUED)
    assert pdf.startswith(b"%PDF")
    assert pdf.count(b"/Type /Page") > 2


def test_empty_month_still_renders():
    ref = date(2025, 7, 1)
    pdf = reports.build_inventory_report([], agg.inventory_totals([], []), ref)
    assert pdf.startswith(b"%PDF")


def test_inventory_report_is_pdf():
    history = [
        entry(date(2025, 1, 10), 20, "entrada"),
        entry(date(2025, 2, 15), 5, "salida", reason="venta", order_number="ORD-001"),
        entry(date(2025, 2, 20), 1, "salida", reason="regalia"),
    ]
    ref = date(2025, 2, 1)
    month = agg.filter_by_month(history, agg.month_window(ref))
    pdf = reports.build_inventory_report(month, agg.inventory_totals(month, history), ref,
                                         branding=_logo(40, 40), issued_at=ISSUED)
    assert pdf.startswith(b"%PDF")


def test_unreadable_logo_is_skipped():
    broken = BrandingSetting(logo_image="data:image/png;base64,AAAA", logo_dimensions=(10, 10))
    assert reports._logo_reader(broken) is None
    assert reports._logo_reader(BrandingSetting()) is None
    assert reports._logo_reader(None) is None


def test_logo_with_zero_width_is_skipped(march_cash):
    logo = _logo()
    logo.logo_dimensions = (0, 40)
    assert reports._logo_reader(logo) is None

    ref = date(2025, 3, 1)
    pdf = reports.build_cash_report(march_cash, agg.cash_totals(march_cash), ref, branding=logo)
    assert pdf.startswith(b"%PDF")
