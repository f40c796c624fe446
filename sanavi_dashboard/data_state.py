"""
data_state.py: In-memory ledgers backed by Supabase.

One container per concern (cash, inventory, branding). Each keeps a local
copy of its collection and only changes it after the gateway confirms the
matching write, so a failed call leaves the dashboard exactly as it was.
Pages and callbacks read CASH / STOCK / BRANDING from here.
"""

import supabase_gateway as gw
from sanavi_dashboard.logging_utils import get_logger
from sanavi_dashboard.models import BrandingSetting

log = get_logger(__name__)


def money(val):
    """Format a number as $X,XXX.XX (convenience for templates)."""
    if val < 0:
        return f"-${abs(val):,.2f}"
    return f"${val:,.2f}"


class _Ledger:
    collection = None

    def __init__(self, client=None):
        self.client = client
        self.records = []

    def __len__(self):
        return len(self.records)

    def _fetch(self):
        raise NotImplementedError

    def _create(self, record):
        raise NotImplementedError

    def load(self):
        """Replace the local copy with the full remote collection."""
        self.records = self._fetch()
        log.info("Loaded %d rows from %s", len(self.records), self.collection)
        return self.records

    def add(self, record):
        """Insert remotely, then put the stored record at the top of the list."""
        stored = self._create(record)
        self.records = [stored] + self.records
        log.info("Added %s row %s", self.collection, stored.id)
        return stored

    def remove(self, record_id):
        """Delete remotely, then drop the id locally."""
        gw.delete_record(self.collection, record_id, client=self.client)
        self.records = [r for r in self.records if r.id != record_id]
        log.info("Deleted %s row %s", self.collection, record_id)

    def get(self, record_id):
        return next((r for r in self.records if r.id == record_id), None)


class CashLedger(_Ledger):
    collection = gw.TRANSACTIONS

    def _fetch(self):
        return gw.list_transactions(client=self.client)

    def _create(self, record):
        return gw.create_transaction(record, client=self.client)


class InventoryLedger(_Ledger):
    collection = gw.INVENTORY

    def _fetch(self):
        return gw.list_inventory(client=self.client)

    def _create(self, record):
        return gw.create_inventory_entry(record, client=self.client)


class BrandingStore:
    def __init__(self, client=None):
        self.client = client
        self.setting = BrandingSetting()

    def load(self):
        self.setting = gw.get_branding_setting(client=self.client)
        log.info("Loaded branding (logo %s)", "set" if self.setting.has_logo else "not set")
        return self.setting

    def replace(self, image, dimensions):
        """Upsert the logo; the local setting changes only once it is saved."""
        self.setting = gw.upsert_branding_setting(image, dimensions, client=self.client)
        log.info("Saved logo (dimensions %s)", dimensions)
        return self.setting


CASH = CashLedger()
STOCK = InventoryLedger()
BRANDING = BrandingStore()

# Failures from the most recent reload_all(), shown as a banner on the pages
LOAD_ERRORS: list[str] = []


def reload_all():
    """Re-fetch every collection. A failing collection keeps its old contents."""
    errors = []
    for name, container in (("transactions", CASH), ("inventory", STOCK), ("settings", BRANDING)):
        try:
            container.load()
        except gw.RemoteError as e:
            log.error("Could not load %s: %s", name, e)
            errors.append(f"{name}: {e}")
    LOAD_ERRORS[:] = errors
    return {
        "transactions": len(CASH),
        "inventory": len(STOCK),
        "logo": BRANDING.setting.has_logo,
        "errors": errors,
    }
