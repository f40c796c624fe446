"""
Verify the dashboard's Supabase tables exist and are accessible.
Run: python verify_supabase.py [--write]

--write also inserts and deletes a probe row in each ledger table, which
exercises the same gateway calls the dashboard uses.
"""
import argparse
import sys
from datetime import date

import httpx
from postgrest.exceptions import APIError

import supabase_gateway as gw
from sanavi_dashboard.models import InventoryEntry, Transaction

TABLES = {
    gw.TRANSACTIONS: "Caja chica (ingreso / egreso / comision)",
    gw.INVENTORY:    "Movimientos de inventario",
    gw.SETTINGS:     "Logo / branding (fila 'global')",
}


def check_tables(client):
    all_ok = True
    for table, desc in TABLES.items():
        try:
            resp = client.table(table).select("*", count="exact").limit(1).execute()
            count = resp.count if resp.count is not None else "?"
            print(f"  {'OK':12s} {table:15s} ({count} rows) — {desc}")
        except (APIError, httpx.HTTPError) as e:
            err = str(e)
            if "PGRST205" in err or "not find" in err:
                status = "MISSING"
            elif "permission" in err.lower() or "42501" in err:
                status = "NO ACCESS"
            else:
                status = "ERROR"
            print(f"  {status:12s} {table:15s} — {desc}")
            all_ok = False
    return all_ok


def check_writes(client):
    probes = [
        (gw.TRANSACTIONS, lambda: gw.create_transaction(
            Transaction(date=date.today(), detail="__verify__", amount="0.00", kind="comision"),
            client=client)),
        (gw.INVENTORY, lambda: gw.create_inventory_entry(
            InventoryEntry(date=date.today(), product="Paquete Standard", quantity=1,
                           movement="entrada", detail="__verify__"),
            client=client)),
    ]
    all_ok = True
    for table, insert in probes:
        try:
            record = insert()
            gw.delete_record(table, record.id, client=client)
            print(f"  WRITE OK    {table}")
        except gw.RemoteError as e:
            print(f"  WRITE FAIL  {table} — {e}")
            all_ok = False
    return all_ok


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--write", action="store_true", help="also test insert/delete")
    args = parser.parse_args()

    try:
        client = gw._get_supabase_client()
    except gw.RemoteError as e:
        print(f"ERROR: {e} (set them in .env)")
        return 1

    print("=" * 60)
    print("Supabase Table Verification")
    print("=" * 60)
    ok = check_tables(client)
    print("=" * 60)

    if not ok:
        print("\nSome tables are MISSING. Run supabase_schema.sql in your")
        print("Supabase Dashboard → SQL Editor → New query → Paste → Run")
        return 1

    print("All tables OK!")
    if args.write:
        print("\nTesting write access...")
        ok = check_writes(client)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
