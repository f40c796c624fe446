from postgrest.exceptions import APIError

import verify_supabase


def test_tables_and_write_probe(seeded_db, capsys):
    assert verify_supabase.check_tables(seeded_db)
    assert verify_supabase.check_writes(seeded_db)

    out = capsys.readouterr().out
    assert "WRITE OK    transactions" in out
    assert "WRITE OK    inventory" in out
    # probe rows are cleaned up
    assert len(seeded_db.tables["transactions"]) == 3
    assert len(seeded_db.tables["inventory"]) == 2


def test_missing_table_is_reported(seeded_db, capsys):
    seeded_db.fail = APIError({"message": "Could not find the table", "code": "PGRST205",
                               "hint": None, "details": None})
    assert not verify_supabase.check_tables(seeded_db)
    assert "MISSING" in capsys.readouterr().out
