import pytest

from wodsync.errors import DiscoveryError, RemoteAPIError, SourceFormatError
from wodsync.models import DedupKey, WodEntry
from wodsync.parser import entries_for_date, parse
from wodsync.sync import SyncEngine, find_child_database

SOURCE = "https://vfuae.com/wod/"


def _engine(client):
    return SyncEngine(client, "root-page", SOURCE)


def _entry(location, program, body="Row 500m"):
    return WodEntry(date="01/02/2026", location=location, program=program, body=body)


def test_scenario_is_idempotent(client, fake_session, scenario_text):
    entries = entries_for_date(parse(scenario_text), "01/02/2026")

    first = _engine(client).sync("2026-02-01", entries)
    assert (first.created, first.skipped) == (2, 0)
    rows_after_first = [r["properties"] for r in fake_session.rows]

    second = _engine(client).sync("2026-02-01", entries)
    assert (second.created, second.skipped) == (0, 2)
    assert [r["properties"] for r in fake_session.rows] == rows_after_first


def test_created_rows_carry_all_properties(client, fake_session):
    _engine(client).sync("2026-02-01", [_entry("Gym A", "CrossFit", "Warm up\n5 rounds")])

    (row,) = fake_session.rows
    props = row["properties"]
    assert row["parent"] == {"database_id": "wod-db"}
    assert props["Name"]["title"][0]["plain_text"] == "2026-02-01 — Gym A — CrossFit"
    assert props["Date"]["date"]["start"] == "2026-02-01"
    assert props["Location"]["rich_text"][0]["plain_text"] == "Gym A"
    assert props["Type"]["select"]["name"] == "CrossFit"
    assert props["Source"]["url"] == SOURCE
    assert props["WOD"]["rich_text"][0]["plain_text"] == "Warm up\n5 rounds"


def test_long_body_round_trips_through_segments(client, fake_session):
    body = "\n".join(f"{i}. 10 burpees" for i in range(400))
    _engine(client).sync("2026-02-01", [_entry("Gym A", "CrossFit", body)])

    segments = fake_session.rows[0]["properties"]["WOD"]["rich_text"]
    assert len(segments) > 1
    assert "".join(s["plain_text"] for s in segments) == body


def test_only_missing_entries_are_created(client, fake_session):
    engine = _engine(client)
    engine.sync("2026-02-01", [_entry("Gym A", "CrossFit")])

    result = engine.sync(
        "2026-02-01", [_entry("Gym A", "CrossFit"), _entry("Gym B", "Open Gym")]
    )
    assert (result.created, result.skipped) == (1, 1)
    assert result.created_keys == [("Gym B", "Open Gym")]
    assert result.skipped_keys == [("Gym A", "CrossFit")]
    assert len(fake_session.rows) == 2


def test_other_dates_do_not_count_as_existing(client, fake_session):
    engine = _engine(client)
    engine.sync("2026-01-31", [_entry("Gym A", "CrossFit")])

    result = engine.sync("2026-02-01", [_entry("Gym A", "CrossFit")])
    assert (result.created, result.skipped) == (1, 0)


def test_duplicate_key_within_one_run_is_created_once(client, fake_session):
    result = _engine(client).sync(
        "2026-02-01", [_entry("Gym A", "CrossFit", "v1"), _entry("Gym A", "CrossFit", "v2")]
    )
    assert (result.created, result.skipped) == (1, 1)
    assert len(fake_session.rows) == 1


def test_empty_location_key_matches_stored_row(client, fake_session):
    engine = _engine(client)
    engine.sync("2026-02-01", [_entry("", "WOD")])
    assert engine.existing_keys("2026-02-01") == {DedupKey("", "WOD")}
    assert engine.sync("2026-02-01", [_entry("", "WOD")]).skipped == 1


def test_existing_keys_read_across_pages(make_client):
    client, session = make_client(max_page_size=3)
    entries = [_entry(f"Gym {i}", "CrossFit") for i in range(7)]
    _engine(client).sync("2026-02-01", entries)

    result = _engine(client).sync("2026-02-01", entries)
    assert (result.created, result.skipped) == (0, 7)


def test_no_entries_fails_before_any_call(client, fake_session):
    with pytest.raises(SourceFormatError):
        _engine(client).sync("2026-02-01", [])
    assert fake_session.calls == []


def test_dry_run_creates_nothing(client, fake_session):
    result = _engine(client).sync(
        "2026-02-01", [_entry("Gym A", "CrossFit")], dry_run=True
    )
    assert result.created == 1
    assert result.dry_run
    assert fake_session.rows == []
    assert "dry run" in result.summary()


def test_database_discovered_once_per_engine(client, fake_session):
    engine = _engine(client)
    engine.sync("2026-02-01", [_entry("Gym A", "CrossFit")])
    engine.sync("2026-02-01", [_entry("Gym A", "CrossFit")])
    assert fake_session.calls.count(("GET", "/blocks/root-page/children")) == 1


def test_discovery_finds_database_beyond_first_page(make_client):
    children = [{"id": f"p{i}", "type": "paragraph"} for i in range(150)]
    children.append({"id": "late-db", "type": "child_database"})
    client, _ = make_client(children=children)
    assert find_child_database(client, "root-page") == "late-db"


def test_missing_database_is_discovery_error(make_client):
    client, session = make_client(children=[{"id": "p1", "type": "paragraph"}])
    with pytest.raises(DiscoveryError):
        _engine(client).sync("2026-02-01", [_entry("Gym A", "CrossFit")])
    assert session.rows == []


def test_remote_failure_stops_run_and_keeps_earlier_creates(client, fake_session):
    engine = _engine(client)
    engine.sync("2026-02-01", [_entry("Gym A", "CrossFit")])

    fake_session.fail_on = ("POST", "/pages", 429)
    with pytest.raises(RemoteAPIError) as excinfo:
        engine.sync("2026-02-01", [_entry("Gym A", "CrossFit"), _entry("Gym B", "Open Gym")])
    assert excinfo.value.status_code == 429
    assert len(fake_session.rows) == 1

    fake_session.fail_on = None
    result = engine.sync("2026-02-01", [_entry("Gym A", "CrossFit"), _entry("Gym B", "Open Gym")])
    assert (result.created, result.skipped) == (1, 1)


def test_creates_are_sequential_in_entry_order(client, fake_session):
    entries = [_entry("Gym C", "X"), _entry("Gym A", "Y"), _entry("Gym B", "Z")]
    _engine(client).sync("2026-02-01", entries)
    assert [r["properties"]["Location"]["rich_text"][0]["plain_text"] for r in fake_session.rows] == [
        "Gym C",
        "Gym A",
        "Gym B",
    ]
