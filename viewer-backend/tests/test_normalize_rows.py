import logging

import pytest

from ingest.rows import normalize_rows


def test_drops_row_without_any_latitude_alias():
    rows = [
        {"lat": "1", "lon": "2", "name": "first"},
        {"northing": "5", "lon": "2", "name": "no-lat"},
        {"lat": "3", "lon": "4", "name": "second"},
    ]
    points, dropped = normalize_rows(rows)
    assert dropped == 1
    assert [p.label for p in points] == ["first", "second"]


def test_invalid_coordinate_and_empty_label_are_dropped():
    rows = [
        {"y": "1", "x": "bad", "label": "a"},
        {"y": "nope", "x": "1", "label": "b"},
        {"y": "1", "x": "1", "label": "   "},
        {"y": "1", "x": "1", "label": None},
        {"y": "-1", "x": "1", "label": "  kept  "},
    ]
    points, dropped = normalize_rows(rows)
    assert dropped == 4
    assert len(points) == 1
    assert points[0].label == "kept"
    assert points[0].lat == -1.0


def test_mixed_header_spellings_across_rows():
    rows = [
        {"Latitude": "10", "Longitude": "20", "Analyst": "a"},
        {"LAT": "11", "LNG": "21", "USERNAME": "b"},
    ]
    points, dropped = normalize_rows(rows)
    assert dropped == 0
    assert [(p.lat, p.lon, p.label) for p in points] == [(10.0, 20.0, "a"), (11.0, 21.0, "b")]


def test_out_of_range_values_pass_through():
    points, dropped = normalize_rows([{"lat": "123.4", "lon": "-500", "user": "z"}])
    assert dropped == 0
    assert points[0].lat == 123.4
    assert points[0].lon == -500.0


def test_custom_aliases():
    rows = [{"northing": "1", "easting": "2", "site": "s"}]
    points, dropped = normalize_rows(rows, lat_aliases=["northing"], lon_aliases=["easting"], label_aliases=["site"])
    assert dropped == 0 and points[0].label == "s"


def test_dropped_count_logged(caplog):
    rows = [
        {"lat": "1", "lon": "2"},
        {"lat": "x", "lon": "2", "user": "u"},
        {"lat": "1", "lon": "2", "user": "ok"},
    ]
    with caplog.at_level(logging.WARNING, logger="ingest.rows"):
        points, dropped = normalize_rows(rows)
    assert dropped == 2
    recs = [r for r in caplog.records if r.name == "ingest.rows"]
    assert len(recs) == 1
    assert recs[0].dropped == 2
    assert recs[0].reasons == {"missing_column": 1, "invalid_lat": 1}


def test_nothing_logged_when_all_rows_kept(caplog):
    with caplog.at_level(logging.WARNING, logger="ingest.rows"):
        normalize_rows([{"lat": "1", "lon": "2", "user": "ok"}])
    assert not [r for r in caplog.records if r.name == "ingest.rows"]


def test_end_to_end_sample_rows():
    rows = [
        {"Latitude": "28.6139", "Longitude": "77.2090", "Analyst": "alice"},
        {"Latitude": "invalid", "Longitude": "77.2", "Analyst": "bob"},
        {"Latitude": "28°36'50\"N", "Longitude": "77 12 30 E", "Analyst": "carol"},
    ]
    points, dropped = normalize_rows(rows)
    assert dropped == 1
    assert [p.label for p in points] == ["alice", "carol"]
    carol = points[1]
    assert carol.lat == pytest.approx(28 + 36 / 60 + 50 / 3600)
    assert carol.lon == pytest.approx(77 + 12 / 60 + 30 / 3600)
