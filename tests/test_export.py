"""
Export Tests

Tests for JSON and two-section CSV export.
"""

import io
import json

import pandas as pd
import pytest

from foreflight_config import EXPORT_AIRCRAFT_HEADER, EXPORT_FLIGHTS_HEADER
from foreflight_parser import parse_foreflight_text
from logbook_analysis import calculate_logbook_summary
from logbook_export import export_logbook, logbook_to_csv, logbook_to_json


@pytest.fixture
def data(export_text):
    return parse_foreflight_text(export_text)


def split_sections(csv_text):
    aircraft_section, flights_section = csv_text.split('\n\n', 1)
    return aircraft_section, flights_section


class TestLogbookToCsv:
    """Tests for the tabular export."""

    def test_sections_and_headers(self, data):
        aircraft_section, flights_section = split_sections(logbook_to_csv(data))

        assert aircraft_section.splitlines()[0] == ','.join(EXPORT_AIRCRAFT_HEADER)
        assert flights_section.splitlines()[0] == ','.join(EXPORT_FLIGHTS_HEADER)
        assert len(aircraft_section.splitlines()) == 1 + len(data.aircraft)
        assert len(flights_section.splitlines()) == 1 + len(data.flights)

    def test_approaches_joined_with_pipe(self, data):
        _, flights_section = split_sections(logbook_to_csv(data))
        flights = pd.read_csv(io.StringIO(flights_section), dtype=str, keep_default_na=False)

        assert flights.loc[2, 'Approaches'] == '1;ILS 28;KOKV|1;RNAV 14;KOKV'
        assert flights.loc[0, 'Approaches'] == ''

    def test_comment_commas_become_semicolons(self, data):
        _, flights_section = split_sections(logbook_to_csv(data))

        assert 'First solo; pattern work' in flights_section
        assert 'First solo, pattern work' not in flights_section

    def test_totals_survive_round_trip(self, data):
        summary = calculate_logbook_summary(data)
        _, flights_section = split_sections(logbook_to_csv(data))
        flights = pd.read_csv(io.StringIO(flights_section))

        assert flights['TotalTime'].sum() == pytest.approx(summary.total_hours)
        assert flights['PIC'].sum() == pytest.approx(summary.pic_hours)
        assert (flights['ActualInstrument'].sum() + flights['SimulatedInstrument'].sum()) == pytest.approx(
            summary.instrument_hours
        )
        assert flights['AllLandings'].sum() == summary.total_landings
        assert flights['DayLandings'].sum() == summary.day_landings
        assert flights['NightLandings'].sum() == summary.night_landings

    def test_empty_logbook_keeps_headers(self):
        data = parse_foreflight_text('')
        aircraft_section, flights_section = split_sections(logbook_to_csv(data))

        assert aircraft_section.strip() == ','.join(EXPORT_AIRCRAFT_HEADER)
        assert flights_section.strip() == ','.join(EXPORT_FLIGHTS_HEADER)


class TestLogbookToJson:
    """Tests for the structured export."""

    def test_nested_structure(self, data):
        exported = json.loads(logbook_to_json(data))

        assert set(exported) == {'aircraft', 'flights'}
        assert exported['aircraft'][0]['make'] == 'Cessna'
        assert exported['flights'][2]['approaches'] == ['1;ILS 28;KOKV', '1;RNAV 14;KOKV']
        assert exported['flights'][1]['pilot_comments'] == 'First solo, pattern work'
        assert exported['flights'][3]['checkride'] == 'Private Pilot ASEL'


class TestExportLogbook:
    """Tests for writing exports to disk."""

    @pytest.mark.parametrize('fmt', ['json', 'csv'])
    def test_writes_file(self, data, tmp_path, fmt):
        path = tmp_path / f'logbook.{fmt}'

        assert export_logbook(data, fmt, path) is True
        assert path.read_text(encoding='utf-8')

    def test_unwritable_destination(self, data, tmp_path):
        assert export_logbook(data, 'json', tmp_path / 'missing-dir' / 'logbook.json') is False

    def test_unknown_format(self, data, tmp_path):
        path = tmp_path / 'logbook.xml'

        assert export_logbook(data, 'xml', path) is False
        assert not path.exists()
