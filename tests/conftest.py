"""
Pytest Configuration and Fixtures

Shared fixtures for logbook parsing and analytics tests.
"""

from datetime import date

import pytest

from foreflight_models import Aircraft, AirportInfo, FlightEntry, LogbookData


AIRCRAFT_HEADER = (
    'AircraftID,TypeCode,Year,Make,Model,GearType,EngineType,equipType,aircraftClass,'
    'complexAircraft,taa,highPerformance,pressurized'
)

FLIGHT_HEADER = [
    'Date', 'AircraftID', 'From', 'To', 'Route', 'TimeOut', 'TimeOff', 'TimeOn', 'TimeIn',
    'TotalTime', 'PIC', 'SIC', 'Night', 'Solo', 'CrossCountry', 'IFR', 'ActualInstrument',
    'SimulatedInstrument', 'Approach1', 'Approach2', 'Approach3', 'Approach4', 'Approach5',
    'Approach6', 'DayLandingsFullStop', 'NightLandingsFullStop', 'AllLandings', 'DualReceived',
    'DualGiven', 'PilotComments', 'InstructorComments', 'Flight Review (FAA)', 'IPC (FAA)',
    'Checkride (FAA)',
]

BANNER = 'ForeFlight Logbook Import,This row is required for importing into ForeFlight. Do not delete or modify.'


def make_line(values, header=FLIGHT_HEADER):
    """Render one row in header order, quoting values that contain commas."""
    fields = [str(values.get(name, '')) for name in header]
    return ','.join(f'"{field}"' if ',' in field else field for field in fields)


SAMPLE_FLIGHTS = [
    {
        'Date': '2020-03-01', 'AircraftID': 'N12345', 'From': 'KFRR', 'To': 'KFRR',
        'TimeOut': '14:00', 'TimeIn': '15:12', 'TotalTime': '1.2', 'DualReceived': '1.2',
        'DayLandingsFullStop': '3', 'AllLandings': '3', 'PilotComments': 'First lesson',
    },
    {
        'Date': '2020-06-15', 'AircraftID': 'N12345', 'From': 'KFRR', 'To': 'KFRR',
        'TotalTime': '0.8', 'PIC': '0.8', 'Solo': '0.8',
        'DayLandingsFullStop': '3', 'AllLandings': '3', 'PilotComments': 'First solo, pattern work',
    },
    {
        'Date': '2021-01-20', 'AircraftID': 'N54321', 'From': 'KFRR', 'To': 'KOKV', 'Route': 'KFRR KOKV',
        'TotalTime': '9.5', 'PIC': '9.5', 'CrossCountry': '9.5', 'Night': '1.0',
        'SimulatedInstrument': '1.5', 'Approach1': '1;ILS 28;KOKV', 'Approach2': '1;RNAV 14;KOKV',
        'DayLandingsFullStop': '3', 'NightLandingsFullStop': '1', 'AllLandings': '4',
    },
    {
        'Date': '2021-02-10', 'AircraftID': 'N12345', 'From': 'KFRR', 'To': 'KFRR',
        'TotalTime': '1.5', 'PIC': '1.5', 'AllLandings': '1', 'DayLandingsFullStop': '1',
        'PilotComments': 'Private Pilot Checkride passed', 'Flight Review (FAA)': 'Yes',
        'Checkride (FAA)': 'Private Pilot ASEL',
    },
    {
        'Date': '2021-03-01', 'AircraftID': 'N99999', 'From': 'KFRR', 'To': 'KHEF',
        'TotalTime': '2.0', 'PIC': '2.0', 'ActualInstrument': '0.5', 'AllLandings': '1',
        'IPC (FAA)': 'IPC completed',
    },
]


def build_export(flights=SAMPLE_FLIGHTS, header=FLIGHT_HEADER):
    lines = [
        BANNER,
        'Aircraft Table,,,,,,,,,,,,',
        AIRCRAFT_HEADER,
        'N12345,C172,1998,Cessna,172S,fixed_tricycle,Piston,aircraft,airplane_single_engine_land,FALSE,FALSE,FALSE,FALSE',
        'N54321,PA28,1979,Piper,PA-28-181,fixed_tricycle,Piston,aircraft,airplane_single_engine_land,FALSE,FALSE,FALSE,FALSE',
        'N00000,C152',
        '',
        'Flights Table,,,,',
        ','.join(header),
    ]
    lines.extend(make_line(values, header) for values in flights)
    lines.append('2021-04-01,N12345,KFRR')
    lines.append('')
    return '\n'.join(lines)


# =============================================================================
# Export Text Fixtures
# =============================================================================

@pytest.fixture
def export_text():
    """A small ForeFlight export with two aircraft and five flights."""
    return build_export()


@pytest.fixture
def export_file(tmp_path, export_text):
    """The sample export written to disk."""
    path = tmp_path / 'foreflight-export.csv'
    path.write_text(export_text, encoding='utf-8')
    return path


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def make_flight():
    """Factory for FlightEntry records with sensible defaults."""
    def _make_flight(**kwargs):
        kwargs.setdefault('date', '2024-01-01')
        kwargs.setdefault('aircraft_id', 'N12345')
        kwargs.setdefault('origin', 'KFRR')
        kwargs.setdefault('destination', 'KFRR')
        return FlightEntry(**kwargs)
    return _make_flight


@pytest.fixture
def cessna():
    return Aircraft(aircraft_id='N12345', type_code='C172', year='1998', make='Cessna', model='172S')


@pytest.fixture
def logbook(cessna):
    """Builds LogbookData from flights, always including the Cessna."""
    def _logbook(*flights):
        return LogbookData(aircraft=(cessna,), flights=tuple(flights))
    return _logbook


@pytest.fixture
def today():
    return date(2026, 10, 18)


@pytest.fixture
def airports():
    return {
        'KFRR': AirportInfo(
            ident='KFRR', name='Front Royal-Warren County Airport',
            iso_country='US', iso_region='US-VA', municipality='Front Royal',
        ),
        'KOKV': AirportInfo(ident='KOKV', name='Winchester Regional Airport', municipality='Winchester'),
        'KHEF': AirportInfo(ident='KHEF', name='Manassas Regional Airport'),
    }
