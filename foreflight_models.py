"""Record types for parsed logbook data and the views derived from it."""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class Aircraft:
    aircraft_id: str
    type_code: str = ''
    year: str = ''
    make: str = ''
    model: str = ''
    gear_type: str = ''
    engine_type: str = ''
    equip_type: str = ''
    aircraft_class: str = ''
    complex_aircraft: str = ''
    taa: str = ''
    high_performance: str = ''
    pressurized: str = ''


@dataclass(frozen=True)
class FlightEntry:
    date: str
    aircraft_id: str = ''
    origin: str = ''
    destination: str = ''
    route: str = ''
    time_out: str = ''
    time_off: str = ''
    time_on: str = ''
    time_in: str = ''
    total_time: float = 0.0
    pic: float = 0.0
    sic: float = 0.0
    night: float = 0.0
    solo: float = 0.0
    cross_country: float = 0.0
    ifr: float = 0.0
    actual_instrument: float = 0.0
    simulated_instrument: float = 0.0
    approaches: Tuple[str, ...] = ()
    day_landings: int = 0
    night_landings: int = 0
    all_landings: int = 0
    dual_received: float = 0.0
    dual_given: float = 0.0
    pilot_comments: str = ''
    instructor_comments: str = ''
    flight_review: str = ''
    ipc: str = ''
    checkride: str = ''


@dataclass(frozen=True)
class LogbookData:
    aircraft: Tuple[Aircraft, ...] = ()
    flights: Tuple[FlightEntry, ...] = ()

    def is_empty(self) -> bool:
        return not self.aircraft and not self.flights


@dataclass(frozen=True)
class AircraftStats:
    make: str
    model: str
    type_code: str
    hours: float
    flights: int


@dataclass(frozen=True)
class TypeStats:
    hours: float
    flights: int


@dataclass(frozen=True)
class LogbookSummary:
    total_hours: float
    pic_hours: float
    sic_hours: float
    cross_country_hours: float
    night_hours: float
    instrument_hours: float
    actual_instrument_hours: float
    simulated_instrument_hours: float
    total_landings: int
    day_landings: int
    night_landings: int
    unique_aircraft_count: int
    unique_airports: Tuple[str, ...]
    first_flight_date: str
    last_flight_date: str
    years_flying: int
    aircraft_stats: Dict[str, AircraftStats] = field(default_factory=dict)
    type_stats: Dict[str, TypeStats] = field(default_factory=dict)


@dataclass(frozen=True)
class CurrencyInfo:
    passenger_currency: bool
    night_currency: bool
    instrument_currency: bool
    last_flight_review: str
    last_ipc: str


@dataclass(frozen=True)
class Certification:
    title: str
    date: str
    description: str = ''


@dataclass(frozen=True)
class Milestone:
    year: str
    title: str
    description: str


@dataclass(frozen=True)
class AirportInfo:
    ident: str
    type: str = ''
    name: str = ''
    elevation_ft: str = ''
    continent: str = ''
    iso_country: str = ''
    iso_region: str = ''
    municipality: str = ''
    icao_code: str = ''
    iata_code: str = ''
    gps_code: str = ''
    local_code: str = ''
    coordinates: str = ''
