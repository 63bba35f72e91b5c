"""
Analytics over parsed logbook data: summary totals, currency status,
checkride certifications and career milestones.

Every function takes the parsed LogbookData (and, for milestones, its
summary) and returns new objects; the input is never modified.
"""
import math
from datetime import date, datetime, timedelta

import pandas as pd
import pytz

from airport_lookup import format_route_description, load_airport_data
from foreflight_config import (
    CERTIFICATION_TITLES,
    DEFAULT_TIMEZONE,
    HOLDING_KEYWORD,
    HOUR_MILESTONES,
    INSTRUMENT_CURRENCY_APPROACHES,
    INSTRUMENT_CURRENCY_MONTHS,
    NIGHT_CURRENCY_LANDINGS,
    PASSENGER_CURRENCY_DAYS,
    PASSENGER_CURRENCY_LANDINGS,
)
from foreflight_models import (
    AircraftStats,
    Certification,
    CurrencyInfo,
    LogbookSummary,
    Milestone,
    TypeStats,
)
from foreflight_parser import parse_date_flexible


def flight_date(flight):
    """Return the flight's date, or None if it can't be parsed."""
    try:
        return parse_date_flexible(flight.date).date()
    except ValueError:
        return None


def _sort_key(flight):
    # Undated flights sort as the oldest entries
    return flight_date(flight) or date.min


def sort_flights(flights, newest_first=False):
    """Return a new list of flights in chronological order."""
    return sorted(flights, key=_sort_key, reverse=newest_first)


def today_in(tz_name=DEFAULT_TIMEZONE):
    """Current calendar date in the given timezone."""
    return datetime.now(pytz.timezone(tz_name)).date()


def calculate_logbook_summary(data):
    """
    Calculate summary statistics from the logbook data.

    Totals are summed in a single pass. Flights whose aircraft is missing
    from the Aircraft table are still counted, under make 'Unknown' and
    type 'Unknown' with the raw aircraft ID as the model.
    """
    aircraft_map = {plane.aircraft_id: plane for plane in data.aircraft}

    sorted_flights = sort_flights(data.flights)
    first_flight_date = sorted_flights[0].date if sorted_flights else ''
    last_flight_date = sorted_flights[-1].date if sorted_flights else ''

    years_flying = 0
    if sorted_flights:
        first, last = flight_date(sorted_flights[0]), flight_date(sorted_flights[-1])
        days = (last - first).days if first and last else 0
        years_flying = max(1, math.ceil(days / 365))

    totals = {
        'total_hours': 0.0,
        'pic_hours': 0.0,
        'sic_hours': 0.0,
        'cross_country_hours': 0.0,
        'night_hours': 0.0,
        'actual_instrument_hours': 0.0,
        'simulated_instrument_hours': 0.0,
        'total_landings': 0,
        'day_landings': 0,
        'night_landings': 0,
    }
    aircraft_stats = {}
    type_stats = {}
    unique_airports = {}

    for flight in data.flights:
        totals['total_hours'] += flight.total_time
        totals['pic_hours'] += flight.pic
        totals['sic_hours'] += flight.sic
        totals['cross_country_hours'] += flight.cross_country
        totals['night_hours'] += flight.night
        totals['actual_instrument_hours'] += flight.actual_instrument
        totals['simulated_instrument_hours'] += flight.simulated_instrument
        totals['total_landings'] += flight.all_landings
        totals['day_landings'] += flight.day_landings
        totals['night_landings'] += flight.night_landings

        # dict keeps first-seen order
        if flight.origin:
            unique_airports[flight.origin] = None
        if flight.destination:
            unique_airports[flight.destination] = None

        detail = aircraft_map.get(flight.aircraft_id)
        type_code = (detail.type_code if detail else '') or 'Unknown'

        stats = aircraft_stats.setdefault(flight.aircraft_id, {
            'make': (detail.make if detail else '') or 'Unknown',
            'model': (detail.model if detail else '') or flight.aircraft_id,
            'type_code': type_code,
            'hours': 0.0,
            'flights': 0,
        })
        stats['hours'] += flight.total_time
        stats['flights'] += 1

        by_type = type_stats.setdefault(type_code, {'hours': 0.0, 'flights': 0})
        by_type['hours'] += flight.total_time
        by_type['flights'] += 1

    return LogbookSummary(
        instrument_hours=totals['actual_instrument_hours'] + totals['simulated_instrument_hours'],
        unique_aircraft_count=len(aircraft_stats),
        unique_airports=tuple(unique_airports),
        first_flight_date=first_flight_date,
        last_flight_date=last_flight_date,
        years_flying=years_flying,
        aircraft_stats={key: AircraftStats(**value) for key, value in aircraft_stats.items()},
        type_stats={key: TypeStats(**value) for key, value in type_stats.items()},
        **totals,
    )


def certification_title(pilot_comments):
    """Pick a certification title from checkride comments, falling back to the comments."""
    for keyword, title in CERTIFICATION_TITLES:
        if keyword in pilot_comments:
            return title
    return pilot_comments


def detect_certifications(data):
    """Detect certifications and ratings from checkride-flagged flights, oldest first."""
    return [
        Certification(
            title=certification_title(flight.pilot_comments),
            date=flight.date,
            description=f"Checkride: {flight.pilot_comments}",
        )
        for flight in sort_flights(data.flights)
        if flight.checkride
    ]


def _flight_year(flight):
    parsed = flight_date(flight)
    return str(parsed.year) if parsed else ''


def _aircraft_description(flight, summary):
    stats = summary.aircraft_stats.get(flight.aircraft_id)
    make = stats.make if stats else ''
    model = (stats.model if stats else '') or flight.aircraft_id
    return f"{make} {model}".strip()


def detect_milestones(data, summary, airports=None):
    """
    Detect significant milestones from logbook data.

    Args:
        data: parsed LogbookData
        summary: LogbookSummary computed from the same data, used for aircraft names
        airports: ident -> AirportInfo mapping; loaded with load_airport_data() when None

    Returns:
        List of Milestone: first flight, first solo, then every cumulative hour
        threshold in the order it was crossed
    """
    if airports is None:
        airports = load_airport_data()

    sorted_flights = sort_flights(data.flights)
    milestones = []

    if sorted_flights:
        first_flight = sorted_flights[0]
        route = format_route_description(first_flight.origin, first_flight.destination, airports)
        milestones.append(Milestone(
            year=_flight_year(first_flight),
            title='First Flight',
            description=f"First logged flight {route} in a {_aircraft_description(first_flight, summary)}",
        ))

    first_solo = next((flight for flight in sorted_flights if flight.solo > 0), None)
    if first_solo:
        route = format_route_description(first_solo.origin, first_solo.destination, airports)
        milestones.append(Milestone(
            year=_flight_year(first_solo),
            title='First Solo Flight',
            description=f"First solo flight {route} in a {_aircraft_description(first_solo, summary)}",
        ))

    cumulative_hours = 0.0
    for flight in sorted_flights:
        previous_hours = cumulative_hours
        cumulative_hours += flight.total_time

        for threshold in HOUR_MILESTONES:
            if previous_hours < threshold <= cumulative_hours:
                route = format_route_description(flight.origin, flight.destination, airports)
                milestones.append(Milestone(
                    year=_flight_year(flight),
                    title=f"{threshold} Flight Hours",
                    description=f"Reached {threshold} total flight hours {route}",
                ))

    return milestones


def get_recent_flights(data, count=5):
    """Return the most recent flights, newest first."""
    return sort_flights(data.flights, newest_first=True)[:count]


def _mentions_holding(flight):
    return (HOLDING_KEYWORD in flight.pilot_comments.lower()
            or HOLDING_KEYWORD in flight.instructor_comments.lower())


def get_currency_info(data, today=None):
    """
    Get passenger, night and instrument currency as of today.

    Passenger and night currency need 3 landings (all / night) in the last
    90 days. Instrument currency needs 6 approaches in the last 6 months and
    at least one flight in that window whose comments mention holding. The
    last flight review and IPC dates are the most recent flagged flights,
    with no time limit.
    """
    if today is None:
        today = today_in()

    ninety_days_ago = today - timedelta(days=PASSENGER_CURRENCY_DAYS)
    six_months_ago = (pd.Timestamp(today) - pd.DateOffset(months=INSTRUMENT_CURRENCY_MONTHS)).date()

    recent_landings = 0
    recent_night_landings = 0
    recent_approaches = 0
    recent_holding = False
    last_flight_review = ''
    last_ipc = ''

    for flight in sort_flights(data.flights, newest_first=True):
        when = flight_date(flight)

        if not last_flight_review and flight.flight_review:
            last_flight_review = flight.date
        if not last_ipc and flight.ipc:
            last_ipc = flight.date

        if when is not None and when >= ninety_days_ago:
            recent_landings += flight.all_landings
            recent_night_landings += flight.night_landings

        if when is not None and when >= six_months_ago:
            recent_approaches += len(flight.approaches)
            if _mentions_holding(flight):
                recent_holding = True

        # Nothing further down the list can change the result
        if (last_flight_review and last_ipc
                and recent_landings >= PASSENGER_CURRENCY_LANDINGS
                and recent_night_landings >= NIGHT_CURRENCY_LANDINGS
                and recent_approaches >= INSTRUMENT_CURRENCY_APPROACHES
                and recent_holding):
            break

    return CurrencyInfo(
        passenger_currency=recent_landings >= PASSENGER_CURRENCY_LANDINGS,
        night_currency=recent_night_landings >= NIGHT_CURRENCY_LANDINGS,
        instrument_currency=recent_approaches >= INSTRUMENT_CURRENCY_APPROACHES and recent_holding,
        last_flight_review=last_flight_review,
        last_ipc=last_ipc,
    )
