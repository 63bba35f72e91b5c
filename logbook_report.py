"""
Print a summary report for a ForeFlight logbook export and optionally
export the normalized data.

Usage:
    python logbook_report.py --logbook foreflight-export.csv
    python logbook_report.py --logbook foreflight-export.csv --airports data/airport-codes.csv
    python logbook_report.py --logbook foreflight-export.csv --export logbook.json --format json
"""
import argparse
import os
import sys

import pytz

from airport_lookup import load_airport_data
from foreflight_config import DEFAULT_AIRPORT_CODES_PATH, DEFAULT_TIMEZONE, EXPORT_FORMATS
from foreflight_parser import parse_date_flexible, parse_foreflight
from logbook_analysis import (
    calculate_logbook_summary,
    detect_certifications,
    detect_milestones,
    get_currency_info,
    get_recent_flights,
    today_in,
)
from logbook_export import export_logbook


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Summarize a ForeFlight logbook export: totals, currency, certifications and milestones.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--logbook',
        type=str,
        required=True,
        help='ForeFlight logbook export (CSV with Aircraft and Flights tables)'
    )

    parser.add_argument(
        '--airports',
        type=str,
        default=None,
        help=f'OurAirports style airport-codes CSV used for airport names. Defaults to {DEFAULT_AIRPORT_CODES_PATH} '
             'if it exists, otherwise the data bundled with airportsdata'
    )

    parser.add_argument(
        '--recent',
        type=int,
        default=5,
        help='Number of recent flights to list'
    )

    parser.add_argument(
        '--as-of',
        type=str,
        default=None,
        help='Date to evaluate currency on (YYYY-MM-DD). Defaults to today'
    )

    parser.add_argument(
        '--timezone',
        type=str,
        default=DEFAULT_TIMEZONE,
        help='Timezone used to determine today\'s date for currency'
    )

    parser.add_argument(
        '--export',
        type=str,
        default=None,
        help='Optional output file for the normalized logbook'
    )

    parser.add_argument(
        '--format',
        type=str,
        choices=EXPORT_FORMATS,
        default='json',
        help='Format used with --export'
    )

    args = parser.parse_args(argv)

    if args.airports is None and os.path.exists(DEFAULT_AIRPORT_CODES_PATH):
        args.airports = DEFAULT_AIRPORT_CODES_PATH

    return args


def print_report(data, airports, as_of, recent=5):
    summary = calculate_logbook_summary(data)

    print("\n===== LOGBOOK SUMMARY =====")
    print(f"Total Flight Hours: {summary.total_hours:.1f}")
    print(f"PIC Hours: {summary.pic_hours:.1f}")
    print(f"Night Hours: {summary.night_hours:.1f}")
    print(f"Instrument Hours: {summary.instrument_hours:.1f}")
    print(f"Total Landings: {summary.total_landings}")
    print(f"Unique Aircraft: {summary.unique_aircraft_count}")
    print(f"Unique Airports: {len(summary.unique_airports)}")
    print(f"Years Flying: {summary.years_flying}")

    print("\n===== CURRENCY STATUS =====")
    currency = get_currency_info(data, today=as_of)
    print(f"Passenger Currency: {'Current' if currency.passenger_currency else 'Not Current'}")
    print(f"Night Currency: {'Current' if currency.night_currency else 'Not Current'}")
    print(f"Instrument Currency: {'Current' if currency.instrument_currency else 'Not Current'}")
    print(f"Last Flight Review: {currency.last_flight_review or 'None recorded'}")
    print(f"Last IPC: {currency.last_ipc or 'None recorded'}")

    print("\n===== CERTIFICATIONS =====")
    for cert in detect_certifications(data):
        print(f"{cert.date}: {cert.title}")

    print("\n===== CAREER MILESTONES =====")
    for milestone in detect_milestones(data, summary, airports):
        print(f"{milestone.year}: {milestone.title} - {milestone.description}")

    print("\n===== RECENT FLIGHTS =====")
    for flight in get_recent_flights(data, recent):
        print(f"{flight.date}: {flight.origin} to {flight.destination} ({flight.total_time:.1f} hours)")


def main(argv=None):
    """
    Parse the logbook, print the report and write the optional export.

    Returns a process exit code: 1 when the logbook yields no data or the
    export fails, 0 otherwise.
    """
    args = parse_args(argv)

    if args.as_of:
        try:
            as_of = parse_date_flexible(args.as_of).date()
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    else:
        try:
            as_of = today_in(args.timezone)
        except pytz.UnknownTimeZoneError:
            print(f"Error: unknown timezone '{args.timezone}'")
            return 1

    data = parse_foreflight(args.logbook)
    if data.is_empty():
        print(f"Error: no aircraft or flights could be read from {args.logbook}")
        return 1

    airports = load_airport_data(args.airports)
    print_report(data, airports, as_of, args.recent)

    if args.export:
        print(f"\nExporting to {args.format.upper()}...")
        if not export_logbook(data, args.format, args.export):
            return 1
        print(f"Export complete! Output written to {args.export}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
