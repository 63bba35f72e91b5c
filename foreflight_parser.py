"""
Parsing for ForeFlight logbook exports.

A ForeFlight export is a single CSV file holding two tables: an Aircraft
table followed by a Flights table, each introduced by its own header line
and surrounded by "ForeFlight Logbook Import" banner rows. The functions
here find both tables, tokenize their rows and turn them into Aircraft and
FlightEntry records.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from foreflight_config import (
    AIRCRAFT_COLUMNS,
    AIRCRAFT_HEADER_PREFIX,
    APPROACH_COLUMNS,
    FLIGHT_COLUMNS,
    FLIGHT_COUNT_FIELDS,
    FLIGHT_HOUR_FIELDS,
    FLIGHTS_HEADER_PREFIX,
    IMPORT_MARKER,
    MIN_AIRCRAFT_FIELDS,
    MIN_FLIGHT_FIELDS,
)
from foreflight_models import Aircraft, FlightEntry, LogbookData


class MissingTableError(ValueError):
    """Raised when the header line of one of the two tables cannot be found."""

    def __init__(self, table):
        self.table = table
        super().__init__(f"Could not find {table} table header in ForeFlight export")


def safe_float_conversion(value):
    """
    Safely convert a value to float, returning 0.0 if conversion fails.
    Handles None, empty strings, '.', and non-finite values.
    """
    try:
        if value is None or value == '' or value == '.':
            return 0.0
        number = float(value)
    except (ValueError, TypeError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def safe_int_conversion(value):
    """Convert a landing count like '2' or '2.0' to int, 0 on failure."""
    return int(safe_float_conversion(value))


def parse_date_flexible(date_str):
    """
    Parse a date string in various formats and return a datetime object.
    Supports: YYYY-MM-DD, MM/DD/YYYY, DD/MM/YYYY
    """
    formats = ["%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(str(date_str).strip(), fmt)
        except ValueError:
            continue
    raise ValueError(f"Unable to parse date: {date_str}")


def parse_csv_line(line, delimiter=','):
    """
    Split one line into fields.

    A double quote toggles quoted mode and is dropped from the output; the
    delimiter is kept as data while quoted. Doubled quotes are not treated
    as escapes, and an unbalanced quote swallows the rest of the line.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
    fields.append(''.join(current))
    return fields


def split_lines(csv_text):
    """Split export text into lines, dropping the carriage return of CRLF files."""
    return [line.rstrip('\r') for line in csv_text.split('\n')]


def locate_tables(lines):
    """
    Return the indices of the Aircraft and Flights header lines.

    The Flights header is only searched for after the Aircraft header.
    Raises MissingTableError naming the table that could not be found.
    """
    aircraft_header_index = next(
        (i for i, line in enumerate(lines) if line.startswith(AIRCRAFT_HEADER_PREFIX)),
        -1,
    )
    if aircraft_header_index == -1:
        raise MissingTableError('Aircraft')

    flights_header_index = next(
        (i for i in range(aircraft_header_index + 1, len(lines))
         if lines[i].startswith(FLIGHTS_HEADER_PREFIX)),
        -1,
    )
    if flights_header_index == -1:
        raise MissingTableError('Flights')

    return aircraft_header_index, flights_header_index


@dataclass(frozen=True)
class ColumnIndex:
    """
    Positions of logical fields within a table, resolved from its header row.

    Fields whose header name is missing read as '' / 0.0 / 0 on every row,
    so a row lookup never fails.
    """
    positions: Mapping[str, int]

    @classmethod
    def from_header(cls, header_fields, columns):
        """
        Build the index from the tokenized header line.

        Args:
            header_fields: tokens of the header line
            columns: logical field name -> accepted header names, in preference order

        Returns:
            ColumnIndex holding only the fields found in the header
        """
        first_seen = {}
        for position, name in enumerate(header_fields):
            first_seen.setdefault(name, position)

        positions = {}
        for logical_name, header_names in columns.items():
            for header_name in header_names:
                if header_name in first_seen:
                    positions[logical_name] = first_seen[header_name]
                    break
        return cls(MappingProxyType(positions))

    def text(self, values, name):
        position = self.positions.get(name)
        if position is None or position >= len(values):
            return ''
        return values[position]

    def hours(self, values, name):
        return safe_float_conversion(self.text(values, name))

    def count(self, values, name):
        return safe_int_conversion(self.text(values, name))


def _data_rows(lines, start, stop, min_fields):
    """Yield tokenized rows between start and stop, skipping noise and short rows."""
    for line in lines[start:stop]:
        if not line.strip() or IMPORT_MARKER in line:
            continue
        values = parse_csv_line(line)
        if len(values) < min_fields:
            continue
        yield values


def extract_aircraft(lines, aircraft_header_index, flights_header_index):
    """Build Aircraft records from the lines between the two table headers."""
    columns = ColumnIndex.from_header(parse_csv_line(lines[aircraft_header_index]), AIRCRAFT_COLUMNS)
    return [
        Aircraft(**{name: columns.text(values, name) for name in AIRCRAFT_COLUMNS})
        for values in _data_rows(lines, aircraft_header_index + 1, flights_header_index, MIN_AIRCRAFT_FIELDS)
    ]


def extract_flights(lines, flights_header_index):
    """Build FlightEntry records from every line after the Flights header."""
    header = parse_csv_line(lines[flights_header_index])
    columns = ColumnIndex.from_header(header, FLIGHT_COLUMNS)
    approach_columns = ColumnIndex.from_header(header, {name: (name,) for name in APPROACH_COLUMNS})

    flights = []
    for values in _data_rows(lines, flights_header_index + 1, len(lines), MIN_FLIGHT_FIELDS):
        record = {}
        for name in FLIGHT_COLUMNS:
            if name in FLIGHT_HOUR_FIELDS:
                record[name] = columns.hours(values, name)
            elif name in FLIGHT_COUNT_FIELDS:
                record[name] = columns.count(values, name)
            else:
                record[name] = columns.text(values, name)

        approaches = [approach_columns.text(values, name) for name in APPROACH_COLUMNS]
        record['approaches'] = tuple(approach for approach in approaches if approach)
        flights.append(FlightEntry(**record))
    return flights


def parse_foreflight_text(csv_text):
    """
    Parse the text of a ForeFlight export into LogbookData.

    If either table header is missing, the error is reported and an empty
    LogbookData is returned; callers treat an empty result as failure.
    """
    lines = split_lines(csv_text)
    try:
        aircraft_header_index, flights_header_index = locate_tables(lines)
    except MissingTableError as e:
        print(f"Error parsing ForeFlight logbook: {e}")
        return LogbookData()

    print(f"Found Aircraft table at line {aircraft_header_index} and Flights table at line {flights_header_index}")
    aircraft = extract_aircraft(lines, aircraft_header_index, flights_header_index)
    flights = extract_flights(lines, flights_header_index)
    print(f"Parsed {len(aircraft)} aircraft and {len(flights)} flights")
    return LogbookData(aircraft=tuple(aircraft), flights=tuple(flights))


def parse_foreflight(csv_path):
    """Read a ForeFlight export from disk; unreadable files yield empty LogbookData."""
    print(f"Reading logbook from: {csv_path}")
    try:
        with open(csv_path, encoding='utf-8-sig', errors='replace') as f:
            csv_text = f.read()
    except OSError as e:
        print(f"Error reading ForeFlight logbook '{csv_path}': {e}")
        return LogbookData()
    return parse_foreflight_text(csv_text)
