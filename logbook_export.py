"""
Export parsed logbook data as JSON or as a two-section CSV file.
"""
import io
import json
from dataclasses import asdict

import pandas as pd

from foreflight_config import EXPORT_AIRCRAFT_HEADER, EXPORT_FLIGHTS_HEADER, EXPORT_FORMATS


def logbook_to_json(data):
    """Serialize the full LogbookData, keeping every field."""
    return json.dumps(asdict(data), indent=2)


def aircraft_frame(data):
    rows = [
        [
            plane.aircraft_id, plane.type_code, plane.year, plane.make, plane.model,
            plane.gear_type, plane.engine_type, plane.equip_type, plane.aircraft_class,
            plane.complex_aircraft, plane.taa, plane.high_performance, plane.pressurized,
        ]
        for plane in data.aircraft
    ]
    return pd.DataFrame(rows, columns=EXPORT_AIRCRAFT_HEADER)


def flights_frame(data):
    """
    One row per flight. Approaches are joined with '|' and commas in the
    pilot comments become ';' so the comment stays in one column.
    """
    rows = [
        [
            flight.date, flight.aircraft_id, flight.origin, flight.destination, flight.route,
            flight.total_time, flight.pic, flight.sic, flight.night, flight.solo,
            flight.cross_country, flight.ifr, flight.actual_instrument,
            flight.simulated_instrument, '|'.join(flight.approaches),
            flight.day_landings, flight.night_landings, flight.all_landings,
            flight.dual_received, flight.dual_given,
            flight.pilot_comments.replace(',', ';'),
        ]
        for flight in data.flights
    ]
    return pd.DataFrame(rows, columns=EXPORT_FLIGHTS_HEADER)


def logbook_to_csv(data):
    """Aircraft rows, a blank line, then flight rows, each section with its own header."""
    buffer = io.StringIO()
    aircraft_frame(data).to_csv(buffer, index=False, lineterminator='\n')
    buffer.write('\n')
    flights_frame(data).to_csv(buffer, index=False, lineterminator='\n')
    return buffer.getvalue()


def export_logbook(data, fmt, output_path):
    """
    Write the logbook to output_path in the given format ('json' or 'csv').

    Returns True on success, False if the format is unknown or the file
    could not be written.
    """
    if fmt not in EXPORT_FORMATS:
        print(f"Error exporting logbook: unsupported format '{fmt}'")
        return False

    content = logbook_to_json(data) if fmt == 'json' else logbook_to_csv(data)
    try:
        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
    except OSError as e:
        print(f"Error exporting logbook: {e}")
        return False
    return True
