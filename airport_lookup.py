"""
Airport reference data and the route wording used in milestone descriptions.
"""
import airportsdata
import polars as pl

from foreflight_models import AirportInfo

AIRPORT_INFO_FIELDS = [
    'ident', 'type', 'name', 'elevation_ft', 'continent', 'iso_country',
    'iso_region', 'municipality', 'icao_code', 'iata_code', 'gps_code',
    'local_code', 'coordinates',
]


def _coordinates(row):
    if row.get('coordinates'):
        return row['coordinates']
    lat, lon = row.get('latitude_deg'), row.get('longitude_deg')
    if lat and lon:
        return f"{lat}, {lon}"
    return ''


def load_airport_codes(csv_path):
    """
    Load an OurAirports style CSV (ident, name, municipality, iso_region, ...)
    into a dict keyed by ident. Returns an empty dict if the file can't be read.
    """
    try:
        df = pl.read_csv(csv_path, infer_schema_length=0)
    except (OSError, pl.exceptions.PolarsError) as e:
        print(f"Error loading airport data from {csv_path}: {e}")
        return {}

    if 'ident' not in df.columns:
        print(f"Warning: airport data file {csv_path} has no ident column.")
        return {}

    airports = {}
    for row in df.iter_rows(named=True):
        ident = row.get('ident')
        if not ident:
            continue
        values = {name: row.get(name) or '' for name in AIRPORT_INFO_FIELDS}
        values['coordinates'] = _coordinates(row)
        airports[ident] = AirportInfo(**values)
    return airports


def load_bundled_airports():
    """Build the lookup from the airportsdata package, keyed by ICAO code."""
    try:
        records = airportsdata.load('ICAO')
    except (OSError, ValueError) as e:
        print(f"Error loading bundled airport data: {e}")
        return {}

    airports = {}
    for code, airport in records.items():
        country = airport.get('country', '')
        subd = airport.get('subd', '')
        airports[code] = AirportInfo(
            ident=code,
            name=airport.get('name', ''),
            elevation_ft=str(airport.get('elevation', '')),
            iso_country=country,
            iso_region=f"{country}-{subd}" if country and subd else '',
            municipality=airport.get('city', ''),
            icao_code=airport.get('icao', code),
            iata_code=airport.get('iata', ''),
            local_code=airport.get('lid', ''),
            coordinates=f"{airport['lat']}, {airport['lon']}" if 'lat' in airport and 'lon' in airport else '',
        )
    return airports


def load_airport_data(csv_path=None):
    """
    Load airport reference data.

    Reads csv_path when given, otherwise falls back to the data bundled with
    airportsdata. A failed load gives an empty dict, in which case every
    airport is displayed by its bare identifier.
    """
    if csv_path:
        return load_airport_codes(csv_path)
    return load_bundled_airports()


def format_airport_display(identifier, info):
    """Format airport display text, e.g. 'Front Royal-Warren County Airport in Front Royal, VA (KFRR)'."""
    if info is None or not info.name:
        return identifier

    if info.municipality and info.iso_region:
        # iso_region looks like "US-VA"
        subdivision = info.iso_region.split('-', 1)[1] if '-' in info.iso_region else info.iso_region
        return f"{info.name} in {info.municipality}, {subdivision} ({identifier})"
    elif info.municipality:
        return f"{info.name} in {info.municipality} ({identifier})"
    return f"{info.name} ({identifier})"


def format_route_description(origin, destination, airports):
    """Describe where a flight went, for use in milestone text."""
    if origin == destination:
        return f"during a local flight at {format_airport_display(origin, airports.get(origin))}"

    return (
        f"during flight from {format_airport_display(origin, airports.get(origin))} "
        f"to {format_airport_display(destination, airports.get(destination))}"
    )
