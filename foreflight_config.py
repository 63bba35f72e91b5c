"""
Constants describing the ForeFlight logbook export and the derived reports.
"""

# Table headers - each table starts on the first line beginning with these prefixes
AIRCRAFT_HEADER_PREFIX = 'AircraftID,TypeCode,Year,Make,Model'
FLIGHTS_HEADER_PREFIX = 'Date,AircraftID,From,To,Route'

# Banner lines ForeFlight writes around the tables
IMPORT_MARKER = 'ForeFlight Logbook Import'

# Rows with fewer fields than this are dropped
MIN_AIRCRAFT_FIELDS = 13
MIN_FLIGHT_FIELDS = 30

# Aircraft table - logical field name mapped to accepted header names
AIRCRAFT_COLUMNS = {
    'aircraft_id': ('AircraftID',),
    'type_code': ('TypeCode',),
    'year': ('Year',),
    'make': ('Make',),
    'model': ('Model',),
    'gear_type': ('GearType',),
    'engine_type': ('EngineType',),
    'equip_type': ('equipType', 'equipType (FAA)', 'EquipType'),
    'aircraft_class': ('aircraftClass', 'aircraftClass (FAA)', 'Class'),
    'complex_aircraft': ('complexAircraft', 'Complex'),
    'taa': ('taa', 'TAA'),
    'high_performance': ('highPerformance', 'HighPerformance'),
    'pressurized': ('pressurized', 'Pressurized'),
}

# Flights table - logical field name mapped to the exact header name
FLIGHT_COLUMNS = {
    'date': ('Date',),
    'aircraft_id': ('AircraftID',),
    'origin': ('From',),
    'destination': ('To',),
    'route': ('Route',),
    'time_out': ('TimeOut',),
    'time_off': ('TimeOff',),
    'time_on': ('TimeOn',),
    'time_in': ('TimeIn',),
    'total_time': ('TotalTime',),
    'pic': ('PIC',),
    'sic': ('SIC',),
    'night': ('Night',),
    'solo': ('Solo',),
    'cross_country': ('CrossCountry',),
    'ifr': ('IFR',),
    'actual_instrument': ('ActualInstrument',),
    'simulated_instrument': ('SimulatedInstrument',),
    'day_landings': ('DayLandingsFullStop',),
    'night_landings': ('NightLandingsFullStop',),
    'all_landings': ('AllLandings',),
    'dual_received': ('DualReceived',),
    'dual_given': ('DualGiven',),
    'pilot_comments': ('PilotComments',),
    'instructor_comments': ('InstructorComments',),
    'flight_review': ('Flight Review (FAA)',),
    'ipc': ('IPC (FAA)',),
    'checkride': ('Checkride (FAA)',),
}

APPROACH_COLUMNS = [f'Approach{n}' for n in range(1, 7)]

# Hour fields parsed as floats, landing fields parsed as integers
FLIGHT_HOUR_FIELDS = [
    'total_time', 'pic', 'sic', 'night', 'solo', 'cross_country', 'ifr',
    'actual_instrument', 'simulated_instrument', 'dual_received', 'dual_given',
]
FLIGHT_COUNT_FIELDS = ['day_landings', 'night_landings', 'all_landings']

# Cumulative flight hours that count as career milestones
HOUR_MILESTONES = [10, 25, 50, 100, 200, 300, 400, 500, 1000, 1500, 2000]

# Checkride comment keyword -> certification title, first match wins
CERTIFICATION_TITLES = [
    ('Private', 'Private Pilot Certificate'),
    ('Instrument', 'Instrument Rating'),
    ('Commercial', 'Commercial Pilot Certificate'),
    ('CFI', 'Certified Flight Instructor'),
    ('CFII', 'CFI Instrument'),
    ('MEI', 'Multi-Engine Instructor'),
    ('ATP', 'Airline Transport Pilot'),
]

# Currency windows and minimums
PASSENGER_CURRENCY_DAYS = 90
PASSENGER_CURRENCY_LANDINGS = 3
NIGHT_CURRENCY_LANDINGS = 3
INSTRUMENT_CURRENCY_MONTHS = 6
INSTRUMENT_CURRENCY_APPROACHES = 6
HOLDING_KEYWORD = 'hold'

# Timezone used to decide what "today" is for currency checks
DEFAULT_TIMEZONE = 'UTC'

# OurAirports style reference file; the bundled airportsdata set is used when absent
DEFAULT_AIRPORT_CODES_PATH = 'data/airport-codes.csv'

# Tabular export headers
EXPORT_AIRCRAFT_HEADER = [
    'AircraftID', 'TypeCode', 'Year', 'Make', 'Model', 'GearType', 'EngineType',
    'equipType', 'aircraftClass', 'complexAircraft', 'taa', 'highPerformance',
    'pressurized',
]
EXPORT_FLIGHTS_HEADER = [
    'Date', 'AircraftID', 'From', 'To', 'Route', 'TotalTime', 'PIC', 'SIC',
    'Night', 'Solo', 'CrossCountry', 'IFR', 'ActualInstrument',
    'SimulatedInstrument', 'Approaches', 'DayLandings', 'NightLandings',
    'AllLandings', 'DualReceived', 'DualGiven', 'PilotComments',
]
EXPORT_FORMATS = ['json', 'csv']
