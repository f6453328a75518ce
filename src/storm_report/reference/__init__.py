"""Static reference tables.

Data that doesn't change with API calls: seeded localities, district
bounding boxes and IPMA area codes, METAR-reporting airports.

Adding a new table:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from storm_report.reference.airports import AIRPORTS as AIRPORTS
from storm_report.reference.airports import Airport as Airport
from storm_report.reference.airports import haversine_km as haversine_km
from storm_report.reference.airports import nearest_airport as nearest_airport
from storm_report.reference.localities import DISTRICT_AREA_CODES as DISTRICT_AREA_CODES
from storm_report.reference.localities import SEEDED_PLACES as SEEDED_PLACES
from storm_report.reference.localities import infer_district as infer_district
from storm_report.reference.localities import seeded_place as seeded_place
