"""Seeded localities and district lookups for continental Portugal."""

from __future__ import annotations

from dataclasses import dataclass

from storm_report.schemas import Place

# Resolved without any network call; keys are lower-case names.
SEEDED_PLACES: dict[str, Place] = {
    "espinho": Place(name="Espinho", lat=41.007, lon=-8.641, admin1="Aveiro", country_code="PT"),
    "guetim": Place(name="Guetim", lat=40.984, lon=-8.631, admin1="Aveiro", country_code="PT"),
    "porto": Place(name="Porto", lat=41.149, lon=-8.61, admin1="Porto", country_code="PT"),
    "lisboa": Place(name="Lisboa", lat=38.722, lon=-9.139, admin1="Lisboa", country_code="PT"),
}

DEFAULT_DISTRICT = "Porto"

# IPMA warning area codes by district
DISTRICT_AREA_CODES: dict[str, str] = {
    "aveiro": "AVR",
    "beja": "BJA",
    "braga": "BRG",
    "bragança": "BGC",
    "castelo branco": "CBO",
    "coimbra": "CBR",
    "évora": "EVR",
    "faro": "FAR",
    "guarda": "GDA",
    "leiria": "LRA",
    "lisboa": "LSB",
    "portalegre": "PTG",
    "porto": "PTO",
    "santarém": "STM",
    "setúbal": "STB",
    "viana do castelo": "VCT",
    "vila real": "VRL",
    "viseu": "VIS",
}


@dataclass(frozen=True)
class DistrictBox:
    """Lat/lon box used to guess a district when the geocoder gave none."""

    district: str
    south: float
    north: float
    west: float
    east: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.south < lat < self.north and self.west < lon < self.east


DISTRICT_BOXES: tuple[DistrictBox, ...] = (
    DistrictBox("Aveiro", south=40.95, north=41.05, west=-8.8, east=-8.5),
    DistrictBox("Porto", south=41.1, north=41.3, west=-8.75, east=-8.45),
    DistrictBox("Lisboa", south=38.6, north=38.9, west=-9.3, east=-9.0),
    DistrictBox("Faro", south=36.9, north=37.2, west=-8.1, east=-7.8),
)


def seeded_place(name: str) -> Place | None:
    """Exact, case-insensitive lookup in the seeded table."""
    return SEEDED_PLACES.get(name.strip().lower())


def infer_district(lat: float, lon: float) -> str | None:
    """Guess the district from coordinates, or None outside the known boxes."""
    for box in DISTRICT_BOXES:
        if box.contains(lat, lon):
            return box.district
    return None
