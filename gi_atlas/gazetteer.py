"""
Static state/union-territory gazetteer for GI origins.

Every key is a surface form exactly as it appears in the GI registry export.
Lookups are exact string matches: the registry spells some states several
ways (and a few wrongly), so each variant gets its own key pointing at the
same canonical centre. No case folding, no fuzzy matching.

The table is built once at import time and exposed read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class StateCoordinate:
    canonical_name: str
    latitude: float
    longitude: float


_RAW_GAZETTEER: dict[str, StateCoordinate] = {}


def _add(surface_forms: list[str], canonical: str, lat: float, lng: float) -> None:
    entry = StateCoordinate(canonical, lat, lng)
    for form in surface_forms:
        _RAW_GAZETTEER[form] = entry


# ── States ────────────────────────────────────────────────────────────

_add(["Andhra Pradesh"], "Andhra Pradesh", 15.9129, 79.74)
_add(["Arunachal Pradesh"], "Arunachal Pradesh", 28.218, 94.7278)
_add(["Assam"], "Assam", 26.2006, 92.9376)
_add(["Bihar"], "Bihar", 25.0961, 85.3131)
_add(["Chhattisgarh", "Chattisgarh"], "Chhattisgarh", 21.2787, 81.8661)
_add(["Goa"], "Goa", 15.2993, 74.124)
_add(["Gujarat"], "Gujarat", 22.2587, 71.1924)
_add(["Haryana"], "Haryana", 29.0588, 76.0856)
_add(["Himachal Pradesh"], "Himachal Pradesh", 31.1048, 77.1734)
_add(["Jharkhand"], "Jharkhand", 23.6102, 85.2799)
_add(["Karnataka"], "Karnataka", 15.3173, 75.7139)
_add(["Kerala"], "Kerala", 10.8505, 76.2711)
_add(["Madhya Pradesh"], "Madhya Pradesh", 22.9734, 78.6569)
_add(["Maharashtra"], "Maharashtra", 19.7515, 75.7139)
_add(["Manipur"], "Manipur", 24.6637, 93.9063)
_add(["Meghalaya"], "Meghalaya", 25.467, 91.3662)
_add(["Mizoram"], "Mizoram", 23.1645, 92.9376)
_add(["Nagaland"], "Nagaland", 26.1584, 94.5624)
_add(["Odisha"], "Odisha", 20.9517, 85.0985)
_add(["Punjab"], "Punjab", 31.1471, 75.3412)
_add(["Rajasthan"], "Rajasthan", 27.0238, 74.2179)
_add(["Sikkim"], "Sikkim", 27.533, 88.5122)
_add(["Tamil Nadu", "Tamilnadu"], "Tamil Nadu", 11.1271, 78.6569)
_add(["Telangana"], "Telangana", 18.1124, 79.0193)
_add(["Tripura"], "Tripura", 23.9408, 91.9882)
_add(["Uttar Pradesh", "Uttar Predesh"], "Uttar Pradesh", 26.8467, 80.9462)  # typo in registry
_add(["Uttarakhand", "Uttarkhand"], "Uttarakhand", 30.0668, 79.0193)
_add(["West Bengal"], "West Bengal", 22.9868, 87.855)

# ── Union territories ─────────────────────────────────────────────────

_add(
    ["Jammu & Kashmir", "Jammu and Kashmir", "Jammu & Kashmir (UT)"],
    "Jammu and Kashmir", 33.7782, 76.5762,
)
_add(["Ladakh", "Ladakh (UT)"], "Ladakh", 34.1526, 77.5771)
_add(["Delhi"], "Delhi", 28.7041, 77.1025)
_add(["Pondicherry"], "Puducherry", 11.9416, 79.8083)
_add(["Andaman and Nicobar Islands"], "Andaman and Nicobar Islands", 11.7401, 92.6586)
_add(["Dadara & Nagar Haveli"], "Dadra and Nagar Haveli", 20.1809, 73.0169)
_add(["Daman Diu"], "Daman and Diu", 20.4283, 72.8397)

# ── Countries (foreign GIs registered in India) ───────────────────────

_add(["Peru"], "Peru", -9.19, -75.0152)
_add(["France"], "France", 46.2276, 2.2137)
_add(["United States of America"], "United States of America", 37.0902, -95.7129)
_add(["United Kingdom"], "United Kingdom", 55.3781, -3.436)
_add(["Italy"], "Italy", 41.8719, 12.5674)
_add(["Portugal"], "Portugal", 39.3999, -8.2245)
_add(["Mexico"], "Mexico", 23.6345, -102.5528)
_add(["Ireland"], "Ireland", 53.1424, -7.6921)
_add(["Chile"], "Chile", -35.6751, -71.543)
_add(["Greece"], "Greece", 39.0742, 21.8243)
_add(["Czech Republic"], "Czech Republic", 49.8175, 15.473)
_add(["Germany"], "Germany", 51.1657, 10.4515)
_add(["Spain"], "Spain", 40.4637, -3.7492)
_add(["Japan"], "Japan", 36.2048, 138.2529)
_add(["Thailand"], "Thailand", 15.87, 100.9925)


STATE_COORDINATES: Mapping[str, StateCoordinate] = MappingProxyType(_RAW_GAZETTEER)

# Keys excluded from the "indianStates" summary count. This is a hand-kept
# list that works around foreign GIs in the registry; membership here is the
# only thing that makes a key "international".
INTERNATIONAL_KEYS: frozenset[str] = frozenset([
    "Peru",
    "France",
    "United States of America",
    "United Kingdom",
    "Italy",
    "Portugal",
    "Mexico",
    "Ireland",
    "Chile",
    "Greece",
    "Czech Republic",
    "Germany",
    "Spain",
    "Japan",
    "Thailand",
])


def lookup(name: str, table: Mapping[str, StateCoordinate] = STATE_COORDINATES) -> Optional[StateCoordinate]:
    """Exact-match lookup of a registry state name."""
    return table.get(name)


def domestic_key_count(
    table: Mapping[str, StateCoordinate] = STATE_COORDINATES,
    excluded: frozenset[str] = INTERNATIONAL_KEYS,
) -> int:
    """Number of table keys (aliases included) not on the exclusion list."""
    return sum(1 for key in table if key not in excluded)
