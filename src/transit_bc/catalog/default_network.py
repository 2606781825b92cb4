"""Bundled Niš bus network, loaded when no CATALOG_PATH is configured.

`lines` on a stop is display metadata (lines shown at the stop sign); the
graph is built from LINES only.
"""

STOPS = [
    {"id": 1, "name": "Trg Kralja Milana", "lat": 43.3209, "lon": 21.8958, "lines": ["1", "2", "3", "7", "11"]},
    {"id": 2, "name": "Tvrđava", "lat": 43.3253, "lon": 21.8969, "lines": ["2", "4", "12"]},
    {"id": 3, "name": "Centar", "lat": 43.3181, "lon": 21.8945, "lines": ["1", "3", "5", "8"]},
    {"id": 4, "name": "Železnička stanica", "lat": 43.3167, "lon": 21.9069, "lines": ["4", "6", "9", "11"]},
    {"id": 5, "name": "Univerzitet", "lat": 43.3142, "lon": 21.8978, "lines": ["5", "7", "10"]},
    {"id": 6, "name": "Čair", "lat": 43.3319, "lon": 21.9089, "lines": ["6", "8", "12"]},
    {"id": 7, "name": "Pantelej", "lat": 43.3089, "lon": 21.9167, "lines": ["9", "10", "13"]},
    {"id": 8, "name": "Dušanovac", "lat": 43.3056, "lon": 21.8769, "lines": ["1", "13", "14"]},
    {"id": 9, "name": "Bubanj", "lat": 43.3378, "lon": 21.8856, "lines": ["2", "14", "15"]},
    {"id": 10, "name": "Medijana", "lat": 43.2989, "lon": 21.9025, "lines": ["15", "16", "17"]},
]

LINES = [
    {"id": "2", "stops": [1, 2, 3], "duration": 25},
    {"id": "3", "stops": [1, 3, 4], "duration": 30},
    {"id": "7", "stops": [1, 2, 5], "duration": 35},
    {"id": "9", "stops": [1, 3, 6], "duration": 40},
    {"id": "14", "stops": [1, 4, 7], "duration": 45},
    {"id": "5", "stops": [3, 6, 9], "duration": 20},
    {"id": "11", "stops": [4, 7, 8], "duration": 35},
    {"id": "15", "stops": [2, 8, 10], "duration": 50},
]
