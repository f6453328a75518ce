"""IPMA open-data endpoints (Instituto Português do Mar e da Atmosfera).

API docs: https://api.ipma.pt/
"""

LIGHTNING_LAST24H_API = "https://api.ipma.pt/open-data/lightning/last24h.json"
WARNINGS_API = "https://api.ipma.pt/open-data/forecast/warnings/warnings_www.json"
WARNINGS_PAGE = "https://www.ipma.pt/pt/"

LIGHTNING_SOURCE = "ipma-lightning"
