# app/integrations/omdb.py

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from app.errors import ExternalApiError

logger = logging.getLogger(__name__)

SERVICE_NAME = "OMDB"


@dataclass
class SearchResult:
    movies: List[Dict[str, Any]] = field(default_factory=list)
    total_results: str = "0"


class OmdbClient:
    """Thin wrapper around the OMDb search endpoint (?s=<title>&page=<n>)."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "http://www.omdbapi.com/",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            logger.warning("OMDB_API_KEY not configured. Movie search will not work.")
        self.api_key = api_key or ""
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def search_movies(self, title: str, page: int = 1) -> SearchResult:
        params = {
            "apikey": self.api_key,
            "s": title.strip(),
            "page": max(1, page),
        }

        try:
            resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            logger.error("%s API error: %s", SERVICE_NAME, e)
            raise ExternalApiError(SERVICE_NAME, str(e)) from e
        except ValueError as e:
            logger.error("%s API returned invalid JSON: %s", SERVICE_NAME, e)
            raise ExternalApiError(SERVICE_NAME, "invalid JSON response") from e

        if not isinstance(payload, dict):
            logger.error("%s API returned unexpected payload: %r", SERVICE_NAME, payload)
            raise ExternalApiError(SERVICE_NAME, "unexpected response payload")

        if payload.get("Response") == "False" or payload.get("Error"):
            logger.debug("OMDB API returned no results for: %s (%s)", title, payload.get("Error"))
            return SearchResult()

        return SearchResult(
            movies=payload.get("Search") or [],
            total_results=payload.get("totalResults") or "0",
        )
