"""
CountData API Python client example.

Uses the requests library and sends the key in the x-api-key header.
Run: pip install requests

Usage:
    from docs.python_sdk_example import CountDataClient
    client = CountDataClient("http://localhost:5000", api_key="secret")
    client.add("06/05/2025", tf_count=5, da_count=3)
    print(client.get("06/05/2025"))
"""

from __future__ import annotations

import os
from typing import Any

import requests


class CountDataClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class CountDataClient:
    """Client for the CountData API."""

    def __init__(self, base_url: str = "http://localhost:5000", api_key: str = "", timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers["x-api-key"] = api_key

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        resp = self._session.request(method, url, params=params, json=json, timeout=self.timeout)
        if not resp.ok:
            if resp.headers.get("content-type", "").startswith("application/json"):
                body = resp.json()
                detail = body.get("error") or body.get("message") or resp.text
            else:
                detail = resp.text
            raise CountDataClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp

    def create_table(self) -> dict[str, str]:
        """Create the backing table if missing (no key needed)."""
        return self._request("GET", "/create").json()

    def status(self) -> dict[str, str]:
        """Liveness probe."""
        return self._request("GET", "/api").json()

    def add(self, date: str, tf_count: int, da_count: int) -> dict[str, str]:
        """Insert counts for a DD/MM/YYYY date."""
        body = {"date": date, "tf_count": tf_count, "da_count": da_count}
        return self._request("POST", "/api/add", json=body).json()

    def all(self) -> list[dict[str, Any]]:
        """All records, ascending by date."""
        return self._request("GET", "/api/all/data").json()

    def get(self, date: str) -> dict[str, Any]:
        """One record by DD/MM/YYYY date."""
        return self._request("GET", "/api/data", params={"date": date}).json()

    def update(self, date: str, tf_count: int, da_count: int) -> dict[str, Any]:
        """Replace both counts for an existing date; returns the updated record."""
        body = {"tf_count": tf_count, "da_count": da_count}
        return self._request("PUT", "/api/update", params={"date": date}, json=body).json()["updated"]

    def delete(self, date: str) -> dict[str, Any]:
        """Delete the record for a date."""
        return self._request("DELETE", "/api/delete", params={"date": date}).json()


# -----------------------------------------------------------------------------
# Example usage
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    client = CountDataClient("http://localhost:5000", api_key=os.getenv("API_KEY", ""))

    print("Status:", client.status())
    print("Table:", client.create_table())

    try:
        client.add("06/05/2025", tf_count=5, da_count=3)
    except CountDataClientError as e:
        if e.status_code == 500:
            print("Insert failed (date may already exist)")
        else:
            raise

    print("Record:", client.get("06/05/2025"))
    print("Updated:", client.update("06/05/2025", tf_count=9, da_count=1))
    print("All:", len(client.all()), "records")
    print("Deleted:", client.delete("06/05/2025"))
