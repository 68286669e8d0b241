from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests


@dataclass
class APIError(Exception):
    status_code: int
    message: str
    details: Any = None


class ListingAPI:
    """Client for the review endpoint.

    Every endpoint answers with the ``{success, data, message?}`` envelope,
    including on 4xx/5xx, so error messages are lifted out of the body.
    ``status_code`` is 0 when the API could not be reached at all.
    """

    def __init__(self, base_url: str, *, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, method: str, path: str, *, params: Optional[dict] = None, json: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method=method.upper(),
                url=url,
                headers={"Accept": "application/json"},
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise APIError(0, f"Could not reach {url}", str(e)) from e

        try:
            payload = resp.json()
        except ValueError:
            payload = resp.text

        if resp.status_code >= 400:
            msg = None
            if isinstance(payload, dict):
                msg = payload.get("message") or payload.get("detail")
            raise APIError(resp.status_code, msg or f"HTTP {resp.status_code}", payload)

        return payload

    # --- Reviews ---
    def list_reviews(self, property_id: str) -> Any:
        return self.request("GET", f"/api/properties/{quote(property_id, safe='')}/reviews")

    def add_review(
        self,
        property_id: str,
        *,
        user_id: str,
        user_name: str,
        rating: float | str,
        comment: str,
        user_image: str | None = None,
    ) -> Any:
        body = {"userId": user_id, "userName": user_name, "rating": rating, "comment": comment}
        if user_image:
            body["userImage"] = user_image
        return self.request("POST", f"/api/properties/{quote(property_id, safe='')}/reviews", json=body)
