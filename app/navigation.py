"""The active recipe id travels in the fragment of the browser's location.

Browsers never send the fragment, so it is read from the `HX-Current-URL`
header htmx attaches to every request, and written back with `HX-Push-Url`
so the location changes without a page transition.
"""
from urllib.parse import urlsplit

from starlette.requests import Request
from starlette.responses import Response


CURRENT_URL_HEADER = "HX-Current-URL"
PUSH_URL_HEADER = "HX-Push-Url"


class Location:
    def __init__(self, fragment: str = "") -> None:
        self.fragment = fragment

    def __repr__(self) -> str:
        return f"<Location(fragment={self.fragment})>"

    def read(self, request: Request) -> str:
        """Take the fragment from the request, falling back to `?id=`."""
        current_url = request.headers.get(CURRENT_URL_HEADER, "")
        fragment = urlsplit(current_url).fragment
        self.fragment = fragment or request.query_params.get("id", "")
        return self.fragment

    def push(self, response: Response, fragment: str) -> None:
        self.fragment = fragment
        response.headers[PUSH_URL_HEADER] = f"#{fragment}"

    def active_id(self) -> str | None:
        return self.fragment or None
