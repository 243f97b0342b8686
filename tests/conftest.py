from typing import Dict, List, Union

import requests


class FakeResponse:
    """Minimal stand-in for requests.Response used as a context manager."""

    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code
        self.closed = False

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Serves pages from a dict; an exception value is raised instead."""

    def __init__(self, pages: Dict[str, Union[str, Exception]]) -> None:
        self.pages = pages
        self.requested: List[str] = []
        self.responses: List[FakeResponse] = []
        self.headers: Dict[str, str] = {}
        self.last_kwargs: Dict[str, object] = {}
        self.closed = False

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.requested.append(url)
        self.last_kwargs = kwargs
        page = self.pages.get(url)
        if page is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(page, Exception):
            raise page
        resp = FakeResponse(page.encode("utf-8"))
        self.responses.append(resp)
        return resp

    def close(self) -> None:
        self.closed = True


def anchors(*hrefs: str) -> str:
    """Build an HTML page linking to each href in order."""
    body = "".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html><body>{body}</body></html>"


