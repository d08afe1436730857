"""
Consented browsing session against the cattle lookup portal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup, Tag

from jptag.config.models import PortalSettings
from jptag.scraping.logging_utils import log_event
from jptag.scraping.parsing.forms import HTMLForm, find_form
from jptag.scraping.rate_limiter import RequestThrottle

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class NavigationError(RuntimeError):
    """
    Raised when the portal cannot be reached or does not look as expected.

    `structural` marks failures that repeating the request will not fix
    (missing form or field, non-retryable HTTP status).
    """

    def __init__(self, message: str, *, structural: bool = False) -> None:
        super().__init__(message)
        self.structural = structural


@dataclass
class LookupSession:
    """
    Browser-like state carried from one query to the next.
    """

    http: requests.Session
    page_url: str
    search_form: HTMLForm


class SessionNavigator:
    """
    Accepts the agreement once, then submits the search form per tag ID.
    """

    def __init__(
        self,
        *,
        settings: PortalSettings,
        http_session: requests.Session | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        self.settings = settings
        self._http_session = http_session
        self._owned_http: requests.Session | None = None
        self._throttle = throttle or RequestThrottle(
            min_interval_seconds=settings.request_interval_seconds
        )
        self.request_headers = {"User-Agent": settings.user_agent}

    def open_session(self) -> LookupSession:
        """
        Submit the agreement form and return a session sitting on the search form.
        """

        http = self._http_session or self._new_http_session()
        agreement_url = self.settings.agreement_url
        response = self._send(http, method="GET", url=agreement_url)
        agreement_form = find_form(
            self._soup(response),
            self.settings.agreement_form,
            page_url=response.url or agreement_url,
        )
        if agreement_form is None:
            raise NavigationError(
                f"Agreement form '{self.settings.agreement_form}' not found at {agreement_url}",
                structural=True,
            )

        response = self._submit(http, agreement_form)
        page_url = response.url or agreement_form.action
        search_form = find_form(self._soup(response), self.settings.search_form, page_url=page_url)
        if search_form is None:
            raise NavigationError(
                f"Search form '{self.settings.search_form}' not found after accepting the agreement",
                structural=True,
            )

        log_event(logger, logging.INFO, "session_opened", page_url=page_url)
        return LookupSession(http=http, page_url=page_url, search_form=search_form)

    def query(self, session: LookupSession, tag_id: str) -> list[Tag]:
        """
        Submit one search and return the result-table cells in document order.

        An empty list means the portal returned no record for `tag_id`.
        """

        if not session.search_form.has_field(self.settings.id_field):
            raise NavigationError(
                f"Search form has no '{self.settings.id_field}' field",
                structural=True,
            )
        form = session.search_form.with_value(self.settings.id_field, str(tag_id))
        response = self._submit(session.http, form)
        page_url = response.url or form.action
        soup = self._soup(response)

        session.page_url = page_url
        next_form = find_form(soup, self.settings.search_form, page_url=page_url)
        if next_form is not None and next_form.has_field(self.settings.id_field):
            session.search_form = next_form

        return [cell for cell in soup.select(self.settings.result_selector) if isinstance(cell, Tag)]

    def close(self) -> None:
        """
        Close the HTTP session opened by this navigator. Injected sessions are left open.
        """

        if self._owned_http is not None:
            self._owned_http.close()
            self._owned_http = None

    def _new_http_session(self) -> requests.Session:
        self.close()
        self._owned_http = requests.Session()
        return self._owned_http

    def _submit(self, http: requests.Session, form: HTMLForm) -> requests.Response:
        payload = form.submission()
        if form.method == "POST":
            return self._send(http, method="POST", url=form.action, data=payload)
        return self._send(http, method="GET", url=form.action, params=payload)

    def _send(
        self,
        http: requests.Session,
        *,
        method: str,
        url: str,
        data: list[tuple[str, str]] | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> requests.Response:
        self._throttle.wait()
        try:
            response = http.request(
                method,
                url,
                data=data,
                params=params,
                headers=self.request_headers,
                timeout=self.settings.timeout_seconds,
                allow_redirects=True,
            )
            response.raise_for_status()
            return response
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise NavigationError(
                f"{method} {url} failed with status={status_code}",
                structural=status_code not in RETRYABLE_STATUS_CODES,
            ) from exc
        except requests.RequestException as exc:
            raise NavigationError(f"{method} {url} failed: {exc}") from exc

    @staticmethod
    def _soup(response: requests.Response) -> BeautifulSoup:
        # Bytes so the page's own charset declaration wins over requests' guess.
        return BeautifulSoup(response.content, "html.parser")
