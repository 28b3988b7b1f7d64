import json
import logging
import time
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from .errors import ConfigurationError, TransportFailure
from .observability import log_request
from .outcome import Failure, JsonValue, Outcome
from .query import Filters, append_query, join_url, to_query_params
from .resources import (
    ActivityFilters,
    AggregatedAttendanceFilters,
    AttendanceEventFilters,
    AttendanceFilters,
    AttendanceScheduleFilters,
    CalendarEventFilters,
    DeletableResourceCollection,
    DeletedEntityFilters,
    DutyFilters,
    GradeFilters,
    GroupFilters,
    ListFilters,
    ListOnlyCollection,
    LogFilters,
    OrganisationFilters,
    PersonFilters,
    PlacementFilters,
    ProgrammeFilters,
    ResourceCollection,
    ResourceFilters,
    RoomFilters,
    SchoolUnitOfferingFilters,
    StatisticsFilters,
    StudyPlanFilters,
    SubscriptionCollection,
    SyllabusFilters,
)
from .response import normalize_response

DEFAULT_TIMEOUT_SECONDS = 30.0


class SS12000Client:
    """
    Async client for an SS12000 school-data API.
    - Holds base URL, bearer token and the shared httpx transport
    - Exactly one HTTP call per request; no retries, caching or rate limiting
    - send() returns an Outcome (Success | Empty | Failure); request() unwraps it
    - Resource families are bound as attributes (client.persons.list(...))
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").strip()
        auth_token = (auth_token or "").strip()

        if not base_url:
            raise ConfigurationError("base_url must be provided.")

        self.log = logger or logging.getLogger("ss12000_client.client")

        if not base_url.lower().startswith("https://"):
            self.log.warning(
                "Base URL does not use HTTPS. All communication should occur over "
                "HTTPS in production environments.",
                extra={"url": base_url},
            )
        if not auth_token:
            self.log.warning(
                "Authentication token is missing. Calls may fail if the API "
                "requires authentication."
            )

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

        headers = {"Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self.headers: Mapping[str, str] = MappingProxyType(headers)

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)
        self._closed = False

        self._bind_resources()

    def _bind_resources(self) -> None:
        self.organisations = ResourceCollection(
            self, "/organisations", OrganisationFilters, expandable=False
        )
        self.persons = ResourceCollection(self, "/persons", PersonFilters)
        self.placements = ResourceCollection(self, "/placements", PlacementFilters)
        self.duties = ResourceCollection(self, "/duties", DutyFilters)
        self.groups = ResourceCollection(self, "/groups", GroupFilters)
        self.programmes = ResourceCollection(
            self, "/programmes", ProgrammeFilters, lookup_expandable=False
        )
        self.study_plans = ResourceCollection(self, "/studyplans", StudyPlanFilters)
        self.syllabuses = ResourceCollection(
            self, "/syllabuses", SyllabusFilters, expandable=False
        )
        self.school_unit_offerings = ResourceCollection(
            self, "/schoolUnitOfferings", SchoolUnitOfferingFilters
        )
        self.activities = ResourceCollection(self, "/activities", ActivityFilters)
        self.calendar_events = ResourceCollection(
            self, "/calendarEvents", CalendarEventFilters
        )
        self.attendances = DeletableResourceCollection(
            self, "/attendances", AttendanceFilters
        )
        self.attendance_events = ResourceCollection(
            self, "/attendanceEvents", AttendanceEventFilters
        )
        self.attendance_schedules = ResourceCollection(
            self, "/attendanceSchedules", AttendanceScheduleFilters
        )
        self.aggregated_attendance = ResourceCollection(
            self, "/aggregatedAttendance", AggregatedAttendanceFilters
        )
        self.grades = ResourceCollection(self, "/grades", GradeFilters)
        self.resources = ResourceCollection(
            self, "/resources", ResourceFilters, expandable=False
        )
        self.rooms = ResourceCollection(self, "/rooms", RoomFilters, expandable=False)
        self.subscriptions = SubscriptionCollection(self, "/subscriptions", ListFilters)
        self.deleted_entities = ListOnlyCollection(
            self, "/deletedEntities", DeletedEntityFilters
        )
        self.log_entries = ListOnlyCollection(self, "/log", LogFilters)
        self.statistics = ListOnlyCollection(self, "/statistics", StatisticsFilters)

    @classmethod
    def from_env(cls, **kwargs) -> "SS12000Client":
        """Same as config.create_client_from_env()."""
        from .config import create_client_from_env

        return create_client_from_env(client_cls=cls, **kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_auth(self) -> bool:
        return "Authorization" in self.headers

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "SS12000Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def build_url(self, path: str, params: Optional[Filters] = None) -> str:
        return append_query(join_url(self.base_url, path), to_query_params(params))

    def build_request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Filters] = None,
        json_body: Any = None,
    ) -> httpx.Request:
        """Build a fresh request envelope; never reused across calls."""
        url = self.build_url(path, params)
        headers = dict(self.headers)
        content: Optional[bytes] = None

        if json_body is not None:
            if isinstance(json_body, BaseModel):
                payload = json_body.model_dump(
                    mode="json", by_alias=True, exclude_none=True
                )
            else:
                payload = to_jsonable_python(json_body, by_alias=True)
            content = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        return self.http.build_request(
            method.upper(), url, headers=headers, content=content
        )

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Filters] = None,
        json_body: Any = None,
        resource: Optional[str] = None,
    ) -> Outcome:
        """
        Core request method.
        - Performs exactly one HTTP call
        - Returns Success, Empty, or Failure carrying TransportFailure,
          HttpStatusError or DecodeError
        - Raises only for programming errors (closed client, bad filter types)
        """
        if self._closed:
            raise ConfigurationError("SS12000Client is closed.")

        request = self.build_request(method, path, params=params, json_body=json_body)
        method = request.method
        url = str(request.url)
        start = time.perf_counter()

        try:
            resp = await self.http.send(request, stream=True)
        except httpx.HTTPError as exc:
            outcome: Outcome = Failure(
                TransportFailure(
                    f"Network/timeout error calling {method} {url}: {exc}",
                    method=method,
                    url=url,
                    cause=exc,
                )
            )
        else:
            try:
                outcome = await normalize_response(resp, method=method, url=url)
            finally:
                await resp.aclose()

        log_request(
            self.log,
            outcome,
            method=method,
            url=url,
            duration_ms=int((time.perf_counter() - start) * 1000),
            resource=resource,
        )
        return outcome

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Filters] = None,
        json_body: Any = None,
        resource: Optional[str] = None,
    ) -> JsonValue:
        """send() and unwrap: decoded JSON, None for Empty, or raise the error."""
        outcome = await self.send(
            method, path, params=params, json_body=json_body, resource=resource
        )
        return outcome.unwrap()

    async def get(
        self,
        path: str,
        *,
        params: Optional[Filters] = None,
        resource: Optional[str] = None,
    ) -> Outcome:
        return await self.send("GET", path, params=params, resource=resource)

    async def post(
        self,
        path: str,
        *,
        json_body: Any,
        params: Optional[Filters] = None,
        resource: Optional[str] = None,
    ) -> Outcome:
        return await self.send(
            "POST", path, params=params, json_body=json_body, resource=resource
        )

    async def patch(
        self, path: str, *, json_body: Any, resource: Optional[str] = None
    ) -> Outcome:
        return await self.send("PATCH", path, json_body=json_body, resource=resource)

    async def delete(self, path: str, *, resource: Optional[str] = None) -> Outcome:
        return await self.send("DELETE", path, resource=resource)
