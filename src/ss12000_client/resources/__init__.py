"""Resource facades for the SS12000 resource families."""

from ._collection import (
    DeletableResourceCollection,
    ListOnlyCollection,
    LookupRequest,
    ResourceCollection,
)
from .filters import (
    ActivityFilters,
    AggregatedAttendanceFilters,
    AttendanceEventFilters,
    AttendanceFilters,
    AttendanceScheduleFilters,
    CalendarEventFilters,
    DeletedEntityFilters,
    DutyFilters,
    ExpandableListFilters,
    GradeFilters,
    GroupFilters,
    ListFilters,
    LogFilters,
    OrganisationFilters,
    PersonFilters,
    PlacementFilters,
    ProgrammeFilters,
    ResourceFilters,
    RoomFilters,
    SchoolUnitOfferingFilters,
    StatisticsFilters,
    StudyPlanFilters,
    SyllabusFilters,
)
from .subscriptions import (
    ResourceTypeRef,
    SubscriptionCollection,
    SubscriptionCreate,
    SubscriptionUpdate,
)

__all__ = [
    # Collections
    "ListOnlyCollection",
    "ResourceCollection",
    "DeletableResourceCollection",
    "SubscriptionCollection",
    # Bodies
    "LookupRequest",
    "ResourceTypeRef",
    "SubscriptionCreate",
    "SubscriptionUpdate",
    # Filters
    "ListFilters",
    "ExpandableListFilters",
    "OrganisationFilters",
    "PersonFilters",
    "PlacementFilters",
    "DutyFilters",
    "GroupFilters",
    "ProgrammeFilters",
    "StudyPlanFilters",
    "SyllabusFilters",
    "SchoolUnitOfferingFilters",
    "ActivityFilters",
    "CalendarEventFilters",
    "AttendanceFilters",
    "AttendanceEventFilters",
    "AttendanceScheduleFilters",
    "AggregatedAttendanceFilters",
    "GradeFilters",
    "ResourceFilters",
    "RoomFilters",
    "DeletedEntityFilters",
    "LogFilters",
    "StatisticsFilters",
]
