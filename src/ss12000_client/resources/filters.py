"""
Per-family filter configuration.

Each model enumerates the filters a list endpoint recognizes, keyed by the
wire name (field alias). Unknown keys are kept as extra filters so newer
server filters stay reachable without a client release.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListFilters(BaseModel):
    """Filters shared by every list endpoint, including paging."""

    meta_created_before: Optional[datetime] = Field(
        default=None, alias="meta.created.before"
    )
    meta_created_after: Optional[datetime] = Field(
        default=None, alias="meta.created.after"
    )
    meta_modified_before: Optional[datetime] = Field(
        default=None, alias="meta.modified.before"
    )
    meta_modified_after: Optional[datetime] = Field(
        default=None, alias="meta.modified.after"
    )
    expand_reference_names: Optional[bool] = Field(
        default=None, alias="expandReferenceNames"
    )
    sortkey: Optional[str] = None
    limit: Optional[int] = None
    page_token: Optional[str] = Field(default=None, alias="pageToken")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_filters(self) -> Dict[str, Any]:
        """
        Ordered wire mapping: family filters first, then the shared
        meta/expand/paging filters, then extras.

        Unset filters (None or an empty string) are dropped, so a missing
        pageToken never goes out as `pageToken=`.
        """
        fields = type(self).model_fields
        own = [name for name in fields if name not in _SHARED_ORDER]
        shared = [name for name in _SHARED_ORDER if name in fields]

        filters: Dict[str, Any] = {}
        for name in own + shared:
            value = getattr(self, name)
            if _is_unset(value):
                continue
            filters[fields[name].alias or name] = value

        for key, value in (self.model_extra or {}).items():
            if not _is_unset(value):
                filters[key] = value
        return filters


class ExpandableListFilters(ListFilters):
    expand: Optional[List[str]] = None


# Wire order of the shared filters; expand precedes the paging filters.
_SHARED_ORDER = (
    "meta_created_before",
    "meta_created_after",
    "meta_modified_before",
    "meta_modified_after",
    "expand",
    "expand_reference_names",
    "sortkey",
    "limit",
    "page_token",
)


def _is_unset(value: Any) -> bool:
    return value is None or value == ""


class OrganisationFilters(ListFilters):
    parent: Optional[List[str]] = None
    school_unit_code: Optional[List[str]] = Field(default=None, alias="schoolUnitCode")
    organisation_code: Optional[List[str]] = Field(
        default=None, alias="organisationCode"
    )
    municipality_code: Optional[str] = Field(default=None, alias="municipalityCode")
    type: Optional[List[str]] = None
    school_types: Optional[List[str]] = Field(default=None, alias="schoolTypes")
    start_date_on_or_before: Optional[date] = Field(
        default=None, alias="startDate.onOrBefore"
    )
    start_date_on_or_after: Optional[date] = Field(
        default=None, alias="startDate.onOrAfter"
    )
    end_date_on_or_before: Optional[date] = Field(
        default=None, alias="endDate.onOrBefore"
    )
    end_date_on_or_after: Optional[date] = Field(
        default=None, alias="endDate.onOrAfter"
    )


class PersonFilters(ExpandableListFilters):
    name: Optional[str] = None
    civic_no: Optional[str] = Field(default=None, alias="civicNo")
    edu_person_principal_name: Optional[str] = Field(
        default=None, alias="eduPersonPrincipalName"
    )
    identifier_value: Optional[str] = Field(default=None, alias="identifiers.value")
    identifier_context: Optional[str] = Field(
        default=None, alias="identifiers.context"
    )
    relationship_entity_type: Optional[str] = Field(
        default=None, alias="relationship.entity.type"
    )
    relationship_organisation: Optional[str] = Field(
        default=None, alias="relationship.organisation"
    )
    relationship_start_on_or_before: Optional[date] = Field(
        default=None, alias="relationship.startDate.onOrBefore"
    )
    relationship_start_on_or_after: Optional[date] = Field(
        default=None, alias="relationship.startDate.onOrAfter"
    )
    relationship_end_on_or_before: Optional[date] = Field(
        default=None, alias="relationship.endDate.onOrBefore"
    )
    relationship_end_on_or_after: Optional[date] = Field(
        default=None, alias="relationship.endDate.onOrAfter"
    )


class PlacementFilters(ExpandableListFilters):
    organisation: Optional[str] = None
    group: Optional[str] = None
    start_date_on_or_before: Optional[date] = Field(
        default=None, alias="startDate.onOrBefore"
    )
    start_date_on_or_after: Optional[date] = Field(
        default=None, alias="startDate.onOrAfter"
    )
    end_date_on_or_before: Optional[date] = Field(
        default=None, alias="endDate.onOrBefore"
    )
    end_date_on_or_after: Optional[date] = Field(
        default=None, alias="endDate.onOrAfter"
    )
    child: Optional[str] = None
    owner: Optional[str] = None


class DutyFilters(ExpandableListFilters):
    person: Optional[List[str]] = None
    organisation: Optional[List[str]] = None
    duty_role: Optional[List[str]] = Field(default=None, alias="dutyRole")
    start_date_on_or_before: Optional[date] = Field(
        default=None, alias="startDate.onOrBefore"
    )
    start_date_on_or_after: Optional[date] = Field(
        default=None, alias="startDate.onOrAfter"
    )
    end_date_on_or_before: Optional[date] = Field(
        default=None, alias="endDate.onOrBefore"
    )
    end_date_on_or_after: Optional[date] = Field(
        default=None, alias="endDate.onOrAfter"
    )


class GroupFilters(ExpandableListFilters):
    group_type: Optional[List[str]] = Field(default=None, alias="groupType")
    organisation: Optional[List[str]] = None
    school_types: Optional[List[str]] = Field(default=None, alias="schoolTypes")
    start_date_on_or_before: Optional[date] = Field(
        default=None, alias="startDate.onOrBefore"
    )
    start_date_on_or_after: Optional[date] = Field(
        default=None, alias="startDate.onOrAfter"
    )
    end_date_on_or_before: Optional[date] = Field(
        default=None, alias="endDate.onOrBefore"
    )
    end_date_on_or_after: Optional[date] = Field(
        default=None, alias="endDate.onOrAfter"
    )


class ProgrammeFilters(ListFilters):
    school_type: Optional[List[str]] = Field(default=None, alias="schoolType")
    code: Optional[str] = None
    parent_programme: Optional[str] = Field(default=None, alias="parentProgramme")


class ActivityFilters(ExpandableListFilters):
    member: Optional[str] = None
    teacher: Optional[str] = None
    organisation: Optional[str] = None
    group: Optional[str] = None


class CalendarEventFilters(ExpandableListFilters):
    start_time_on_or_after: Optional[datetime] = Field(
        default=None, alias="startTime.onOrAfter"
    )
    start_time_on_or_before: Optional[datetime] = Field(
        default=None, alias="startTime.onOrBefore"
    )
    end_time_on_or_after: Optional[datetime] = Field(
        default=None, alias="endTime.onOrAfter"
    )
    end_time_on_or_before: Optional[datetime] = Field(
        default=None, alias="endTime.onOrBefore"
    )
    activity: Optional[str] = None
    student: Optional[str] = None
    teacher: Optional[str] = None
    organisation: Optional[str] = None
    group: Optional[str] = None


class DeletedEntityFilters(ListFilters):
    after: Optional[datetime] = None
    entities: Optional[List[str]] = None


# Families whose list endpoints take only the shared filters (plus extras).


class StudyPlanFilters(ExpandableListFilters):
    pass


class SyllabusFilters(ListFilters):
    pass


class SchoolUnitOfferingFilters(ExpandableListFilters):
    pass


class AttendanceFilters(ExpandableListFilters):
    pass


class AttendanceEventFilters(ExpandableListFilters):
    pass


class AttendanceScheduleFilters(ExpandableListFilters):
    pass


class AggregatedAttendanceFilters(ExpandableListFilters):
    pass


class GradeFilters(ExpandableListFilters):
    pass


class ResourceFilters(ListFilters):
    pass


class RoomFilters(ListFilters):
    pass


class LogFilters(ListFilters):
    pass


class StatisticsFilters(ListFilters):
    pass


__all__ = [
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
