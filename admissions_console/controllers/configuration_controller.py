"""
Configuration Controller Layer

HTTP request handling for the configuration catalog and for every
configuration entity. Business rules live in the service layer; this module
shapes responses and maps service exceptions to HTTP status codes.

Key Features:
- Section catalog grouped by category
- One controller class serving every entity descriptor
- Table queries (search, filters, sort) and rendered table views
- Exception mapping to HTTP status codes

Status mapping:
- NotFoundError -> 404
- ValueError (including pydantic validation errors) -> 400
- PermissionError -> 401
- SQLAlchemyError -> 500
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.user import UserProfile
from ..schemas.configuration import (
    ResolvedSectionResponse,
    SectionCatalogResponse,
    SectionDetailResponse,
    SectionGroup,
    SectionResponse,
    TemplatePreviewResponse
)
from ..schemas.common import MessageResponse
from ..schemas.routing_rule import RoutingMatchResponse
from ..schemas.table import SortDirection, TableView
from ..services.communication_template_service import CommunicationTemplateService
from ..services.configuration_shell import (
    filter_sections,
    get_section,
    group_sections,
    resolve_initial_section,
    section_categories
)
from ..services.crud_service import ConfigEntityService, error_message
from ..services.crud_table import CRUDTable
from ..services.entity_registry import EntityDescriptor
from ..services.routing_service import route_lead

logger = logging.getLogger(__name__)


def to_http_exception(e: Exception, action: str) -> HTTPException:
    """Translate a service-layer exception into an HTTPException."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, PermissionError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValueError):
        message = error_message(e)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    logger.error(f"Error {action}: {str(e)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action}"
    )


class ConfigurationCatalogController:
    """Read-only access to the configuration section registry."""

    def list_sections(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> SectionCatalogResponse:
        sections = filter_sections(search or "", category)
        groups = [
            SectionGroup(
                category=name,
                sections=[SectionResponse.model_validate(s) for s in members]
            )
            for name, members in group_sections(sections).items()
        ]
        return SectionCatalogResponse(
            categories=section_categories(),
            groups=groups,
            total_count=len(sections)
        )

    def resolve_section(self, path: Optional[str]) -> ResolvedSectionResponse:
        return ResolvedSectionResponse(path=path, section_id=resolve_initial_section(path))

    def get_section(self, section_id: str) -> SectionDetailResponse:
        """
        Section metadata, including columns and defaults for entity sections.

        Raises:
            HTTPException: 404 if the section does not exist
        """
        try:
            section = get_section(section_id)
        except ValueError as e:
            raise to_http_exception(e, "retrieving section")

        detail = SectionDetailResponse(
            id=section.id,
            label=section.label,
            description=section.description,
            category=section.category,
            entity=section.entity,
            is_new=section.is_new,
            badge=section.badge,
            placeholder=section.placeholder
        )
        descriptor = section.descriptor
        if descriptor is not None:
            detail.slug = descriptor.slug
            detail.title = descriptor.table_title
            detail.table_description = descriptor.table_description
            detail.search_placeholder = descriptor.search_placeholder
            detail.empty_message = descriptor.empty_message
            detail.columns = list(descriptor.columns)
            detail.defaults = descriptor.form_defaults()
            detail.required_fields = [field for field, _ in descriptor.required_fields]
        return detail


class ConfigEntityController:
    """
    Controller for one configuration entity.

    Responsibilities:
    - Apply table search, filters and sort to list requests
    - Delegate mutations to the generic service
    - Map exceptions to HTTP status codes
    """

    def __init__(self, descriptor: EntityDescriptor, db: Session):
        """
        Initialize the controller.

        Args:
            descriptor (EntityDescriptor): The entity served by this controller
            db (Session): SQLAlchemy database session
        """
        self.descriptor = descriptor
        self.db = db
        self.service = ConfigEntityService(descriptor, db)

    def _table(
        self,
        search: Optional[str],
        sort_by: Optional[str],
        sort_direction: SortDirection,
        filters: Optional[Dict[str, Any]]
    ) -> CRUDTable:
        filters = dict(filters or {})
        # array membership is queried through the repository
        members = {
            field: filters.pop(field) for field in self.service.array_fields()
            if field in filters
        }
        rows = self.service.list_rows(members)
        table = CRUDTable(
            rows,
            self.descriptor.columns,
            title=self.descriptor.table_title,
            description=self.descriptor.table_description,
            search_placeholder=self.descriptor.search_placeholder,
            empty_message=self.descriptor.empty_message,
            show_add_button=False
        )
        table.set_search(search)
        for key, value in (filters or {}).items():
            table.set_filter(key, value)
        if sort_by:
            table.set_sort(sort_by, sort_direction)
        return table

    def filterable_keys(self) -> List[str]:
        return [column.key for column in self.descriptor.columns if column.filterable]

    def list_records(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: SortDirection = "asc",
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        List records after search, column filters and sorting.

        Returns:
            List[Dict[str, Any]]: Records in response-schema shape
        """
        try:
            return self._table(search, sort_by, sort_direction, filters).visible_rows()
        except Exception as e:
            raise to_http_exception(e, f"retrieving {self.descriptor.plural_label.lower()}")

    def render_table(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_direction: SortDirection = "asc",
        filters: Optional[Dict[str, Any]] = None
    ) -> TableView:
        try:
            return self._table(search, sort_by, sort_direction, filters).render()
        except Exception as e:
            raise to_http_exception(e, f"rendering {self.descriptor.plural_label.lower()}")

    def get_defaults(self) -> Dict[str, Any]:
        return self.descriptor.form_defaults()

    def get_record(self, record_id: UUID) -> Dict[str, Any]:
        try:
            return self.service.to_row(self.service.get_record(record_id))
        except Exception as e:
            raise to_http_exception(e, f"retrieving {self.descriptor.label.lower()}")

    def create_record(self, data: Any, user: UserProfile) -> Dict[str, Any]:
        try:
            return self.service.to_row(self.service.create_record(data, user))
        except Exception as e:
            raise to_http_exception(e, f"creating {self.descriptor.label.lower()}")

    def update_record(self, record_id: UUID, data: Any,
                      user: UserProfile) -> Dict[str, Any]:
        try:
            return self.service.to_row(self.service.update_record(record_id, data, user))
        except Exception as e:
            raise to_http_exception(e, f"updating {self.descriptor.label.lower()}")

    def delete_record(self, record_id: UUID, user: UserProfile) -> MessageResponse:
        try:
            self.service.delete_record(record_id, user)
        except Exception as e:
            raise to_http_exception(e, f"deleting {self.descriptor.label.lower()}")
        return MessageResponse(message=f"{self.descriptor.label} deleted successfully")

    def duplicate_record(self, record_id: UUID, user: UserProfile) -> Dict[str, Any]:
        try:
            return self.service.to_row(self.service.duplicate_record(record_id, user))
        except Exception as e:
            raise to_http_exception(e, f"duplicating {self.descriptor.label.lower()}")

    def toggle_active(self, record_id: UUID, user: UserProfile) -> Dict[str, Any]:
        try:
            return self.service.to_row(self.service.toggle_active(record_id, user))
        except Exception as e:
            raise to_http_exception(e, f"updating {self.descriptor.label.lower()}")


class LeadRoutingController:
    def __init__(self, db: Session):
        self.db = db

    def match(self, lead: Dict[str, Any]) -> RoutingMatchResponse:
        try:
            return route_lead(self.db, lead)
        except (ValueError, SQLAlchemyError) as e:
            raise to_http_exception(e, "matching routing rules")


class CommunicationTemplateController:
    def __init__(self, db: Session):
        self.db = db

    def preview(self, template_id: UUID, data: Dict[str, Any]) -> TemplatePreviewResponse:
        try:
            return TemplatePreviewResponse(
                **CommunicationTemplateService.preview(self.db, template_id, data))
        except (ValueError, SQLAlchemyError) as e:
            raise to_http_exception(e, "previewing communication template")

    def record_usage(self, template_id: UUID) -> MessageResponse:
        try:
            count = CommunicationTemplateService.increment_usage_count(self.db, template_id)
        except (ValueError, SQLAlchemyError) as e:
            raise to_http_exception(e, "recording template usage")
        return MessageResponse(message=f"Template used {count} times")
