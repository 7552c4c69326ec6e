"""
Configuration Routes

API endpoints for the configuration catalog and for every configuration
entity. Entity routers are generated from the entity descriptors, so every
entity exposes the same endpoints under its own slug.

Endpoints:
- GET /configuration/sections - Sections grouped by category
- GET /configuration/sections/resolve - Section id for a console path
- GET /configuration/sections/{section_id} - Section metadata
- GET /configuration/{slug} - List records (search, sort, filters)
- GET /configuration/{slug}/table - Rendered table view
- GET /configuration/{slug}/defaults - Form defaults for a new record
- GET /configuration/{slug}/{id} - Get a record
- POST /configuration/{slug} - Create a record
- PUT /configuration/{slug}/{id} - Update a record
- DELETE /configuration/{slug}/{id} - Delete a record
- POST /configuration/{slug}/{id}/duplicate - Copy a record
- PATCH /configuration/{slug}/{id}/toggle-active - Flip the active flag
- POST /configuration/lead-routing/match - Find the routing rule for a lead
- POST /configuration/communication-templates/{id}/preview - Render a template
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from ..controllers.configuration_controller import (
    CommunicationTemplateController,
    ConfigEntityController,
    ConfigurationCatalogController,
    LeadRoutingController
)
from ..core.auth import get_current_user, require_manager_or_admin
from ..core.database import get_db
from ..models.user import UserProfile
from ..schemas.common import MessageResponse
from ..schemas.configuration import (
    ResolvedSectionResponse,
    SectionCatalogResponse,
    SectionDetailResponse,
    TemplatePreviewRequest,
    TemplatePreviewResponse
)
from ..schemas.routing_rule import RoutingMatchRequest, RoutingMatchResponse
from ..schemas.table import TableView
from ..services.entity_registry import (
    COMMUNICATION_TEMPLATE,
    ENTITY_DESCRIPTORS,
    ROUTING_RULE,
    EntityDescriptor
)

RESERVED_QUERY_PARAMS = {"search", "sort_by", "sort_direction"}

router = APIRouter(prefix="/configuration", tags=["Configuration"])


# Section catalog

@router.get(
    "/sections",
    response_model=SectionCatalogResponse,
    summary="List configuration sections",
    description="""
    Sections grouped by category.

    **Parameters:**
    - search: Case-insensitive match on section label or description
    - category: Only sections in this category
    """
)
async def list_sections(
    search: Optional[str] = Query(None, description="Search term"),
    category: Optional[str] = Query(None, description="Filter by category"),
    current_user: UserProfile = Depends(get_current_user)
):
    """List configuration sections grouped by category."""
    return ConfigurationCatalogController().list_sections(search=search, category=category)


@router.get(
    "/sections/resolve",
    response_model=ResolvedSectionResponse,
    summary="Resolve the section for a console path"
)
async def resolve_section(
    path: Optional[str] = Query(None, description="Console path, e.g. /admin/configuration/campuses"),
    current_user: UserProfile = Depends(get_current_user)
):
    """Get the section that a console path opens on."""
    return ConfigurationCatalogController().resolve_section(path)


@router.get(
    "/sections/{section_id}",
    response_model=SectionDetailResponse,
    summary="Get section metadata"
)
async def get_section(
    section_id: str,
    current_user: UserProfile = Depends(get_current_user)
):
    """Get a section with its columns, defaults and required fields."""
    return ConfigurationCatalogController().get_section(section_id)


# Entity-specific endpoints (registered before the generic routers)

@router.post(
    f"/{ROUTING_RULE.slug}/match",
    response_model=RoutingMatchResponse,
    summary="Match a lead against routing rules",
    description="""
    Evaluate active routing rules in priority order and return the first
    rule whose conditions all match the lead.
    """
)
async def match_routing_rule(
    request: RoutingMatchRequest,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user)
):
    """Find the routing rule that applies to a lead."""
    controller = LeadRoutingController(db)
    return controller.match(request.lead)


@router.post(
    f"/{COMMUNICATION_TEMPLATE.slug}/{{template_id}}/preview",
    response_model=TemplatePreviewResponse,
    summary="Preview a communication template"
)
async def preview_template(
    template_id: UUID,
    request: TemplatePreviewRequest,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user)
):
    """Render a template's subject and content with sample data."""
    controller = CommunicationTemplateController(db)
    return controller.preview(template_id, request.data)


@router.post(
    f"/{COMMUNICATION_TEMPLATE.slug}/{{template_id}}/usage",
    response_model=MessageResponse,
    summary="Record a communication template use"
)
async def record_template_usage(
    template_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user)
):
    """Increment a template's usage counter."""
    controller = CommunicationTemplateController(db)
    return controller.record_usage(template_id)


def _column_filters(request: Request, controller: ConfigEntityController) -> Dict[str, Any]:
    allowed = controller.filterable_keys()
    return {
        key: value for key, value in request.query_params.items()
        if key in allowed and key not in RESERVED_QUERY_PARAMS
    }


def build_entity_router(descriptor: EntityDescriptor) -> APIRouter:
    """Create the CRUD router for one configuration entity."""
    entity_router = APIRouter(prefix=f"/{descriptor.slug}", tags=[descriptor.plural_label])
    create_schema = descriptor.create_schema
    update_schema = descriptor.update_schema
    response_schema = descriptor.response_schema
    label = descriptor.label.lower()
    plural = descriptor.plural_label.lower()

    @entity_router.get(
        "",
        response_model=List[response_schema],
        summary=f"List {plural}",
        description=f"""
        Retrieve {plural} in their default order.

        **Parameters:**
        - search: Case-insensitive match on any column
        - sort_by: Sortable column key
        - sort_direction: asc or desc
        - any filterable column key: exact match (membership for list columns)
        """
    )
    async def list_records(
        request: Request,
        search: Optional[str] = Query(None, description="Search term"),
        sort_by: Optional[str] = Query(None, description="Column to sort by"),
        sort_direction: str = Query("asc", pattern="^(asc|desc)$"),
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        controller = ConfigEntityController(descriptor, db)
        return controller.list_records(
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
            filters=_column_filters(request, controller)
        )

    @entity_router.get("/table", response_model=TableView, summary=f"Render the {plural} table")
    async def render_table(
        request: Request,
        search: Optional[str] = Query(None, description="Search term"),
        sort_by: Optional[str] = Query(None, description="Column to sort by"),
        sort_direction: str = Query("asc", pattern="^(asc|desc)$"),
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        controller = ConfigEntityController(descriptor, db)
        return controller.render_table(
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
            filters=_column_filters(request, controller)
        )

    @entity_router.get("/defaults", response_model=Dict[str, Any],
                       summary=f"Form defaults for a new {label}")
    async def get_defaults(
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).get_defaults()

    @entity_router.get("/{record_id}", response_model=response_schema,
                       summary=f"Get a {label}")
    async def get_record(
        record_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).get_record(record_id)

    @entity_router.post("", response_model=response_schema,
                        status_code=status.HTTP_201_CREATED,
                        summary=f"Create a {label}")
    async def create_record(
        payload: create_schema,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).create_record(payload, current_user)

    @entity_router.put("/{record_id}", response_model=response_schema,
                       summary=f"Update a {label}")
    async def update_record(
        record_id: UUID,
        payload: update_schema,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).update_record(
            record_id, payload, current_user)

    @entity_router.delete("/{record_id}", response_model=MessageResponse,
                          summary=f"Delete a {label}",
                          description="Permanent deletion. **Admin or Manager Access Required**")
    async def delete_record(
        record_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(require_manager_or_admin())
    ):
        return ConfigEntityController(descriptor, db).delete_record(record_id, current_user)

    @entity_router.post("/{record_id}/duplicate", response_model=response_schema,
                        status_code=status.HTTP_201_CREATED,
                        summary=f"Duplicate a {label}")
    async def duplicate_record(
        record_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).duplicate_record(record_id, current_user)

    @entity_router.patch("/{record_id}/toggle-active", response_model=response_schema,
                         summary=f"Activate or deactivate a {label}")
    async def toggle_active(
        record_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserProfile = Depends(get_current_user)
    ):
        return ConfigEntityController(descriptor, db).toggle_active(record_id, current_user)

    return entity_router


for _descriptor in ENTITY_DESCRIPTORS.values():
    router.include_router(build_entity_router(_descriptor))
