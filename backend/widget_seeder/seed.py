from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, delete, select

from .catalog import (
    DASHBOARD_DESCRIPTION,
    DASHBOARD_NAME,
    LAYOUT_PLACEMENTS,
    VARIABLE_TAGS,
    WIDGET_CANDIDATES,
    WIDGET_TYPES,
    LayoutPlacement,
    PlannedWidget,
    plan_widgets,
    split_placements,
)
from .config import settings
from .db import engine
from .errors import PreconditionMissing, SeedDatabaseError, SeedError
from .models import (
    Dashboard,
    DashboardLayout,
    DeviceDataMapping,
    DeviceType,
    User,
    WidgetDefinition,
    WidgetType,
)


logger = logging.getLogger(__name__)


@dataclass
class SeedPlan:
    """Everything the seed will write, resolved from read-only queries."""

    admin_id: int
    device_type_id: int
    mappings: Dict[str, DeviceDataMapping]
    widgets: List[PlannedWidget]
    placements: List[LayoutPlacement]
    skipped_widgets: List[str] = field(default_factory=list)
    skipped_placements: List[LayoutPlacement] = field(default_factory=list)

    @property
    def missing_tags(self) -> List[str]:
        return [tag for tag in VARIABLE_TAGS if tag not in self.mappings]


@dataclass
class SeedSummary:
    dashboard_id: int
    widget_types: int = 0
    widget_definitions: int = 0
    dashboards: int = 0
    layouts: int = 0
    skipped_widgets: List[str] = field(default_factory=list)
    skipped_layouts: List[str] = field(default_factory=list)


def find_admin(session: Session, email: str) -> User:
    admin = session.exec(select(User).where(User.email == email).limit(1)).first()
    if admin is None:
        raise PreconditionMissing(f"Admin user '{email}'", "run the admin seed first")
    return admin


def find_device_type(session: Session, type_name: str) -> DeviceType:
    device_type = session.exec(select(DeviceType).where(DeviceType.type_name == type_name).limit(1)).first()
    if device_type is None:
        raise PreconditionMissing(f"{type_name} device type", "seed device types first")
    return device_type


def resolve_mappings(session: Session, device_type_id: int) -> Dict[str, DeviceDataMapping]:
    """Look up the data mapping of every known variable tag for a device type.

    Tags without a mapping are left out of the result; the widgets that need
    them are dropped by :func:`plan_widgets`.
    """
    mappings: Dict[str, DeviceDataMapping] = {}
    for tag in VARIABLE_TAGS:
        mapping = session.exec(
            select(DeviceDataMapping)
            .where(DeviceDataMapping.device_type_id == device_type_id)
            .where(DeviceDataMapping.variable_tag == tag)
            .order_by(DeviceDataMapping.id)
            .limit(1)
        ).first()
        if mapping is not None:
            mappings[tag] = mapping
    return mappings


def build_plan(
    session: Session,
    admin_email: Optional[str] = None,
    device_type_name: Optional[str] = None,
) -> SeedPlan:
    """Check the prerequisites and decide which widgets and placements to create."""
    admin = find_admin(session, admin_email or settings.admin_email)
    device_type = find_device_type(session, device_type_name or settings.device_type_name)
    mappings = resolve_mappings(session, device_type.id)
    widgets = plan_widgets(mappings, device_type.id)
    placements, skipped_placements = split_placements([widget.name for widget in widgets], LAYOUT_PLACEMENTS)
    planned_names = {widget.name for widget in widgets}
    return SeedPlan(
        admin_id=admin.id,
        device_type_id=device_type.id,
        mappings=mappings,
        widgets=widgets,
        placements=placements,
        skipped_widgets=[c.name for c in WIDGET_CANDIDATES if c.name not in planned_names],
        skipped_placements=skipped_placements,
    )


def seed_widgets(
    session: Optional[Session] = None,
    admin_email: Optional[str] = None,
    device_type_name: Optional[str] = None,
) -> SeedSummary:
    """Rebuild widget types, widget definitions and the MPFM dashboard in one transaction.

    Existing rows of the four tables are deleted first. Any failure rolls the
    whole transaction back and is re-raised as a :class:`SeedError`.
    """
    owns_session = session is None
    session = session or Session(engine)
    try:
        try:
            summary = _seed(session, admin_email, device_type_name)
            session.commit()
        except SeedError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            raise SeedDatabaseError(f"Error seeding widgets: {exc}") from exc
        logger.info(
            "Widget system seeded: %d widget types, %d widget definitions, %d layouts",
            summary.widget_types,
            summary.widget_definitions,
            summary.layouts,
        )
        return summary
    finally:
        if owns_session:
            session.close()


def _seed(session: Session, admin_email: Optional[str], device_type_name: Optional[str]) -> SeedSummary:
    plan = build_plan(session, admin_email, device_type_name)

    _clear_widget_tables(session)
    type_ids = _insert_widget_types(session)
    definition_ids = _insert_widget_definitions(session, plan.widgets, type_ids, plan.admin_id)
    dashboard_id = _insert_dashboard(session, plan.admin_id)
    layouts, skipped = _insert_layouts(session, dashboard_id, definition_ids)

    return SeedSummary(
        dashboard_id=dashboard_id,
        widget_types=len(type_ids),
        widget_definitions=len(definition_ids),
        dashboards=1,
        layouts=layouts,
        skipped_widgets=list(plan.skipped_widgets),
        skipped_layouts=skipped,
    )


def _clear_widget_tables(session: Session) -> None:
    # Hijos antes que padres para respetar las claves foráneas
    for model in (DashboardLayout, Dashboard, WidgetDefinition, WidgetType):
        session.exec(delete(model))


def _insert_widget_types(session: Session) -> Dict[str, int]:
    type_ids: Dict[str, int] = {}
    for spec in WIDGET_TYPES:
        widget_type = WidgetType(
            name=spec["name"],
            component_name=spec["component_name"],
            default_config=dict(spec["default_config"]),
        )
        session.add(widget_type)
        session.flush()
        type_ids[widget_type.name] = widget_type.id
    return type_ids


def _insert_widget_definitions(
    session: Session,
    widgets: List[PlannedWidget],
    type_ids: Dict[str, int],
    admin_id: int,
) -> Dict[str, int]:
    definition_ids: Dict[str, int] = {}
    for widget in widgets:
        definition = WidgetDefinition(
            name=widget.name,
            description=widget.description,
            widget_type_id=type_ids[widget.widget_type],
            data_source_config=widget.data_source_config,
            created_by=admin_id,
        )
        session.add(definition)
        session.flush()
        definition_ids[widget.name] = definition.id
    return definition_ids


def _insert_dashboard(session: Session, admin_id: int) -> int:
    dashboard = Dashboard(name=DASHBOARD_NAME, description=DASHBOARD_DESCRIPTION, created_by=admin_id)
    session.add(dashboard)
    session.flush()
    return dashboard.id


def _insert_layouts(session: Session, dashboard_id: int, definition_ids: Dict[str, int]) -> tuple[int, List[str]]:
    placed, skipped = split_placements(list(definition_ids), LAYOUT_PLACEMENTS)
    for placement in skipped:
        logger.warning("Skipping layout for '%s' - widget definition not found", placement.widget)

    for placement in placed:
        session.add(
            DashboardLayout(
                dashboard_id=dashboard_id,
                widget_definition_id=definition_ids[placement.widget],
                layout_config=placement.layout_config(),
                display_order=placement.order,
            )
        )
    session.flush()
    return len(placed), [placement.widget for placement in skipped]
