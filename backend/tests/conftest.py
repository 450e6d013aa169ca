import json
from typing import Dict, Iterable, List, Tuple

import pytest
from sqlmodel import Session, func, select

from widget_seeder.catalog import VARIABLE_TAGS
from widget_seeder.db import create_db_engine, init_db
from widget_seeder.models import (
    Dashboard,
    DashboardLayout,
    DeviceDataMapping,
    DeviceType,
    User,
    WidgetDefinition,
    WidgetType,
)


ADMIN_EMAIL = "admin@saherflow.com"

MAPPING_ROWS: Dict[str, Tuple[str, str]] = {
    "OFR": ("Oil Flow Rate", "l/min"),
    "WFR": ("Water Flow Rate", "l/min"),
    "GFR": ("Gas Flow Rate", "l/min"),
    "GVF": ("Gas Volume Fraction", "%"),
    "WLR": ("Water Liquid Ratio", "%"),
}

SEEDED_TABLES = (WidgetType, WidgetDefinition, Dashboard, DashboardLayout)


@pytest.fixture()
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'seed.db'}"


@pytest.fixture()
def engine(db_url):
    engine = create_db_engine(db_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


def add_prerequisites(
    engine,
    admin: bool = True,
    device_type: bool = True,
    tags: Iterable[str] = VARIABLE_TAGS,
) -> Dict[str, int]:
    """Insert the rows other seed steps normally provide; returns their ids."""
    ids: Dict[str, int] = {}
    with Session(engine) as session:
        if admin:
            user = User(email=ADMIN_EMAIL, full_name="Saher Admin", role="admin")
            session.add(user)
            session.flush()
            ids["admin"] = user.id
        # A second device type whose mappings must never be picked up
        other = DeviceType(type_name="ESP")
        session.add(other)
        session.flush()
        session.add(DeviceDataMapping(device_type_id=other.id, variable_name="Other OFR", variable_tag="OFR", unit="bbl/d"))
        if device_type:
            mpfm = DeviceType(type_name="MPFM")
            session.add(mpfm)
            session.flush()
            ids["device_type"] = mpfm.id
            for tag in tags:
                name, unit = MAPPING_ROWS[tag]
                mapping = DeviceDataMapping(device_type_id=mpfm.id, variable_name=name, variable_tag=tag, unit=unit)
                session.add(mapping)
                session.flush()
                ids[tag] = mapping.id
        session.commit()
    return ids


@pytest.fixture()
def prerequisites(engine) -> Dict[str, int]:
    return add_prerequisites(engine)


def count_rows(engine, model) -> int:
    with Session(engine) as session:
        return session.exec(select(func.count()).select_from(model)).one()


def table_counts(engine) -> Dict[str, int]:
    return {model.__tablename__: count_rows(engine, model) for model in SEEDED_TABLES}


def definitions_by_name(engine) -> Dict[str, WidgetDefinition]:
    with Session(engine) as session:
        return {row.name: row for row in session.exec(select(WidgetDefinition)).all()}


def layouts_by_widget(engine) -> Dict[str, DashboardLayout]:
    with Session(engine) as session:
        names = {row.id: row.name for row in session.exec(select(WidgetDefinition)).all()}
        return {names[row.widget_definition_id]: row for row in session.exec(select(DashboardLayout)).all()}


def snapshot(engine) -> Dict[str, List]:
    """Seeded content without generated ids, for comparing two runs."""
    with Session(engine) as session:
        type_names = {row.id: row.name for row in session.exec(select(WidgetType)).all()}
        definitions = session.exec(select(WidgetDefinition)).all()
        definition_names = {row.id: row.name for row in definitions}
        return {
            "widget_types": sorted(
                (row.name, row.component_name, json.dumps(row.default_config, sort_keys=True))
                for row in session.exec(select(WidgetType)).all()
            ),
            "widget_definitions": sorted(
                (
                    row.name,
                    row.description,
                    type_names[row.widget_type_id],
                    json.dumps(row.data_source_config, sort_keys=True),
                    row.created_by,
                )
                for row in definitions
            ),
            "dashboards": sorted(
                (row.name, row.description, row.created_by) for row in session.exec(select(Dashboard)).all()
            ),
            "dashboard_layouts": sorted(
                (
                    definition_names[row.widget_definition_id],
                    row.display_order,
                    json.dumps(row.layout_config, sort_keys=True),
                )
                for row in session.exec(select(DashboardLayout)).all()
            ),
        }
