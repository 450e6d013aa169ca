from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


# Tablas mantenidas por otros pasos de seed (usuarios y tipos de dispositivo).
class User(SQLModel, table=True):
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    full_name: Optional[str] = None
    role: str = Field(default="admin", index=True)
    is_active: bool = Field(default=True)


class DeviceType(SQLModel, table=True):
    __tablename__ = "device_type"

    id: Optional[int] = Field(default=None, primary_key=True)
    type_name: str = Field(index=True, unique=True)


class DeviceDataMapping(SQLModel, table=True):
    __tablename__ = "device_data_mapping"

    id: Optional[int] = Field(default=None, primary_key=True)
    device_type_id: int = Field(foreign_key="device_type.id", index=True)
    variable_name: str
    variable_tag: str = Field(index=True)  # OFR, WFR, GFR, GVF, WLR...
    unit: Optional[str] = None


# Tablas que reconstruye el seeder de widgets
class WidgetType(SQLModel, table=True):
    __tablename__ = "widget_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    component_name: str
    default_config: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class WidgetDefinition(SQLModel, table=True):
    __tablename__ = "widget_definitions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    widget_type_id: int = Field(foreign_key="widget_types.id")
    data_source_config: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_by: int = Field(foreign_key="user.id")


class Dashboard(SQLModel, table=True):
    __tablename__ = "dashboards"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    created_by: int = Field(foreign_key="user.id")


class DashboardLayout(SQLModel, table=True):
    __tablename__ = "dashboard_layouts"

    id: Optional[int] = Field(default=None, primary_key=True)
    dashboard_id: int = Field(foreign_key="dashboards.id", index=True)
    widget_definition_id: int = Field(foreign_key="widget_definitions.id")
    layout_config: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    display_order: int = Field(default=0)
