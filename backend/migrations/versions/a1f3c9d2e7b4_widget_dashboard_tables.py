"""Add widget and dashboard tables

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-18 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = "a1f3c9d2e7b4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Las tablas user y device_type las crea el servicio principal.
    tables = set(inspect(op.get_bind()).get_table_names())

    if "widget_types" not in tables:
        op.create_table(
            "widget_types",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("component_name", sa.String(), nullable=False),
            sa.Column("default_config", sa.JSON(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_widget_types_name"), "widget_types", ["name"], unique=True)

    if "widget_definitions" not in tables:
        op.create_table(
            "widget_definitions",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.String(), nullable=True),
            sa.Column("widget_type_id", sa.Integer(), nullable=False),
            sa.Column("data_source_config", sa.JSON(), nullable=False),
            sa.Column("created_by", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["widget_type_id"], ["widget_types.id"], ),
            sa.ForeignKeyConstraint(["created_by"], ["user.id"], ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_widget_definitions_name"), "widget_definitions", ["name"], unique=False)

    if "dashboards" not in tables:
        op.create_table(
            "dashboards",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.String(), nullable=True),
            sa.Column("created_by", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["created_by"], ["user.id"], ),
            sa.PrimaryKeyConstraint("id"),
        )

    if "dashboard_layouts" not in tables:
        op.create_table(
            "dashboard_layouts",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("dashboard_id", sa.Integer(), nullable=False),
            sa.Column("widget_definition_id", sa.Integer(), nullable=False),
            sa.Column("layout_config", sa.JSON(), nullable=False),
            sa.Column("display_order", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["dashboard_id"], ["dashboards.id"], ),
            sa.ForeignKeyConstraint(["widget_definition_id"], ["widget_definitions.id"], ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_dashboard_layouts_dashboard_id"), "dashboard_layouts", ["dashboard_id"], unique=False)


def downgrade() -> None:
    tables = set(inspect(op.get_bind()).get_table_names())

    if "dashboard_layouts" in tables:
        op.drop_index(op.f("ix_dashboard_layouts_dashboard_id"), table_name="dashboard_layouts")
        op.drop_table("dashboard_layouts")
    if "dashboards" in tables:
        op.drop_table("dashboards")
    if "widget_definitions" in tables:
        op.drop_index(op.f("ix_widget_definitions_name"), table_name="widget_definitions")
        op.drop_table("widget_definitions")
    if "widget_types" in tables:
        op.drop_index(op.f("ix_widget_types_name"), table_name="widget_types")
        op.drop_table("widget_types")
