"""Static description of the MPFM production dashboard.

Everything here is plain data: the widget types, the widgets that may be
placed on the dashboard and the grid they are placed on. The seeder decides
which widgets to insert by filtering :data:`WIDGET_CANDIDATES` against the
device data mappings found in the database (see :func:`plan_widgets`), so
the skip rules can be exercised without a database.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .models import DeviceDataMapping


DASHBOARD_NAME = "MPFM Production Dashboard"
DASHBOARD_DESCRIPTION = "Main production dashboard for MPFM devices"

VARIABLE_TAGS: Tuple[str, ...] = ("OFR", "WFR", "GFR", "GVF", "WLR")

WIDGET_TYPES: List[Dict[str, Any]] = [
    {"name": "kpi", "component_name": "MetricsCard", "default_config": {"refreshInterval": 5000}},
    {"name": "line_chart", "component_name": "CustomLineChart", "default_config": {"refreshInterval": 5000}},
    {"name": "donut_chart", "component_name": "GVFWLRChart", "default_config": {"refreshInterval": 5000}},
    {"name": "map", "component_name": "ProductionMap", "default_config": {"refreshInterval": 30000}},
]


ConfigBuilder = Callable[[Mapping[str, DeviceDataMapping], int], Dict[str, Any]]


@dataclass(frozen=True)
class WidgetCandidate:
    name: str
    description: str
    widget_type: str
    build_config: ConfigBuilder
    requires: Tuple[str, ...] = ()

    def is_available(self, mappings: Mapping[str, DeviceDataMapping]) -> bool:
        return all(tag in mappings for tag in self.requires)


@dataclass(frozen=True)
class PlannedWidget:
    name: str
    description: str
    widget_type: str
    data_source_config: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LayoutPlacement:
    widget: str
    x: int
    y: int
    w: int
    h: int
    min_w: int
    min_h: int
    order: int

    def layout_config(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "minW": self.min_w,
            "minH": self.min_h,
            "static": False,
        }


def _static(config: Dict[str, Any]) -> ConfigBuilder:
    def build(mappings: Mapping[str, DeviceDataMapping], device_type_id: int) -> Dict[str, Any]:
        return copy.deepcopy(config)

    return build


def _series_entry(mapping: DeviceDataMapping, display_name: str) -> Dict[str, Any]:
    return {
        "propertyId": mapping.id,
        "propertyName": mapping.variable_name,
        "displayName": display_name,
        "dataSourceProperty": mapping.variable_tag,
        "unit": mapping.unit,
        "dataType": "numeric",
    }


def _series_chart(*tags: str) -> ConfigBuilder:
    def build(mappings: Mapping[str, DeviceDataMapping], device_type_id: int) -> Dict[str, Any]:
        return {
            "deviceTypeId": device_type_id,
            "numberOfSeries": len(tags),
            "seriesConfig": [_series_entry(mappings[tag], tag) for tag in tags],
        }

    return build


def _flow_rate_kpi(metric: str, title: str, icon: str, color_dark: str, color_light: str) -> ConfigBuilder:
    return _static(
        {
            "metric": metric.lower(),
            "unit": "l/min",
            "title": title,
            "shortTitle": metric,
            "icon": icon,
            "colorDark": color_dark,
            "colorLight": color_light,
        }
    )


WIDGET_CANDIDATES: List[WidgetCandidate] = [
    # KPI cards
    WidgetCandidate(
        "OFR Metric", "Oil Flow Rate KPI", "kpi",
        _flow_rate_kpi("OFR", "Oil flow rate", "/oildark.png", "#4D3DF7", "#F56C44"),
    ),
    WidgetCandidate(
        "WFR Metric", "Water Flow Rate KPI", "kpi",
        _flow_rate_kpi("WFR", "Water flow rate", "/waterdark.png", "#46B8E9", "#F6CA58"),
    ),
    WidgetCandidate(
        "GFR Metric", "Gas Flow Rate KPI", "kpi",
        _flow_rate_kpi("GFR", "Gas flow rate", "/gasdark.png", "#F35DCB", "#38BF9D"),
    ),
    WidgetCandidate(
        "Last Refresh", "System Last Refresh Time", "kpi",
        _static({"metric": "last_refresh", "title": "Last Refresh", "icon": "clock", "color": "#d82e75"}),
    ),
    # Line charts, one series each
    WidgetCandidate("OFR Chart", "Oil Flow Rate Line Chart", "line_chart", _series_chart("OFR"), ("OFR",)),
    WidgetCandidate("WFR Chart", "Water Flow Rate Line Chart", "line_chart", _series_chart("WFR"), ("WFR",)),
    WidgetCandidate("GFR Chart", "Gas Flow Rate Line Chart", "line_chart", _series_chart("GFR"), ("GFR",)),
    # Fractions, donut and map
    WidgetCandidate(
        "Fractions Chart", "GVF and WLR Fractions Chart", "line_chart",
        _series_chart("GVF", "WLR"), ("GVF", "WLR"),
    ),
    WidgetCandidate(
        "GVF/WLR Donut Charts", "GVF and WLR Donut Charts", "donut_chart",
        _static({"metrics": ["gvf", "wlr"], "title": "GVF/WLR"}),
    ),
    WidgetCandidate(
        "Production Map", "Device Locations Map", "map",
        _static({"showDevices": True, "showStatistics": True}),
    ),
]


# 12-column grid: 4 KPI cards, 3 line charts, 2 half-width charts, full-width map.
LAYOUT_PLACEMENTS: List[LayoutPlacement] = [
    LayoutPlacement("OFR Metric", x=0, y=0, w=3, h=2, min_w=2, min_h=1, order=1),
    LayoutPlacement("WFR Metric", x=3, y=0, w=3, h=2, min_w=2, min_h=1, order=2),
    LayoutPlacement("GFR Metric", x=6, y=0, w=3, h=2, min_w=2, min_h=1, order=3),
    LayoutPlacement("Last Refresh", x=9, y=0, w=3, h=2, min_w=2, min_h=1, order=4),
    LayoutPlacement("OFR Chart", x=0, y=2, w=4, h=3, min_w=3, min_h=2, order=5),
    LayoutPlacement("WFR Chart", x=4, y=2, w=4, h=3, min_w=3, min_h=2, order=6),
    LayoutPlacement("GFR Chart", x=8, y=2, w=4, h=3, min_w=3, min_h=2, order=7),
    LayoutPlacement("Fractions Chart", x=0, y=5, w=6, h=4, min_w=4, min_h=2, order=8),
    LayoutPlacement("GVF/WLR Donut Charts", x=6, y=5, w=6, h=4, min_w=4, min_h=2, order=9),
    LayoutPlacement("Production Map", x=0, y=9, w=12, h=4, min_w=8, min_h=3, order=10),
]


def plan_widgets(
    mappings: Mapping[str, DeviceDataMapping],
    device_type_id: int,
    candidates: Sequence[WidgetCandidate] = WIDGET_CANDIDATES,
) -> List[PlannedWidget]:
    """Return the candidates whose required mappings are present, in catalog order."""
    return [
        PlannedWidget(
            name=candidate.name,
            description=candidate.description,
            widget_type=candidate.widget_type,
            data_source_config=candidate.build_config(mappings, device_type_id),
        )
        for candidate in candidates
        if candidate.is_available(mappings)
    ]


def split_placements(
    widget_names: Sequence[str],
    placements: Sequence[LayoutPlacement] = LAYOUT_PLACEMENTS,
) -> Tuple[List[LayoutPlacement], List[LayoutPlacement]]:
    """Split placements into those whose widget exists and those to skip."""
    available = set(widget_names)
    placed = [p for p in placements if p.widget in available]
    skipped = [p for p in placements if p.widget not in available]
    return placed, skipped
