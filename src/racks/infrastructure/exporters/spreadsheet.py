"""Spreadsheet inventory exporter.

Writes an xlsx workbook with one sheet per rack. Each sheet lists the
placed components, their sub-components and one row per network interface
and address pair, so the layout can be handed to people who do not use the
planner.

Components are listed from the top of the rack down, the same order as the
elevation drawings, rather than in the order they were added.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from racks.domain.value_objects import ComponentType, MetadataKey
from racks.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from racks.domain.entities import (
        NetworkAddress,
        NetworkInterface,
        Rack,
        RackComponent,
        RackConfiguration,
        SubComponent,
    )


logger = logging.getLogger(__name__)

# (header, column width in characters)
COLUMNS: tuple[tuple[str, int], ...] = (
    ("Component Name", 20),
    ("Type", 12),
    ("Height", 10),
    ("Position", 10),
    ("Device Name", 20),
    ("Serial Number", 15),
    ("Model", 15),
    ("Manufacturer", 15),
    ("Power", 10),
    ("Tags", 30),
    ("Parent Component", 20),
    ("Sub-Position", 12),
    ("NIC Name", 15),
    ("MAC Address", 18),
    ("Link Speed", 12),
    ("Port Number", 12),
    ("VLAN", 8),
    ("IP Address", 15),
    ("Subnet", 15),
    ("Hostname", 25),
    ("Address Type", 12),
    ("Notes", 30),
)

MAX_SHEET_NAME_LENGTH = 31
_INVALID_SHEET_CHARS = re.compile(r"[\\/\[\]*?:]")

Row = list[str | int]


def sheet_title(rack_name: str) -> str:
    """Turn a rack name into a valid worksheet title.

    Examples:
        >>> sheet_title("Row A / Rack 1")
        'Row A _ Rack 1'
    """
    title = _INVALID_SHEET_CHARS.sub("_", rack_name[:MAX_SHEET_NAME_LENGTH])
    return title or "Rack"


def _meta(metadata: dict[str, str], key: MetadataKey) -> str:
    return metadata.get(key.value, "")


def component_row(component: RackComponent) -> Row:
    """Row for a placed component. Hardware identity columns stay empty."""
    return [
        component.name,
        component.type.value,
        component.height,
        component.position,
        _meta(component.metadata, MetadataKey.DEVICE_NAME),
        "",
        "",
        "",
        _meta(component.metadata, MetadataKey.POWER_CONSUMPTION),
        ", ".join(component.tags),
        "",
        "",
        "", "", "", "", "",
        "", "", "", "",
        _meta(component.metadata, MetadataKey.NOTES),
    ]


def sub_component_row(parent_name: str, sub: SubComponent) -> Row:
    """Row for a sub-component. It has a slot label instead of a unit position."""
    return [
        sub.name,
        sub.type.value,
        "",
        "",
        _meta(sub.metadata, MetadataKey.DEVICE_NAME),
        _meta(sub.metadata, MetadataKey.SERIAL_NUMBER),
        _meta(sub.metadata, MetadataKey.MODEL),
        _meta(sub.metadata, MetadataKey.MANUFACTURER),
        _meta(sub.metadata, MetadataKey.POWER_CONSUMPTION),
        ", ".join(sub.tags),
        parent_name,
        sub.position,
        "", "", "", "", "",
        "", "", "", "",
        _meta(sub.metadata, MetadataKey.NOTES),
    ]


def interface_row(
    owner_name: str,
    interface: NetworkInterface,
    address: NetworkAddress | None = None,
    parent_name: str = "",
) -> Row:
    """Row for one interface and address pair, indented under its owner."""
    return [
        f"  -> {owner_name}",
        ComponentType.NETWORK.value,
        "",
        "",
        "", "", "", "", "", "",
        parent_name,
        "",
        interface.name,
        interface.mac_address or "",
        interface.link_speed or "",
        interface.port_number or "",
        str(interface.vlan) if interface.vlan is not None else "",
        address.address if address else "",
        (address.subnet or "") if address else "",
        (address.hostname or "") if address else "",
        address.type.value if address else "",
        (address.notes if address and address.notes else interface.notes) or "",
    ]


def _interface_rows(
    owner_name: str,
    interfaces: tuple[NetworkInterface, ...],
    parent_name: str = "",
) -> list[Row]:
    rows: list[Row] = []
    for interface in interfaces:
        if interface.addresses:
            rows.extend(
                interface_row(owner_name, interface, address, parent_name)
                for address in interface.addresses
            )
        else:
            rows.append(interface_row(owner_name, interface, None, parent_name))
    return rows


def rack_rows(rack: Rack) -> list[Row]:
    """All data rows of a rack sheet, top of the rack first."""
    rows: list[Row] = []
    for component in sorted(rack.components, key=lambda c: -c.position):
        rows.append(component_row(component))
        rows.extend(_interface_rows(component.name, component.network_interfaces))
        for sub in component.sub_components:
            rows.append(sub_component_row(component.name, sub))
            rows.extend(
                _interface_rows(sub.name, sub.network_interfaces, component.name)
            )
    return rows


@ExporterRegistry.register("xlsx")
class SpreadsheetExporter:
    """Exports an inventory workbook with one sheet per rack."""

    format_name: ClassVar[str] = "xlsx"
    file_extension: ClassVar[str] = "xlsx"
    media_type: ClassVar[str] = (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

    def build_workbook(self, configuration: RackConfiguration) -> Workbook:
        workbook = Workbook()
        # Drop the default empty sheet; an empty configuration keeps it.
        if configuration.racks:
            workbook.remove(workbook.active)

        used_titles: set[str] = set()
        for rack in configuration:
            title = self._unique_title(sheet_title(rack.name), used_titles)
            worksheet = workbook.create_sheet(title=title)
            worksheet.append([header for header, _ in COLUMNS])
            for cell in worksheet[1]:
                cell.font = Font(bold=True)
            for row in rack_rows(rack):
                worksheet.append(row)
            for index, (_, width) in enumerate(COLUMNS, start=1):
                worksheet.column_dimensions[get_column_letter(index)].width = width
            logger.debug(f"Wrote sheet '{title}' for rack '{rack.name}'")
        return workbook

    def _unique_title(self, title: str, used: set[str]) -> str:
        # Excel compares sheet titles case-insensitively
        candidate = title
        counter = 2
        while candidate.lower() in used:
            suffix = f" ({counter})"
            candidate = title[: MAX_SHEET_NAME_LENGTH - len(suffix)] + suffix
            counter += 1
        used.add(candidate.lower())
        return candidate

    def export(self, configuration: RackConfiguration, path: Path) -> None:
        self.build_workbook(configuration).save(path)
