"""Pytest configuration and shared fixtures for rack planner tests."""

from __future__ import annotations

import pytest

from racks.domain import Rack, RackComponent, RackConfiguration


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared layout fixtures
# =============================================================================


@pytest.fixture
def empty_rack() -> Rack:
    """An empty 42U rack."""
    return Rack(id="rack-a", name="Rack A", height=42)


@pytest.fixture
def two_racks() -> RackConfiguration:
    """Rack A holds a 2U server at 3 and a 1U switch at 10; rack B (24U) is empty."""
    rack_a = Rack(
        id="rack-a",
        name="Rack A",
        height=42,
        components=(
            RackComponent(id="server-1", name="Server 1", height=2, position=3),
            RackComponent(id="switch-1", name="Switch 1", height=1, position=10),
        ),
    )
    rack_b = Rack(id="rack-b", name="Rack B", height=24)
    return RackConfiguration(racks=(rack_a, rack_b))


@pytest.fixture
def legacy_rack_data() -> dict:
    """A bare legacy rack object as written by older editor versions."""
    return {
        "id": "rack-legacy",
        "name": "Legacy",
        "height": 42,
        "components": [
            {
                "id": "component-1",
                "name": "Web",
                "height": 1,
                "position": 20,
                "type": "compute",
                "metadata": {"ipAddress": "10.0.0.5", "subnet": "255.255.255.0"},
                "pduConfig": {"count": 2, "placement": "left"},
                "ethernetConfig": {"count": 4, "placement": "back"},
            }
        ],
    }


@pytest.fixture
def rich_configuration_data() -> list[dict]:
    """Current-format data with interfaces, tags, sub-components and extras."""
    return [
        {
            "id": "rack-main",
            "name": "Main",
            "height": 42,
            "components": [
                {
                    "id": "component-db",
                    "name": "DB Server",
                    "height": 2,
                    "position": 30,
                    "type": "storage",
                    "color": "#123456",
                    "weight": 25.5,
                    "metadata": {
                        "deviceName": "db01",
                        "powerConsumption": "450W",
                        "rackLabel": "R1-30",
                    },
                    "networkInterfaces": [
                        {
                            "id": "nic-1",
                            "name": "eth0",
                            "macAddress": "00:11:22:33:44:55",
                            "linkSpeed": "10G",
                            "vlan": 100,
                            "addresses": [
                                {"id": "addr-1", "address": "10.0.0.10", "type": "primary"},
                                {"id": "addr-2", "address": "10.0.0.11", "type": "virtual"},
                            ],
                        }
                    ],
                    "tags": ["database", "prod"],
                    "subComponents": [
                        {
                            "id": "subcomp-1",
                            "name": "Blade 1",
                            "type": "compute",
                            "position": "slot-1",
                            "parentComponentId": "component-db",
                            "metadata": {"serialNumber": "SN-1"},
                            "networkInterfaces": [
                                {"id": "nic-2", "name": "ipmi", "addresses": []}
                            ],
                            "tags": ["blade"],
                        }
                    ],
                    "pduConfig": {"count": 2, "frontBack": "back", "side": "left"},
                    "ethernetConfig": {"frontCount": 2, "backCount": 4},
                }
            ],
        },
        {"id": "rack-spare", "name": "Spare", "height": 12, "components": []},
    ]
