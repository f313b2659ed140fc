"""Application-state controller for the rack planner.

`RackPlanner` is the single owner of the editor state: the rack
configuration, the current selection and the active drag gesture. Every
mutation goes through one of its methods, runs to completion and replaces
the immutable `PlannerState` in one step. Rejected mutations return a
`MutationResult` with error messages and leave the state untouched.

The layout rules themselves live in the stateless services of
`racks.domain.services`; the planner only feeds them the current snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable

from racks.application.config.loader import ConfigError
from racks.application.config.validator import validate_configuration
from racks.application.dtos import (
    ComponentDraft,
    MutationResult,
    RackInput,
    normalize_tag,
)
from racks.domain import (
    COMPONENT_COLORS,
    AddressPatch,
    AddressType,
    ComponentPatch,
    ComponentType,
    DistanceUnit,
    DragGesture,
    InterfacePatch,
    NetworkAddress,
    NetworkInterface,
    Rack,
    RackComponent,
    RackConfiguration,
    RackPatch,
    SubComponent,
    SubComponentPatch,
    check_placement,
    is_valid_rack_height,
    move_component,
    next_available_position,
)
from racks.domain.ids import new_id
from racks.domain.services import ComponentDistance, distances_from, find_free_position

logger = logging.getLogger(__name__)

InterfaceEdit = Callable[
    [tuple[NetworkInterface, ...]], "tuple[NetworkInterface, ...] | None"
]
TagEdit = Callable[[tuple[str, ...]], tuple[str, ...]]


@dataclass(frozen=True)
class PlannerState:
    """Snapshot of the editor state.

    Attributes:
        configuration: All racks and their components.
        selected_rack_id: Rack new components are added to.
        selected_component_id: Component shown in the detail panel.
    """

    configuration: RackConfiguration = field(default_factory=RackConfiguration)
    selected_rack_id: str | None = None
    selected_component_id: str | None = None

    @property
    def current_rack(self) -> Rack | None:
        if self.selected_rack_id is None:
            return None
        return self.configuration.find_rack(self.selected_rack_id)

    @property
    def selected_component(self) -> RackComponent | None:
        if self.selected_component_id is None:
            return None
        return self.configuration.find_component(self.selected_component_id)


class RackPlanner:
    """Controller owning the planner state and all CRUD operations.

    Attributes:
        drag: The drag gesture state machine used by begin_drag/drag_over/drop.
    """

    def __init__(
        self, state: PlannerState | None = None, unit_size: float = 1.0
    ) -> None:
        self._state = state or PlannerState()
        self.drag = DragGesture(unit_size=unit_size)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlannerState:
        return self._state

    @property
    def configuration(self) -> RackConfiguration:
        return self._state.configuration

    @property
    def current_rack(self) -> Rack | None:
        return self._state.current_rack

    @property
    def selected_component(self) -> RackComponent | None:
        return self._state.selected_component

    def snapshot(self) -> RackConfiguration:
        """Read-only snapshot handed to export adapters."""
        return self._state.configuration

    def _commit(self, configuration: RackConfiguration, **selection: str | None) -> None:
        self._state = replace(self._state, configuration=configuration, **selection)

    def _resolve_rack(self, rack_id: str | None) -> Rack | None:
        if rack_id is None:
            return self.current_rack
        return self.configuration.find_rack(rack_id)

    # ------------------------------------------------------------------
    # Racks
    # ------------------------------------------------------------------

    def add_rack(self, name: str, height: int | str = 42) -> MutationResult:
        """Create a rack and select it.

        Args:
            name: Display name, required.
            height: Units, 1 to 100; text such as "42U" is accepted.
        """
        rack_input = RackInput(name=name, height=height)
        errors = rack_input.validate()
        if errors:
            return MutationResult.rejected(*errors)

        parsed = rack_input.parsed_height()
        assert parsed is not None
        rack = Rack(id=new_id("rack"), name=name.strip(), height=parsed)
        self._commit(self.configuration.add_rack(rack), selected_rack_id=rack.id)
        logger.debug(f"Added rack '{rack.name}' ({rack.height}U)")
        return MutationResult.applied(rack.id)

    def update_rack(self, rack_id: str, patch: RackPatch) -> MutationResult:
        """Rename or resize a rack.

        A new height must stay within the creation limits and keep every
        component inside the rack.
        """
        rack = self.configuration.find_rack(rack_id)
        if rack is None:
            return MutationResult.rejected(f"Unknown rack: {rack_id}")

        try:
            updated = patch.apply(rack)
        except ValueError as e:
            return MutationResult.rejected(str(e))
        if not updated.name.strip():
            return MutationResult.rejected("Please enter a rack name")
        updated = replace(updated, name=updated.name.strip())
        if patch.changes_geometry:
            if not is_valid_rack_height(updated.height):
                return MutationResult.rejected(
                    f"Rack height must be between 1U and 100U, got {updated.height}"
                )
            outside = [c.name for c in rack.components if c.top > updated.height]
            if outside:
                return MutationResult.rejected(
                    "Components would exceed rack bounds: " + ", ".join(outside)
                )

        self._commit(self.configuration.replace_rack(updated))
        return MutationResult.applied(rack_id)

    def delete_rack(self, rack_id: str) -> MutationResult:
        """Remove a rack and everything in it."""
        rack = self.configuration.find_rack(rack_id)
        if rack is None:
            return MutationResult.rejected(f"Unknown rack: {rack_id}")

        configuration = self.configuration.remove_rack(rack_id)
        selected_rack_id = self._state.selected_rack_id
        if selected_rack_id == rack_id:
            selected_rack_id = configuration.racks[0].id if configuration.racks else None
        selected_component_id = self._state.selected_component_id
        if selected_component_id is not None and rack.contains(selected_component_id):
            selected_component_id = None

        self._commit(
            configuration,
            selected_rack_id=selected_rack_id,
            selected_component_id=selected_component_id,
        )
        logger.debug(f"Deleted rack '{rack.name}'")
        return MutationResult.applied(rack_id)

    def select_rack(self, rack_id: str) -> MutationResult:
        if self.configuration.find_rack(rack_id) is None:
            return MutationResult.rejected(f"Unknown rack: {rack_id}")
        self._state = replace(self._state, selected_rack_id=rack_id)
        return MutationResult.applied(rack_id)

    def start_over(self) -> None:
        """Clear all racks, components and selection."""
        self.drag.cancel()
        self._state = PlannerState()

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def suggest_position(self, height: int = 1, rack_id: str | None = None) -> int | None:
        """Default slot proposed for a new component of `height` units.

        Re-evaluate whenever the height or the rack occupancy changes.
        Returns None if there is no rack to place into.
        """
        rack = self._resolve_rack(rack_id)
        if rack is None:
            return None
        return next_available_position(rack, height)

    def add_component(
        self, draft: ComponentDraft, rack_id: str | None = None
    ) -> MutationResult:
        """Place a new component into a rack (the selected rack by default).

        Without an explicit position the topmost free slot is used; if the
        rack has no free run of the requested size the add is rejected.
        """
        rack = self._resolve_rack(rack_id)
        if rack is None:
            return MutationResult.rejected("Select a rack first")

        errors = draft.validate()
        if errors:
            return MutationResult.rejected(*errors)

        position = draft.position
        if position is None:
            position = find_free_position(rack, draft.height)
            if position is None:
                return MutationResult.rejected(
                    f"No free space for a {draft.height}U component in rack '{rack.name}'"
                )

        check = check_placement(rack, position, draft.height)
        if not check.valid:
            return MutationResult.rejected(check.message)

        component = RackComponent(
            id=new_id("component"),
            name=draft.name.strip(),
            height=draft.height,
            position=position,
            type=draft.type,
            color=draft.color or COMPONENT_COLORS[draft.type],
            weight=draft.weight,
            metadata=dict(draft.metadata),
            tags=tuple(dict.fromkeys(normalize_tag(t) for t in draft.tags if t.strip())),
            pdu_config=draft.pdu_config,
            ethernet_config=draft.ethernet_config,
        )
        self._commit(
            self.configuration.replace_rack(
                rack.with_components(rack.components + (component,))
            )
        )
        logger.debug(
            f"Added '{component.name}' at {component.occupied_range} in '{rack.name}'"
        )
        return MutationResult.applied(component.id)

    def update_component(self, component_id: str, patch: ComponentPatch) -> MutationResult:
        """Merge `patch` into a component.

        Position or height changes are validated against the rest of the
        rack, excluding the component itself.
        """
        rack = self.configuration.rack_of(component_id)
        if rack is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        component = rack.find_component(component_id)
        assert component is not None

        try:
            updated = patch.apply(component)
        except ValueError as e:
            return MutationResult.rejected(str(e))
        if not updated.name.strip():
            return MutationResult.rejected("Please enter a component name")
        updated = replace(updated, name=updated.name.strip())

        if patch.changes_geometry:
            check = check_placement(
                rack, updated.position, updated.height, exclude_item_id=component_id
            )
            if not check.valid:
                return MutationResult.rejected(check.message)

        self._commit(self.configuration.replace_rack(rack.replace_component(updated)))
        return MutationResult.applied(component_id)

    def delete_component(self, component_id: str) -> MutationResult:
        """Remove a component; clears the selection if it was selected."""
        rack = self.configuration.rack_of(component_id)
        if rack is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")

        selected = self._state.selected_component_id
        self._commit(
            self.configuration.replace_rack(rack.without_component(component_id)),
            selected_component_id=None if selected == component_id else selected,
        )
        logger.debug(f"Deleted component '{component_id}' from '{rack.name}'")
        return MutationResult.applied(component_id)

    def select_component(self, component_id: str | None) -> MutationResult:
        """Select a component (and its rack), or clear the selection with None."""
        if component_id is None:
            self._state = replace(self._state, selected_component_id=None)
            return MutationResult.applied()
        rack = self.configuration.rack_of(component_id)
        if rack is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        self._state = replace(
            self._state, selected_rack_id=rack.id, selected_component_id=component_id
        )
        return MutationResult.applied(component_id)

    def distances(
        self, component_id: str, unit: DistanceUnit = DistanceUnit.INCHES
    ) -> list[ComponentDistance]:
        """Distances from a component to every other component in its rack."""
        rack = self.configuration.rack_of(component_id)
        if rack is None:
            return []
        return distances_from(rack, component_id, unit)

    def _replace_component(
        self, component: RackComponent, entity_id: str | None = None
    ) -> MutationResult:
        rack = self.configuration.rack_of(component.id)
        assert rack is not None
        self._commit(self.configuration.replace_rack(rack.replace_component(component)))
        return MutationResult.applied(entity_id or component.id)

    # ------------------------------------------------------------------
    # Sub-components
    # ------------------------------------------------------------------

    def add_sub_component(
        self,
        component_id: str,
        name: str | None = None,
        type: ComponentType = ComponentType.COMPUTE,
        position: str | None = None,
    ) -> MutationResult:
        """Add a sub-component with numbered default name and slot label."""
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")

        number = len(component.sub_components) + 1
        sub = SubComponent(
            id=new_id("subcomp"),
            name=name or f"Sub-Component {number}",
            type=type,
            position=position if position is not None else f"slot-{number}",
            parent_component_id=component_id,
        )
        return self._replace_component(
            replace(component, sub_components=component.sub_components + (sub,)),
            entity_id=sub.id,
        )

    def update_sub_component(
        self, component_id: str, sub_component_id: str, patch: SubComponentPatch
    ) -> MutationResult:
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        sub = component.find_sub_component(sub_component_id)
        if sub is None:
            return MutationResult.rejected(f"Unknown sub-component: {sub_component_id}")

        updated = patch.apply(sub)
        return self._replace_component(
            replace(
                component,
                sub_components=tuple(
                    updated if s.id == sub_component_id else s
                    for s in component.sub_components
                ),
            ),
            entity_id=sub_component_id,
        )

    def delete_sub_component(
        self, component_id: str, sub_component_id: str
    ) -> MutationResult:
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        if component.find_sub_component(sub_component_id) is None:
            return MutationResult.rejected(f"Unknown sub-component: {sub_component_id}")
        return self._replace_component(
            replace(
                component,
                sub_components=tuple(
                    s for s in component.sub_components if s.id != sub_component_id
                ),
            ),
            entity_id=sub_component_id,
        )

    # ------------------------------------------------------------------
    # Network interfaces and addresses
    # ------------------------------------------------------------------

    def _edit_interfaces(
        self,
        component_id: str,
        sub_component_id: str | None,
        edit: InterfaceEdit,
        entity_id: str | None = None,
    ) -> MutationResult:
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")

        if sub_component_id is None:
            interfaces = edit(component.network_interfaces)
            if interfaces is None:
                return MutationResult.rejected("Unknown network interface or address")
            return self._replace_component(
                replace(component, network_interfaces=interfaces), entity_id
            )

        sub = component.find_sub_component(sub_component_id)
        if sub is None:
            return MutationResult.rejected(f"Unknown sub-component: {sub_component_id}")
        interfaces = edit(sub.network_interfaces)
        if interfaces is None:
            return MutationResult.rejected("Unknown network interface or address")
        updated_sub = replace(sub, network_interfaces=interfaces)
        return self._replace_component(
            replace(
                component,
                sub_components=tuple(
                    updated_sub if s.id == sub.id else s for s in component.sub_components
                ),
            ),
            entity_id,
        )

    def add_interface(
        self,
        component_id: str,
        name: str | None = None,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        """Add a NIC named ``eth<N>`` by default to a component or sub-component."""
        interface_id = new_id("nic")

        def edit(interfaces: tuple[NetworkInterface, ...]) -> tuple[NetworkInterface, ...]:
            interface = NetworkInterface(
                id=interface_id, name=name or f"eth{len(interfaces)}"
            )
            return interfaces + (interface,)

        return self._edit_interfaces(component_id, sub_component_id, edit, interface_id)

    def update_interface(
        self,
        component_id: str,
        interface_id: str,
        patch: InterfacePatch,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        def edit(
            interfaces: tuple[NetworkInterface, ...],
        ) -> tuple[NetworkInterface, ...] | None:
            if not any(i.id == interface_id for i in interfaces):
                return None
            return tuple(
                patch.apply(i) if i.id == interface_id else i for i in interfaces
            )

        return self._edit_interfaces(component_id, sub_component_id, edit, interface_id)

    def delete_interface(
        self,
        component_id: str,
        interface_id: str,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        def edit(
            interfaces: tuple[NetworkInterface, ...],
        ) -> tuple[NetworkInterface, ...] | None:
            if not any(i.id == interface_id for i in interfaces):
                return None
            return tuple(i for i in interfaces if i.id != interface_id)

        return self._edit_interfaces(component_id, sub_component_id, edit, interface_id)

    def _edit_addresses(
        self,
        component_id: str,
        interface_id: str,
        sub_component_id: str | None,
        edit: Callable[
            [tuple[NetworkAddress, ...]], "tuple[NetworkAddress, ...] | None"
        ],
        entity_id: str,
    ) -> MutationResult:
        def edit_interfaces(
            interfaces: tuple[NetworkInterface, ...],
        ) -> tuple[NetworkInterface, ...] | None:
            target = next((i for i in interfaces if i.id == interface_id), None)
            if target is None:
                return None
            addresses = edit(target.addresses)
            if addresses is None:
                return None
            updated = replace(target, addresses=addresses)
            return tuple(updated if i.id == interface_id else i for i in interfaces)

        return self._edit_interfaces(
            component_id, sub_component_id, edit_interfaces, entity_id
        )

    def add_address(
        self,
        component_id: str,
        interface_id: str,
        address: str = "",
        type: AddressType = AddressType.PRIMARY,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        """Bind a new address (primary by default) to an interface."""
        address_id = new_id("addr")
        new_address = NetworkAddress(id=address_id, address=address, type=type)
        return self._edit_addresses(
            component_id,
            interface_id,
            sub_component_id,
            lambda addresses: addresses + (new_address,),
            address_id,
        )

    def update_address(
        self,
        component_id: str,
        interface_id: str,
        address_id: str,
        patch: AddressPatch,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        def edit(
            addresses: tuple[NetworkAddress, ...],
        ) -> tuple[NetworkAddress, ...] | None:
            if not any(a.id == address_id for a in addresses):
                return None
            return tuple(patch.apply(a) if a.id == address_id else a for a in addresses)

        return self._edit_addresses(
            component_id, interface_id, sub_component_id, edit, address_id
        )

    def delete_address(
        self,
        component_id: str,
        interface_id: str,
        address_id: str,
        sub_component_id: str | None = None,
    ) -> MutationResult:
        def edit(
            addresses: tuple[NetworkAddress, ...],
        ) -> tuple[NetworkAddress, ...] | None:
            if not any(a.id == address_id for a in addresses):
                return None
            return tuple(a for a in addresses if a.id != address_id)

        return self._edit_addresses(
            component_id, interface_id, sub_component_id, edit, address_id
        )

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _edit_tags(
        self, component_id: str, sub_component_id: str | None, edit: TagEdit
    ) -> MutationResult:
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        if sub_component_id is None:
            return self._replace_component(replace(component, tags=edit(component.tags)))

        sub = component.find_sub_component(sub_component_id)
        if sub is None:
            return MutationResult.rejected(f"Unknown sub-component: {sub_component_id}")
        patch = SubComponentPatch(tags=edit(sub.tags))
        return self.update_sub_component(component_id, sub_component_id, patch)

    def add_tag(
        self, component_id: str, tag: str, sub_component_id: str | None = None
    ) -> MutationResult:
        """Add a normalized tag; adding an existing tag changes nothing."""
        normalized = normalize_tag(tag)
        if not normalized:
            return MutationResult.rejected("Tag cannot be empty")
        return self._edit_tags(
            component_id,
            sub_component_id,
            lambda tags: tags if normalized in tags else tags + (normalized,),
        )

    def remove_tag(
        self, component_id: str, tag: str, sub_component_id: str | None = None
    ) -> MutationResult:
        return self._edit_tags(
            component_id,
            sub_component_id,
            lambda tags: tuple(t for t in tags if t != tag),
        )

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def move_component(
        self, component_id: str, target_rack_id: str, position: int
    ) -> MutationResult:
        """Move a component within its rack or into another rack."""
        component = self.configuration.find_component(component_id)
        if component is None:
            return MutationResult.rejected(f"Unknown component: {component_id}")
        target = self.configuration.find_rack(target_rack_id)
        if target is None:
            return MutationResult.rejected(f"Unknown rack: {target_rack_id}")

        updated = move_component(
            self.configuration, component_id, target_rack_id, position
        )
        if updated is None:
            exclude = component_id if target.contains(component_id) else None
            check = check_placement(target, position, component.height, exclude)
            return MutationResult.rejected(check.message)
        self._commit(updated)
        return MutationResult.applied(component_id)

    def begin_drag(self, component_id: str) -> bool:
        return self.drag.start(self.configuration, component_id)

    def drag_over(self, rack_id: str, offset: float) -> int | None:
        """Update the drop preview; returns the valid candidate slot or None."""
        return self.drag.hover(self.configuration, rack_id, offset)

    def drop(self, rack_id: str, offset: float | None = None) -> MutationResult:
        """Finish the drag over `rack_id`. Invalid drops are silent no-ops."""
        component_id = self.drag.component_id
        outcome = self.drag.drop(self.configuration, rack_id, offset)
        if not outcome.applied:
            return MutationResult(ok=False, entity_id=component_id)
        self._commit(outcome.configuration)
        return MutationResult.applied(component_id)

    def cancel_drag(self) -> None:
        self.drag.cancel()

    # ------------------------------------------------------------------
    # Persistence bridge
    # ------------------------------------------------------------------

    def load(self, configuration: RackConfiguration) -> None:
        """Replace the whole state with an imported configuration.

        The first rack becomes the selected rack and the component selection
        is cleared.

        Raises:
            ConfigError: If the configuration violates layout invariants
                (overlaps, out-of-bounds items, duplicate ids). Nothing is
                loaded in that case.
        """
        result = validate_configuration(configuration)
        if not result.is_valid:
            raise ConfigError(
                message="Configuration violates rack layout rules:\n"
                + "\n".join(f"  - {e.path}: {e.message}" for e in result.errors),
                error_type="layout",
                details=[
                    {"path": e.path, "message": e.message, "value": e.value}
                    for e in result.errors
                ],
            )
        self.drag.cancel()
        self._state = PlannerState(
            configuration=configuration,
            selected_rack_id=configuration.racks[0].id if configuration.racks else None,
        )
        logger.info(f"Loaded configuration with {len(configuration)} rack(s)")
