# @file purpose: Maps an accessibility node's property bag to a SerializedAXNode
"""
Serialization of single accessibility nodes.

The CDP property list is loosely typed. It is folded into a case-insensitive
map, the node's dedicated name/value/description tokens are layered on top,
and each output field is read through `get_typed` with a fixed default policy.
Malformed tokens raise AXValueConversionError rather than falling back.
"""

from typing import Any

from ax_snapshot.accessibility.tree import AXTreeNode
from ax_snapshot.accessibility.values import get_typed
from ax_snapshot.accessibility.views import CheckedState, SerializedAXNode

# WebAreas report whether their frame has focus, not whether focus is on the root node itself
FRAME_FOCUS_ROLE = 'WebArea'


def _build_property_map(node: AXTreeNode) -> dict[str, Any]:
	record = node.record
	properties: dict[str, Any] = {}
	for prop in record.properties:
		properties[prop.name.lower()] = prop.value.value

	# Dedicated payload fields take precedence over properties of the same name
	if record.name is not None:
		properties['name'] = record.name.value
	if record.value is not None:
		properties['value'] = record.value.value
	if record.description is not None:
		properties['description'] = record.description.value
	return properties


def _get_if_not_false(value: str | None) -> str | None:
	return value if value is not None and value != 'false' else None


def _get_checked_state(value: str | None) -> CheckedState:
	if value == 'mixed':
		return CheckedState.MIXED
	if value == 'true':
		return CheckedState.TRUE
	return CheckedState.FALSE


def _get_flag(properties: dict[str, Any], key: str) -> bool:
	return get_typed(properties, key, bool) or False


def _get_int(properties: dict[str, Any], key: str) -> int:
	value = get_typed(properties, key, int)
	return 0 if value is None else value


def serialize_ax_node(node: AXTreeNode) -> SerializedAXNode:
	"""Serialize one node. Children are left unset; the walker attaches them."""
	properties = _build_property_map(node)

	return SerializedAXNode(
		role=node.role,
		name=get_typed(properties, 'name', str),
		value=get_typed(properties, 'value', str),
		description=get_typed(properties, 'description', str),
		key_shortcuts=get_typed(properties, 'keyshortcuts', str),
		role_description=get_typed(properties, 'roledescription', str),
		value_text=get_typed(properties, 'valuetext', str),
		disabled=_get_flag(properties, 'disabled'),
		expanded=_get_flag(properties, 'expanded'),
		focused=_get_flag(properties, 'focused') and node.role != FRAME_FOCUS_ROLE,
		modal=_get_flag(properties, 'modal'),
		multiline=_get_flag(properties, 'multiline'),
		multiselectable=_get_flag(properties, 'multiselectable'),
		readonly=_get_flag(properties, 'readonly'),
		required=_get_flag(properties, 'required'),
		selected=_get_flag(properties, 'selected'),
		checked=_get_checked_state(get_typed(properties, 'checked', str)),
		pressed=_get_checked_state(get_typed(properties, 'pressed', str)),
		level=_get_int(properties, 'level'),
		value_max=_get_int(properties, 'valuemax'),
		value_min=_get_int(properties, 'valuemin'),
		auto_complete=_get_if_not_false(get_typed(properties, 'autocomplete', str)),
		has_popup=_get_if_not_false(get_typed(properties, 'haspopup', str)),
		invalid=_get_if_not_false(get_typed(properties, 'invalid', str)),
		orientation=_get_if_not_false(get_typed(properties, 'orientation', str)),
	)
