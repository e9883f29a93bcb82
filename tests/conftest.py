"""
Shared factories for accessibility snapshot tests.

Nodes are produced in the shape Accessibility.getFullAXTree returns them, so
tests exercise the same record validation real callers go through.
"""

import os
from typing import Any

import pytest

# Keep the package logger quiet and predictable under pytest
os.environ.setdefault('AX_SNAPSHOT_SETUP_LOGGING', 'false')

from ax_snapshot.accessibility.tree import AXTree  # noqa: E402


def ax_value(value: Any, value_type: str = 'string') -> dict[str, Any]:
	return {'type': value_type, 'value': value}


def ax_node(
	node_id: str,
	role: str | None = None,
	name: Any = None,
	properties: list[tuple[str, Any]] | None = None,
	child_ids: list[str] | None = None,
	value: Any = None,
	description: Any = None,
) -> dict[str, Any]:
	"""Create a CDP AXNode dict."""
	node: dict[str, Any] = {'nodeId': node_id, 'ignored': False, 'childIds': child_ids or []}
	if role is not None:
		node['role'] = ax_value(role, 'role')
	if name is not None:
		node['name'] = ax_value(name, 'computedString')
	if value is not None:
		node['value'] = ax_value(value)
	if description is not None:
		node['description'] = ax_value(description, 'computedString')
	node['properties'] = [{'name': prop_name, 'value': ax_value(prop_value, 'booleanOrUndefined')} for prop_name, prop_value in properties or []]
	return node


@pytest.fixture
def make_node():
	"""Factory for a single built node with the given children records."""

	def _make(role: str | None = None, name: Any = None, properties: list[tuple[str, Any]] | None = None, children: list[dict[str, Any]] | None = None):
		children = children or []
		root = ax_node('root', role=role, name=name, properties=properties, child_ids=[child['nodeId'] for child in children])
		return AXTree.from_records([root, *children]).root

	return _make


@pytest.fixture
def scenario_records() -> list[dict[str, Any]]:
	"""A WebArea with a mixed-state button and a text node."""
	return [
		ax_node('1', role='WebArea', properties=[('focused', True)], child_ids=['2', '3']),
		ax_node('2', role='button', properties=[('focusable', True), ('checked', 'mixed')]),
		ax_node('3', role='text'),
	]
