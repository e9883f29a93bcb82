# @file purpose: Builds a linked accessibility tree from a flat Accessibility.getFullAXTree batch
"""
Tree construction for accessibility snapshots.

CDP returns the accessibility tree as a flat list of nodes that reference
their children by id. `AXTree` keeps every node in an arena (batch order),
resolves child ids once all nodes exist, and designates a root.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from cdp_use.cdp.accessibility.commands import GetFullAXTreeReturns
from cdp_use.cdp.accessibility.types import AXNode

from ax_snapshot.accessibility.values import get_typed
from ax_snapshot.accessibility.views import (
	AXNodeRecord,
	AXTreeLookupError,
	AXTreeStructureError,
)
from ax_snapshot.utils import time_execution_sync

logger = logging.getLogger(__name__)

UNKNOWN_ROLE = 'Unknown'


@dataclass(eq=False)
class AXTreeNode:
	"""A node of the built tree. Read-only once the tree is built, except for the focusable-descendant memo."""

	record: AXNodeRecord
	index: int
	role: str = UNKNOWN_ROLE
	name: str = ''
	editable: bool = False
	richly_editable: bool = False
	focusable: bool = False
	expanded: bool = False
	children: list[AXTreeNode] = field(default_factory=list)
	focusable_descendant_cache: bool | None = field(default=None, repr=False)

	@classmethod
	def from_record(cls, record: AXNodeRecord, index: int) -> AXTreeNode:
		node = cls(record=record, index=index)
		node.role = record.role or UNKNOWN_ROLE
		if record.name is not None:
			node.name = get_typed({'name': record.name.value}, 'name', str) or ''

		# Last property of each name wins
		for prop in record.properties:
			token = {prop.name: prop.value.value}
			if prop.name == 'editable':
				node.richly_editable = get_typed(token, 'editable', str) == 'richtext'
				node.editable = True
			elif prop.name == 'focusable':
				node.focusable = bool(get_typed(token, 'focusable', bool))
			elif prop.name == 'expanded':
				node.expanded = bool(get_typed(token, 'expanded', bool))
		return node

	@property
	def node_id(self) -> str:
		return self.record.node_id

	def __repr__(self) -> str:
		return f'<AXTreeNode {self.node_id} role={self.role!r} name={self.name!r} children={len(self.children)}>'


class AXTree:
	"""Arena of AXTreeNodes in batch order, indexed by id."""

	def __init__(self, nodes: list[AXTreeNode], index_by_id: dict[str, int], root: AXTreeNode | None):
		self.nodes = nodes
		self._index_by_id = index_by_id
		self.root = root

	@classmethod
	@time_execution_sync('--build_ax_tree')
	def from_records(cls, records: Iterable[AXNodeRecord | AXNode | dict[str, Any]], root_id: str | None = None) -> AXTree:
		"""Build the tree.

		Args:
			records: Parsed records or raw CDP AXNode dicts, in protocol order.
			root_id: Id of the root node. Defaults to the first record of the batch.

		Raises:
			AXTreeLookupError: A child id has no matching record.
			AXTreeStructureError: Duplicate ids, a node with two parents, a cycle, or an unknown root_id.
			AXValueConversionError: A flag property cannot be decoded.
		"""
		nodes: list[AXTreeNode] = []
		index_by_id: dict[str, int] = {}

		for raw in records:
			record = raw if isinstance(raw, AXNodeRecord) else AXNodeRecord.model_validate(raw)
			if record.node_id in index_by_id:
				raise AXTreeStructureError('Duplicate accessibility node id', details={'node_id': record.node_id})
			index_by_id[record.node_id] = len(nodes)
			nodes.append(AXTreeNode.from_record(record, len(nodes)))

		if not nodes:
			if root_id is not None:
				raise AXTreeStructureError('Root id not found in empty batch', details={'root_id': root_id})
			return cls(nodes, index_by_id, None)

		# Children are resolved only after every node exists so forward references work
		parent_by_index: dict[int, str] = {}
		for node in nodes:
			for child_id in node.record.child_ids:
				child_index = index_by_id.get(child_id)
				if child_index is None:
					raise AXTreeLookupError(
						'Child id not found in accessibility snapshot',
						details={'parent_id': node.node_id, 'child_id': child_id},
					)
				if child_index in parent_by_index:
					raise AXTreeStructureError(
						'Accessibility node has more than one parent',
						details={'node_id': child_id, 'parents': [parent_by_index[child_index], node.node_id]},
					)
				parent_by_index[child_index] = node.node_id
				node.children.append(nodes[child_index])

		if root_id is None:
			root = nodes[0]
		elif root_id in index_by_id:
			root = nodes[index_by_id[root_id]]
		else:
			raise AXTreeStructureError('Root id not found in accessibility snapshot', details={'root_id': root_id})

		_check_acyclic(nodes, parent_by_index)
		logger.debug(f'🌳 Built accessibility tree: {len(nodes)} nodes, root {root.node_id}')
		return cls(nodes, index_by_id, root)

	def get(self, node_id: str) -> AXTreeNode | None:
		index = self._index_by_id.get(node_id)
		return None if index is None else self.nodes[index]

	def __len__(self) -> int:
		return len(self.nodes)

	def __iter__(self) -> Iterator[AXTreeNode]:
		return iter(self.nodes)


def _check_acyclic(nodes: list[AXTreeNode], parent_by_index: dict[int, str]) -> None:
	"""Raise if any node of the batch sits on or below a cycle.

	Every node has at most one parent at this point, so walking down from the
	parentless nodes reaches each node at most once and misses exactly those.
	"""
	seen: set[int] = set()
	stack = [node for node in nodes if node.index not in parent_by_index]
	while stack:
		node = stack.pop()
		seen.add(node.index)
		stack.extend(node.children)
	if len(seen) < len(nodes):
		node_id = next(node.node_id for node in nodes if node.index not in seen)
		raise AXTreeStructureError('Cycle in accessibility tree', details={'node_id': node_id})


def build_tree(records: Iterable[AXNodeRecord | AXNode | dict[str, Any]], root_id: str | None = None) -> AXTreeNode | None:
	"""Build the tree and return its root, or None for an empty batch."""
	return AXTree.from_records(records, root_id=root_id).root


def build_tree_from_cdp(response: GetFullAXTreeReturns, root_id: str | None = None) -> AXTreeNode | None:
	"""Build the tree straight from an Accessibility.getFullAXTree result."""
	return build_tree(response.get('nodes', []), root_id=root_id)
