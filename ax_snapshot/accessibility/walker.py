# @file purpose: Walks a built accessibility tree into an "interesting-only" snapshot
"""
Accessibility snapshot walker.

Consumes the classifier the way a browser automation `accessibility.snapshot()`
call does: interesting nodes are collected from the tree root (descent stops at
leaf nodes, and everything below a control is evaluated as inside a control),
then the serialized tree is rebuilt from the chosen root, hoisting the
children of skipped nodes into their nearest kept ancestor.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ax_snapshot.accessibility.classifier import AXNodeClassifier
from ax_snapshot.accessibility.serializer import serialize_ax_node
from ax_snapshot.accessibility.tree import AXTree, AXTreeNode
from ax_snapshot.accessibility.views import AXNodeRecord, SerializedAXNode
from ax_snapshot.config import CONFIG
from ax_snapshot.utils import time_execution_sync

logger = logging.getLogger(__name__)


@dataclass
class WalkStats:
	"""Statistics about the last snapshot"""

	visited_nodes: int = 0
	interesting_nodes: int = 0
	serialized_nodes: int = 0


class AccessibilityTreeWalker:
	"""Turns a built accessibility tree into a SerializedAXNode snapshot."""

	def __init__(self, tree: AXTree | AXTreeNode | None):
		if isinstance(tree, AXTree):
			self.tree: AXTree | None = tree
			self.root_node = tree.root
		else:
			self.tree = None
			self.root_node = tree
		self.stats = WalkStats()

	@time_execution_sync('--accessibility_snapshot')
	def snapshot(self, interesting_only: bool | None = None, subtree_id: str | None = None) -> SerializedAXNode | None:
		"""
		Serialize the tree.

		Args:
			interesting_only: Prune nodes the classifier does not consider interesting.
				Defaults to CONFIG.AX_SNAPSHOT_INTERESTING_ONLY.
			subtree_id: Id of the node to use as the snapshot root. Defaults to the tree root.

		Returns:
			The serialized snapshot, or None if the tree is empty, subtree_id is unknown,
			or the chosen root is not interesting.
		"""
		if interesting_only is None:
			interesting_only = CONFIG.AX_SNAPSHOT_INTERESTING_ONLY

		self.stats = WalkStats()
		if self.root_node is None:
			return None

		needle = self.root_node
		if subtree_id is not None:
			found = self._find_node(subtree_id)
			if found is None:
				logger.debug(f'🔍 No accessibility node with id {subtree_id}, snapshot is empty')
				return None
			needle = found

		whitelist: set[int] | None = None
		if interesting_only:
			whitelist = set()
			self._collect_interesting_nodes(self.root_node, whitelist)
			if needle.index not in whitelist:
				return None

		serialized = self._serialize_tree(needle, whitelist)
		result = serialized[0] if serialized else None
		logger.debug(
			f'♿ Accessibility snapshot: visited {self.stats.visited_nodes}, '
			f'interesting {self.stats.interesting_nodes}, serialized {self.stats.serialized_nodes}'
		)
		return result

	def _find_node(self, node_id: str) -> AXTreeNode | None:
		if self.tree is not None:
			return self.tree.get(node_id)
		stack = [self.root_node] if self.root_node else []
		while stack:
			node = stack.pop()
			if node.node_id == node_id:
				return node
			stack.extend(reversed(node.children))
		return None

	def _collect_interesting_nodes(self, root: AXTreeNode, collection: set[int]) -> None:
		stack: list[tuple[AXTreeNode, bool]] = [(root, False)]
		while stack:
			node, inside_control = stack.pop()
			self.stats.visited_nodes += 1
			if AXNodeClassifier.is_interesting(node, inside_control):
				collection.add(node.index)
				self.stats.interesting_nodes += 1
			if AXNodeClassifier.is_leaf_node(node):
				continue
			inside_control = inside_control or AXNodeClassifier.is_control(node)
			stack.extend((child, inside_control) for child in reversed(node.children))

	def _serialize_tree(self, root: AXTreeNode, whitelist: set[int] | None) -> list[SerializedAXNode]:
		"""Post-order serialization with an explicit stack, so deep trees do not hit the recursion limit."""
		serialized_by_index: dict[int, list[SerializedAXNode]] = {}
		stack: list[tuple[AXTreeNode, bool]] = [(root, False)]
		while stack:
			node, children_done = stack.pop()
			if not children_done:
				if whitelist is None:
					self.stats.visited_nodes += 1
				stack.append((node, True))
				stack.extend((child, False) for child in reversed(node.children))
				continue

			children = [serialized for child in node.children for serialized in serialized_by_index.pop(child.index)]

			# Skipped nodes hand their serialized children up to the parent
			if whitelist is not None and node.index not in whitelist:
				serialized_by_index[node.index] = children
				continue

			serialized = serialize_ax_node(node)
			self.stats.serialized_nodes += 1
			if children:
				serialized.children = children
			serialized_by_index[node.index] = [serialized]

		return serialized_by_index[root.index]

	def get_compression_ratio(self) -> float:
		"""How much smaller the last snapshot is than the part of the tree that was visited."""
		if self.stats.visited_nodes == 0:
			return 0.0
		return 1.0 - (self.stats.serialized_nodes / self.stats.visited_nodes)


def create_snapshot(
	records: Iterable[AXNodeRecord | dict[str, Any]],
	interesting_only: bool | None = None,
	subtree_id: str | None = None,
	root_id: str | None = None,
) -> SerializedAXNode | None:
	"""
	Convenience function to build a tree from a batch and snapshot it.

	Args:
		records: Accessibility.getFullAXTree nodes
		interesting_only: Whether to prune uninteresting nodes
		subtree_id: Node to use as snapshot root
		root_id: Node to use as tree root (defaults to the first record)
	"""
	tree = AXTree.from_records(records, root_id=root_id)
	return AccessibilityTreeWalker(tree).snapshot(interesting_only=interesting_only, subtree_id=subtree_id)


def count_nodes(serialized: SerializedAXNode | None) -> int:
	count = 0
	stack = [serialized] if serialized is not None else []
	while stack:
		node = stack.pop()
		count += 1
		stack.extend(node.children or [])
	return count
