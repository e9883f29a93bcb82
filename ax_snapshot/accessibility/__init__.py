"""
Accessibility snapshot processing.

Builds a tree from the flat node list returned by Accessibility.getFullAXTree,
classifies nodes for assistive technology and serializes them.
"""

from ax_snapshot.accessibility.classifier import AXNodeClassifier
from ax_snapshot.accessibility.serializer import serialize_ax_node
from ax_snapshot.accessibility.tree import AXTree, AXTreeNode, build_tree, build_tree_from_cdp
from ax_snapshot.accessibility.values import decode_value, get_typed
from ax_snapshot.accessibility.views import (
	AXNodeRecord,
	AXProperty,
	AXSnapshotError,
	AXTreeLookupError,
	AXTreeStructureError,
	AXValue,
	AXValueConversionError,
	CheckedState,
	SerializedAXNode,
)
from ax_snapshot.accessibility.walker import AccessibilityTreeWalker, WalkStats, count_nodes, create_snapshot

__all__ = [
	'AXNodeClassifier',
	'AXNodeRecord',
	'AXProperty',
	'AXSnapshotError',
	'AXTree',
	'AXTreeLookupError',
	'AXTreeNode',
	'AXTreeStructureError',
	'AXValue',
	'AXValueConversionError',
	'AccessibilityTreeWalker',
	'CheckedState',
	'SerializedAXNode',
	'WalkStats',
	'build_tree',
	'build_tree_from_cdp',
	'count_nodes',
	'create_snapshot',
	'decode_value',
	'get_typed',
	'serialize_ax_node',
]
