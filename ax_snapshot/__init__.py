from ax_snapshot.config import CONFIG
from ax_snapshot.logging_config import setup_logging

if CONFIG.AX_SNAPSHOT_SETUP_LOGGING:
	setup_logging()

from ax_snapshot.accessibility import (  # noqa: E402
	AccessibilityTreeWalker,
	AXNodeClassifier,
	AXNodeRecord,
	AXSnapshotError,
	AXTree,
	AXTreeLookupError,
	AXTreeNode,
	AXTreeStructureError,
	AXValueConversionError,
	CheckedState,
	SerializedAXNode,
	build_tree,
	build_tree_from_cdp,
	create_snapshot,
	serialize_ax_node,
)

__all__ = [
	'AccessibilityTreeWalker',
	'AXNodeClassifier',
	'AXNodeRecord',
	'AXSnapshotError',
	'AXTree',
	'AXTreeLookupError',
	'AXTreeNode',
	'AXTreeStructureError',
	'AXValueConversionError',
	'CheckedState',
	'SerializedAXNode',
	'build_tree',
	'build_tree_from_cdp',
	'create_snapshot',
	'serialize_ax_node',
	'setup_logging',
]
