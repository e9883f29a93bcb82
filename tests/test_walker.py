"""
Tests for the accessibility snapshot walker.

Covers interesting-only pruning, control subtrees, leaf cut-off, subtree roots
and the full (unpruned) snapshot mode.
"""

import pytest
from conftest import ax_node

from ax_snapshot.accessibility.classifier import AXNodeClassifier
from ax_snapshot.accessibility.serializer import serialize_ax_node
from ax_snapshot.accessibility.tree import AXTree, build_tree
from ax_snapshot.accessibility.views import CheckedState
from ax_snapshot.accessibility.walker import AccessibilityTreeWalker, count_nodes, create_snapshot

FORM_PAGE = [
	ax_node('1', role='WebArea', name='Contact', child_ids=['2', '3', '6', '8']),
	ax_node('2', role='heading', name='Contact Us', child_ids=['2a']),
	ax_node('2a', role='text', name='Contact Us'),
	ax_node('3', role='generic', child_ids=['4']),
	ax_node('4', role='generic', child_ids=['5']),
	ax_node('5', role='textbox', name='Email', properties=[('focusable', True), ('editable', 'plaintext')], child_ids=['5a']),
	ax_node('5a', role='generic', child_ids=['5b']),
	ax_node('5b', role='text', name='placeholder'),
	ax_node('6', role='button', name='Send', child_ids=['7']),
	ax_node('7', role='text', name='Send'),
	ax_node('8', role='generic', child_ids=['9']),
	ax_node('9', role='generic'),
]


class TestScenario:
	def test_three_node_batch(self, scenario_records):
		root = build_tree(scenario_records)
		button, text = root.children

		assert root.node_id == '1'
		assert len(root.children) == 2
		assert serialize_ax_node(root).focused is False

		assert AXNodeClassifier.is_control(button)
		assert AXNodeClassifier.is_interesting(button, inside_control=False)
		assert serialize_ax_node(button).checked is CheckedState.MIXED

		assert AXNodeClassifier.is_text_only_object(text)
		assert AXNodeClassifier.is_leaf_node(text)

	def test_three_node_snapshot(self, scenario_records):
		snapshot = create_snapshot(scenario_records, interesting_only=False)

		assert snapshot.role == 'WebArea'
		assert [child.role for child in snapshot.children] == ['button', 'text']


class TestInterestingOnly:
	def test_root_without_interesting_traits_is_dropped(self, scenario_records):
		# The unnamed WebArea is not interesting, so there is nothing to anchor the snapshot on
		assert create_snapshot(scenario_records, interesting_only=True) is None

	def test_unfocusable_root_with_focusable_descendants_is_dropped(self):
		assert create_snapshot(FORM_PAGE, interesting_only=True) is None

	def test_form_page_with_focusable_root(self):
		records = [ax_node('1', role='WebArea', name='Contact', properties=[('focusable', True)], child_ids=['2', '3', '6', '8'])]
		records.extend(FORM_PAGE[1:])

		snapshot = create_snapshot(records, interesting_only=True)

		assert snapshot.role == 'WebArea'
		# Structural generics are pruned and the text field is hoisted up to the root
		assert [(child.role, child.name) for child in snapshot.children] == [
			('heading', 'Contact Us'),
			('textbox', 'Email'),
			('button', 'Send'),
		]
		# Leaves hide their internals, controls hide non-focusable content
		assert all(child.children is None for child in snapshot.children)
		assert count_nodes(snapshot) == 4

	def test_focusable_child_of_control_is_kept(self):
		records = [
			ax_node('1', role='WebArea', properties=[('focusable', True)], child_ids=['2']),
			ax_node('2', role='menu', child_ids=['3', '4']),
			ax_node('3', role='generic', name='Heading text'),
			ax_node('4', role='generic', name='Item', properties=[('focusable', True)]),
		]

		snapshot = create_snapshot(records, interesting_only=True)
		menu = snapshot.children[0]

		assert menu.role == 'menu'
		assert [child.name for child in menu.children] == ['Item']

	def test_stats(self):
		records = [ax_node('1', role='WebArea', properties=[('focusable', True)], child_ids=['2', '3']), ax_node('2', role='generic'), ax_node('3', role='button')]
		walker = AccessibilityTreeWalker(AXTree.from_records(records))

		walker.snapshot(interesting_only=True)

		assert walker.stats.visited_nodes == 3
		assert walker.stats.interesting_nodes == 2
		assert walker.stats.serialized_nodes == 2
		assert walker.get_compression_ratio() == pytest.approx(1 / 3)

	def test_default_comes_from_config(self, monkeypatch, scenario_records):
		monkeypatch.setenv('AX_SNAPSHOT_INTERESTING_ONLY', 'false')
		assert create_snapshot(scenario_records) is not None

		monkeypatch.setenv('AX_SNAPSHOT_INTERESTING_ONLY', 'true')
		assert create_snapshot(scenario_records) is None


class TestSubtree:
	def test_subtree_snapshot(self):
		snapshot = create_snapshot(FORM_PAGE, interesting_only=False, subtree_id='3')

		assert snapshot.role == 'generic'
		assert count_nodes(snapshot) == 5

	def test_interesting_subtree(self):
		snapshot = create_snapshot(FORM_PAGE, interesting_only=True, subtree_id='6')

		assert snapshot.role == 'button'
		assert snapshot.name == 'Send'
		assert snapshot.children is None

	def test_uninteresting_subtree_is_none(self):
		assert create_snapshot(FORM_PAGE, interesting_only=True, subtree_id='8') is None

	def test_unknown_subtree_is_none(self):
		assert create_snapshot(FORM_PAGE, interesting_only=False, subtree_id='404') is None

	def test_walker_over_bare_root_finds_subtree(self):
		walker = AccessibilityTreeWalker(build_tree(FORM_PAGE))

		snapshot = walker.snapshot(interesting_only=False, subtree_id='5')

		assert snapshot.role == 'textbox'
		assert count_nodes(snapshot) == 3


class TestDeepTrees:
	DEPTH = 3000

	def _chain(self):
		records = [ax_node('root', role='WebArea', properties=[('focusable', True)], child_ids=['0'])]
		records.extend(ax_node(str(i), role='generic', child_ids=[str(i + 1)]) for i in range(self.DEPTH))
		records.append(ax_node(str(self.DEPTH), role='text', name='Bottom'))
		return records

	def test_interesting_only(self):
		snapshot = create_snapshot(self._chain(), interesting_only=True)

		assert snapshot.role == 'WebArea'
		assert [(child.role, child.name) for child in snapshot.children] == [('text', 'Bottom')]
		assert count_nodes(snapshot) == 2

	def test_full_snapshot(self):
		walker = AccessibilityTreeWalker(AXTree.from_records(self._chain()))

		snapshot = walker.snapshot(interesting_only=False)

		assert count_nodes(snapshot) == self.DEPTH + 2
		assert walker.stats.serialized_nodes == self.DEPTH + 2


class TestFullSnapshot:
	def test_every_node_is_serialized(self):
		walker = AccessibilityTreeWalker(AXTree.from_records(FORM_PAGE))

		snapshot = walker.snapshot(interesting_only=False)

		assert count_nodes(snapshot) == len(FORM_PAGE)
		assert walker.stats.serialized_nodes == len(FORM_PAGE)
		assert walker.get_compression_ratio() == 0.0

	def test_empty_tree(self):
		walker = AccessibilityTreeWalker(AXTree.from_records([]))

		assert walker.snapshot(interesting_only=False) is None
		assert walker.get_compression_ratio() == 0.0
		assert count_nodes(None) == 0
