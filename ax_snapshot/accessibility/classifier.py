from ax_snapshot.accessibility.tree import AXTreeNode


class AXNodeClassifier:
	"""Decides which accessibility nodes are meaningful to assistive technology."""

	TEXT_FIELD_ROLES = frozenset({'textbox', 'ComboBox', 'searchbox'})

	TEXT_ONLY_ROLES = frozenset({'LineBreak', 'text', 'InlineTextBox'})

	# Roles whose children are only presentational according to the ARIA and HTML5 specs.
	# button is absent: HTML5 buttons are allowed to have content.
	PRESENTATIONAL_CHILDREN_ROLES = frozenset(
		{'doc-cover', 'graphics-symbol', 'img', 'Meter', 'scrollbar', 'slider', 'separator', 'progressbar'}
	)

	CONTROL_ROLES = frozenset(
		{
			'button',
			'checkbox',
			'ColorWell',
			'combobox',
			'DisclosureTriangle',
			'listbox',
			'menu',
			'menubar',
			'menuitem',
			'menuitemcheckbox',
			'menuitemradio',
			'radio',
			'scrollbar',
			'searchbox',
			'slider',
			'spinbutton',
			'switch',
			'tab',
			'textbox',
			'tree',
		}
	)

	@staticmethod
	def is_plain_text_field(node: AXTreeNode) -> bool:
		if node.richly_editable:
			return False
		if node.editable:
			return True
		return node.role in AXNodeClassifier.TEXT_FIELD_ROLES

	@staticmethod
	def is_text_only_object(node: AXTreeNode) -> bool:
		return node.role in AXNodeClassifier.TEXT_ONLY_ROLES

	@staticmethod
	def has_focusable_child(node: AXTreeNode) -> bool:
		"""
		Whether any descendant of node is focusable.

		The answer is memoized on every node of the subtree. Post-order traversal
		with an explicit stack so deep trees do not hit the recursion limit.
		"""
		if node.focusable_descendant_cache is not None:
			return node.focusable_descendant_cache

		stack: list[tuple[AXTreeNode, bool]] = [(node, False)]
		while stack:
			current, children_done = stack.pop()
			if current.focusable_descendant_cache is not None:
				continue
			if not children_done:
				stack.append((current, True))
				stack.extend((child, False) for child in current.children if child.focusable_descendant_cache is None)
				continue
			current.focusable_descendant_cache = any(
				child.focusable or child.focusable_descendant_cache for child in current.children
			)

		return bool(node.focusable_descendant_cache)

	@staticmethod
	def is_control(node: AXTreeNode) -> bool:
		return node.role in AXNodeClassifier.CONTROL_ROLES

	@staticmethod
	def is_leaf_node(node: AXTreeNode) -> bool:
		if not node.children:
			return True

		# These objects may have children used as internal implementation details,
		# but screen readers can get confused if they find any children.
		if AXNodeClassifier.is_plain_text_field(node) or AXNodeClassifier.is_text_only_object(node):
			return True

		if node.role in AXNodeClassifier.PRESENTATIONAL_CHILDREN_ROLES:
			return True

		# Here and below: Android heuristics
		if AXNodeClassifier.has_focusable_child(node):
			return False
		if node.focusable and node.name:
			return True
		if node.role == 'heading' and node.name:
			return True
		return False

	@staticmethod
	def is_interesting(node: AXTreeNode, inside_control: bool) -> bool:
		if node.role == 'Ignored':
			return False

		if node.focusable or node.richly_editable:
			return True

		# Not focusable but has a control role
		if AXNodeClassifier.is_control(node):
			return True

		# A non focusable child of a control is not interesting
		if inside_control:
			return False

		return AXNodeClassifier.is_leaf_node(node) and bool(node.name)
