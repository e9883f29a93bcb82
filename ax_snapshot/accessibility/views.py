from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Pydantic
class AXValue(BaseModel):
	"""A CDP AXValue: a typed token whose payload lives in `value`"""

	model_config = ConfigDict(extra='ignore', frozen=True)

	type: str | None = None
	value: Any = None


class AXProperty(BaseModel):
	model_config = ConfigDict(extra='ignore', frozen=True)

	name: str
	value: AXValue = Field(default_factory=AXValue)


class AXNodeRecord(BaseModel):
	"""One node of an Accessibility.getFullAXTree response"""

	model_config = ConfigDict(
		extra='ignore',
		frozen=True,
		validate_by_name=True,
		validate_by_alias=True,
	)

	node_id: str = Field(validation_alias=AliasChoices('nodeId', 'node_id'))
	ignored: bool = False
	role: str | None = None
	name: AXValue | None = None
	value: AXValue | None = None
	description: AXValue | None = None
	properties: list[AXProperty] = Field(default_factory=list)
	child_ids: list[str] = Field(default_factory=list, validation_alias=AliasChoices('childIds', 'child_ids'))
	backend_dom_node_id: int | None = Field(
		default=None, validation_alias=AliasChoices('backendDOMNodeId', 'backend_dom_node_id')
	)

	@field_validator('role', mode='before')
	@classmethod
	def unwrap_role(cls, role: Any) -> Any:
		# CDP wraps the role in an AXValue of type 'role' or 'internalRole'
		if isinstance(role, AXValue):
			return role.value
		if isinstance(role, dict):
			return role.get('value')
		return role


class CheckedState(str, Enum):
	"""Tri-state used by checked and pressed"""

	FALSE = 'false'
	TRUE = 'true'
	MIXED = 'mixed'


class SerializedAXNode(BaseModel):
	"""The assistive-technology facing view of one accessibility node"""

	model_config = ConfigDict(alias_generator=AliasGenerator(serialization_alias=to_camel))

	role: str

	name: str | None = None
	value: str | None = None
	description: str | None = None
	key_shortcuts: str | None = None
	role_description: str | None = None
	value_text: str | None = None

	disabled: bool = False
	expanded: bool = False
	focused: bool = False
	modal: bool = False
	multiline: bool = False
	multiselectable: bool = False
	readonly: bool = False
	required: bool = False
	selected: bool = False

	checked: CheckedState = CheckedState.FALSE
	pressed: CheckedState = CheckedState.FALSE

	level: int = 0
	value_max: int = 0
	value_min: int = 0

	auto_complete: str | None = None
	has_popup: str | None = None
	invalid: str | None = None
	orientation: str | None = None

	children: list[SerializedAXNode] | None = None  # only filled in by the snapshot walker

	def to_dict(self) -> dict[str, Any]:
		return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class AXSnapshotError(Exception):
	"""Base class for all accessibility snapshot errors"""

	message: str
	details: dict[str, Any] | None = None

	def __init__(self, message: str, details: dict[str, Any] | None = None):
		self.message = message
		super().__init__(message)
		self.details = details

	def __str__(self) -> str:
		if self.details:
			return f'{self.message} ({self.details})'
		return self.message


class AXTreeLookupError(AXSnapshotError, KeyError):
	"""A child id does not match any record in the batch"""


class AXTreeStructureError(AXSnapshotError, ValueError):
	"""The batch does not describe a strict tree"""


class AXValueConversionError(AXSnapshotError, TypeError):
	"""A value token cannot be decoded to the type its property requires"""
