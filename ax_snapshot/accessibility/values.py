"""
Typed decoding of CDP value tokens.

Property values arrive as loosely typed JSON. Every read goes through
`get_typed`, which either returns a value of the requested type, returns None
for an absent token, or raises AXValueConversionError.
"""

import math
from collections.abc import Mapping
from typing import Any, TypeVar

from ax_snapshot.accessibility.views import AXValueConversionError

T = TypeVar('T', str, bool, int)


def decode_value(token: Any, expected: type[T], key: str = '') -> T:
	"""Convert a non-null JSON token to `expected` or raise AXValueConversionError."""
	if expected is bool:
		if isinstance(token, bool):
			return token
		if token in ('true', 'false'):
			return token == 'true'

	elif expected is int:
		# bool is a subclass of int, reject it before the int check
		if isinstance(token, bool):
			pass
		elif isinstance(token, int):
			return token
		elif isinstance(token, float) and math.isfinite(token):
			return round(token)
		elif isinstance(token, str):
			try:
				return int(token.strip())
			except ValueError:
				pass

	elif expected is str:
		if isinstance(token, str):
			return token
		if isinstance(token, bool):
			return 'True' if token else 'False'
		if isinstance(token, (int, float)):
			return str(token)

	else:
		raise TypeError(f'Unsupported target type: {expected!r}')

	raise AXValueConversionError(
		f'Cannot convert {key or "value"} to {expected.__name__}',
		details={'key': key, 'expected': expected.__name__, 'value': token},
	)


def get_typed(properties: Mapping[str, Any], key: str, expected: type[T]) -> T | None:
	"""Look up `key` and decode it. Absent keys and null tokens give None."""
	token = properties.get(key)
	if token is None:
		return None
	return decode_value(token, expected, key)
