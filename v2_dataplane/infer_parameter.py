#
#   Copyright 2025 Hopsworks AB
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Optional, Union

import humps
from v2_dataplane import util
from v2_dataplane.client.exceptions import InvalidParameterError, ParameterCodecError
from v2_dataplane.constants import INFER_PARAMETER, PROTO
from v2_dataplane.decorators import typechecked


class ParameterChoice(Enum):
    """Which member of the `parameter_choice` oneof is set.

    Members carry the oneof field name as value, `UNSET` carries the protobuf
    `PARAMETER_CHOICE_NOT_SET` case name.
    """

    UNSET = INFER_PARAMETER.PARAMETER_CHOICE_NOT_SET
    BOOL = INFER_PARAMETER.BOOL_PARAM
    INT64 = INFER_PARAMETER.INT64_PARAM
    STRING = INFER_PARAMETER.STRING_PARAM

    @classmethod
    def has_value(cls, value):
        return value in cls._value2member_map_

    @classmethod
    def from_field_name(cls, field_name: Optional[str]) -> ParameterChoice:
        """Map a oneof field name, as returned by `WhichOneof`, to its choice."""
        if field_name is None:
            return cls.UNSET
        return cls(field_name)

    @property
    def field_name(self) -> Optional[str]:
        return None if self is ParameterChoice.UNSET else self.value

    @property
    def json_name(self) -> Optional[str]:
        """camelCase key of the field in JSON, as protobuf derives it."""
        return None if self is ParameterChoice.UNSET else humps.camelize(self.value)

    @property
    def default(self) -> Union[bool, int, str, None]:
        return _DEFAULTS[self]

    def __str__(self):
        return self.value


_DEFAULTS = {
    ParameterChoice.UNSET: None,
    ParameterChoice.BOOL: False,
    ParameterChoice.INT64: 0,
    ParameterChoice.STRING: "",
}

_PAYLOAD_CHOICES = (ParameterChoice.BOOL, ParameterChoice.INT64, ParameterChoice.STRING)

# Looked up explicitly, decamelizing "int64Param" yields "int_64param".
_FIELD_NAMES_BY_JSON_NAME = {
    choice.json_name: choice.field_name for choice in _PAYLOAD_CHOICES
}

# protobuf JSON mapping of int64: optional minus sign, ASCII digits only
_INT64_STRING = re.compile(r"-?[0-9]+")


class _ParameterChoiceState:
    # A single discriminant and a single payload slot, so no two choices can
    # ever be observed as set at the same time.
    __slots__ = ("_choice", "_value")

    def __init__(self, choice: ParameterChoice = ParameterChoice.UNSET, value=None):
        self._assign(choice, value)

    def _assign(self, choice: ParameterChoice, value):
        object.__setattr__(self, "_choice", choice)
        object.__setattr__(self, "_value", value)

    def _get(self, choice: ParameterChoice):
        if self._choice is choice:
            return self._value
        return choice.default

    def has_bool_param(self) -> bool:
        return self._choice is ParameterChoice.BOOL

    def has_int64_param(self) -> bool:
        return self._choice is ParameterChoice.INT64

    def has_string_param(self) -> bool:
        return self._choice is ParameterChoice.STRING

    @property
    def parameter_choice(self) -> ParameterChoice:
        """Which of `bool_param`, `int64_param` and `string_param` is set."""
        return self._choice

    @property
    def kind(self) -> ParameterChoice:
        """Alias of `parameter_choice`."""
        return self._choice

    @property
    def value(self) -> Union[bool, int, str, None]:
        """Payload of the set choice, `None` if no choice is set."""
        return self._value


class InferParameter(_ParameterChoiceState):
    """An inference request or response parameter.

    Holds at most one of a boolean, a 64-bit integer or a string. Instances are
    immutable; use `InferParameter.Builder` to assemble one, or `copy` to derive
    a modified one.

    Reading a payload that is not the set choice returns its type default, so
    `InferParameter().string_param == ""` as well as
    `InferParameter(string_param="").string_param == ""`. Use `has_string_param`
    or `parameter_choice` to tell them apart.

    ```python
    param = InferParameter(int64_param=42)
    param.has_int64_param()  # True
    param.copy(lambda b: b.set_string_param("x")).int64_param  # 0
    ```
    """

    __slots__ = ()

    @typechecked
    def __init__(
        self,
        bool_param: Optional[bool] = None,
        int64_param: Optional[int] = None,
        string_param: Optional[str] = None,
    ):
        payloads = [
            (choice, value)
            for choice, value in zip(
                _PAYLOAD_CHOICES, (bool_param, int64_param, string_param)
            )
            if value is not None
        ]
        if len(payloads) > 1:
            raise ValueError(
                "Only one of {} can be set, got {}.".format(
                    list(INFER_PARAMETER.FIELD_NAMES),
                    [choice.value for choice, _ in payloads],
                )
            )
        choice, value = payloads[0] if payloads else (ParameterChoice.UNSET, None)
        super().__init__(choice, value)

    class Builder(_ParameterChoiceState):
        """Mutable staging object for `InferParameter`.

        Setting any payload replaces the one set before. `build` returns a
        snapshot and leaves the builder usable. Not safe for concurrent
        mutation.
        """

        __slots__ = ()

        def _set(self, choice: ParameterChoice, value):
            self._assign(choice, value)
            return self

        def _clear(self, choice: ParameterChoice):
            # clearing a choice that is not set leaves the set one alone
            if self._choice is choice:
                self._assign(ParameterChoice.UNSET, None)
            return self

        @typechecked
        def set_bool_param(self, value: bool) -> InferParameter.Builder:
            return self._set(ParameterChoice.BOOL, value)

        @typechecked
        def set_int64_param(self, value: int) -> InferParameter.Builder:
            return self._set(ParameterChoice.INT64, value)

        @typechecked
        def set_string_param(self, value: str) -> InferParameter.Builder:
            return self._set(ParameterChoice.STRING, value)

        def clear_bool_param(self) -> InferParameter.Builder:
            return self._clear(ParameterChoice.BOOL)

        def clear_int64_param(self) -> InferParameter.Builder:
            return self._clear(ParameterChoice.INT64)

        def clear_string_param(self) -> InferParameter.Builder:
            return self._clear(ParameterChoice.STRING)

        def clear_parameter_choice(self) -> InferParameter.Builder:
            return self._set(ParameterChoice.UNSET, None)

        def merge_from(self, other: _ParameterChoiceState) -> InferParameter.Builder:
            """Take over the choice of `other` if it has one."""
            if other.parameter_choice is not ParameterChoice.UNSET:
                self._set(other.parameter_choice, other.value)
            return self

        def build(self) -> InferParameter:
            return InferParameter._from_state(self._choice, self._value)

        @property
        def bool_param(self) -> bool:
            return self._get(ParameterChoice.BOOL)

        @bool_param.setter
        def bool_param(self, value: bool):
            self.set_bool_param(value)

        @property
        def int64_param(self) -> int:
            return self._get(ParameterChoice.INT64)

        @int64_param.setter
        def int64_param(self, value: int):
            self.set_int64_param(value)

        @property
        def string_param(self) -> str:
            return self._get(ParameterChoice.STRING)

        @string_param.setter
        def string_param(self, value: str):
            self.set_string_param(value)

        def __repr__(self):
            return "InferParameter.Builder({})".format(_repr_payload(self))

    @classmethod
    def _from_state(cls, choice: ParameterChoice, value) -> InferParameter:
        instance = cls.__new__(cls)
        instance._assign(choice, value)
        return instance

    @classmethod
    def new_builder(cls) -> InferParameter.Builder:
        return cls.Builder()

    def to_builder(self) -> InferParameter.Builder:
        """Return a new builder seeded with this parameter's choice and payload."""
        return InferParameter.Builder(self._choice, self._value)

    def copy(
        self, block: Optional[Callable[[InferParameter.Builder], Any]] = None
    ) -> InferParameter:
        """Return a new parameter with the changes applied by `block`.

        `block` receives a builder seeded with this parameter. This parameter
        is not modified.

        ```python
        flag = param.copy(lambda b: b.set_bool_param(True))
        ```
        """
        builder = self.to_builder()
        if block is not None:
            block(builder)
        return builder.build()

    @property
    def bool_param(self) -> bool:
        """Boolean payload, `False` unless `has_bool_param()`."""
        return self._get(ParameterChoice.BOOL)

    @property
    def int64_param(self) -> int:
        """Integer payload, `0` unless `has_int64_param()`."""
        return self._get(ParameterChoice.INT64)

    @property
    def string_param(self) -> str:
        """String payload, `""` unless `has_string_param()`."""
        return self._get(ParameterChoice.STRING)

    # - grpc

    @classmethod
    def from_grpc(cls, message) -> InferParameter:
        """Read any protobuf message with the `parameter_choice` oneof."""
        try:
            choice = ParameterChoice.from_field_name(
                message.WhichOneof(PROTO.ONEOF_NAME)
            )
        except ValueError as e:
            raise InvalidParameterError(
                "Message {} has no readable {} oneof: {}".format(
                    type(message).__name__, PROTO.ONEOF_NAME, e
                ),
                message,
            ) from e
        if choice is ParameterChoice.UNSET:
            return cls()
        return cls._from_state(choice, getattr(message, choice.field_name))

    def to_grpc(self):
        from v2_dataplane.grpc.proto import InferParameterMessage

        message = InferParameterMessage()
        if self._choice is not ParameterChoice.UNSET:
            try:
                setattr(message, self._choice.field_name, self._value)
            except (TypeError, ValueError) as e:
                raise ParameterCodecError(
                    self._choice.field_name, self._value, e
                ) from e
        return message

    # - json

    @classmethod
    def from_response_json(cls, json_dict) -> InferParameter:
        _check_json_object(json_dict)
        json_fields = {
            _FIELD_NAMES_BY_JSON_NAME.get(key, key): value
            for key, value in json_dict.items()
        }
        if len(json_fields) != len(json_dict):
            raise InvalidParameterError(
                "Parameter fields given twice: {}.".format(sorted(json_dict)),
                json_dict,
            )
        return cls.from_json(json_fields)

    @classmethod
    def from_json(cls, json_decamelized) -> InferParameter:
        _check_json_object(json_decamelized)
        json_decamelized = dict(json_decamelized)
        unknown = sorted(set(json_decamelized) - set(INFER_PARAMETER.FIELD_NAMES))
        if unknown:
            raise InvalidParameterError(
                "Unknown parameter fields {}, expected one of {}.".format(
                    unknown, list(INFER_PARAMETER.FIELD_NAMES)
                ),
                json_decamelized,
            )
        kwargs = {}
        for choice in _PAYLOAD_CHOICES:
            value = util.extract_field_from_json(json_decamelized, choice.field_name)
            if value is not None:
                kwargs[choice.field_name] = _payload_from_json(choice, value)
        if len(kwargs) > 1:
            raise InvalidParameterError(
                "A parameter holds a single value, got {}.".format(sorted(kwargs)),
                kwargs,
            )
        return cls(**kwargs)

    def to_dict(self):
        if self._choice is ParameterChoice.UNSET:
            return {}
        return {self._choice.json_name: self._value}

    def json(self):
        return json.dumps(self, cls=util.Encoder)

    def describe(self):
        """Print a JSON description of the parameter."""
        util.pretty_print(self)

    def __eq__(self, other):
        if not isinstance(other, InferParameter):
            return NotImplemented
        return self._choice is other._choice and self._value == other._value

    def __hash__(self):
        return hash((self._choice, self._value))

    def __setattr__(self, name, value):
        raise AttributeError(
            "InferParameter is immutable, use copy() to derive a new one."
        )

    def __reduce__(self):
        return InferParameter._from_state, (self._choice, self._value)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __str__(self):
        return self.json()

    def __repr__(self):
        return "InferParameter({})".format(_repr_payload(self))


def _repr_payload(state: _ParameterChoiceState) -> str:
    if state.parameter_choice is ParameterChoice.UNSET:
        return ""
    return "{}={!r}".format(state.parameter_choice.field_name, state.value)


def _check_json_object(json_dict):
    if not isinstance(json_dict, Mapping):
        raise InvalidParameterError(
            "A parameter must be a JSON object, got {}.".format(
                type(json_dict).__name__
            ),
            json_dict,
        )


def _payload_from_json(choice: ParameterChoice, value):
    if choice is ParameterChoice.BOOL and isinstance(value, bool):
        return value
    if choice is ParameterChoice.STRING and isinstance(value, str):
        return value
    if choice is ParameterChoice.INT64 and not isinstance(value, bool):
        if isinstance(value, int):
            return value
        # protobuf JSON mapping serializes int64 as a decimal string
        if isinstance(value, str) and _INT64_STRING.fullmatch(value):
            return int(value)
    raise InvalidParameterError(
        "Invalid value {!r} for {}.".format(value, choice.field_name), value
    )


def infer_parameter(
    block: Optional[Callable[[InferParameter.Builder], Any]] = None,
) -> InferParameter:
    """Build a parameter by applying `block` to a fresh builder.

    ```python
    param = infer_parameter(lambda b: b.set_string_param("fp16"))
    ```
    """
    builder = InferParameter.new_builder()
    if block is not None:
        block(builder)
    return builder.build()
