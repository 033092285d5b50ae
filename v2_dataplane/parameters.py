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

import logging
from typing import Dict, Mapping, Optional, Union

from google.protobuf import message as _message
from v2_dataplane.client.exceptions import InvalidParameterError
from v2_dataplane.infer_parameter import InferParameter, ParameterChoice


_logger = logging.getLogger(__name__)

ParameterValue = Union[bool, int, str]


def from_native(value) -> InferParameter:
    """Wrap a bool, int or str into an `InferParameter`.

    `InferParameter` instances are returned as they are, protobuf messages with
    the `parameter_choice` oneof are read with `InferParameter.from_grpc`.

    Raises:
        `v2_dataplane.client.exceptions.InvalidParameterError`: if the value has any other type.
    """
    if isinstance(value, InferParameter):
        return value
    if isinstance(value, _message.Message):
        return InferParameter.from_grpc(value)

    builder = InferParameter.new_builder()
    # bool first, it is a subclass of int
    if isinstance(value, bool):
        builder.set_bool_param(value)
    elif isinstance(value, int):
        builder.set_int64_param(value)
    elif isinstance(value, str):
        builder.set_string_param(value)
    else:
        raise InvalidParameterError(
            "Invalid parameter value {!r} of type {}, expected bool, int or str.".format(
                value, type(value).__name__
            ),
            value,
        )
    return builder.build()


def to_native(parameter: InferParameter) -> Optional[ParameterValue]:
    return parameter.value


def to_infer_parameters(
    parameters: Optional[Mapping[str, object]],
) -> Dict[str, InferParameter]:
    """Convert a name-keyed mapping of native values or messages to parameters."""
    if not parameters:
        return {}
    infer_parameters = {}
    for name, value in parameters.items():
        try:
            infer_parameters[name] = from_native(value)
        except InvalidParameterError as e:
            raise InvalidParameterError(
                "Invalid parameter '{}': {}".format(name, e), value
            ) from e
    return infer_parameters


def to_grpc_parameters(parameters: Optional[Mapping[str, object]]) -> Dict:
    """Convert a name-keyed mapping to protobuf `InferParameter` messages.

    The result can be merged into the `parameters` map field of a request or
    response message, e.g. `request.parameters[name].CopyFrom(message)`.
    """
    return {
        name: parameter.to_grpc()
        for name, parameter in to_infer_parameters(parameters).items()
    }


def to_http_parameters(
    parameters: Optional[Mapping[str, object]],
) -> Dict[str, ParameterValue]:
    """Convert a name-keyed mapping to the plain JSON values of the REST protocol.

    Parameters without a set choice have no JSON representation and are left out.
    """
    http_parameters = {}
    for name, parameter in to_infer_parameters(parameters).items():
        if parameter.parameter_choice is ParameterChoice.UNSET:
            _logger.debug("Dropping parameter '%s', no value is set", name)
            continue
        http_parameters[name] = parameter.value
    return http_parameters
