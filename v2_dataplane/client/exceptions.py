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


class InferParameterError(Exception):
    """Base class for errors raised when converting inference parameters."""


class InvalidParameterError(InferParameterError, ValueError):
    """Raised when a value cannot be represented as an inference parameter.

    Only bool, int and str values map onto the parameter choice; anything else,
    or a payload holding more than one choice, is rejected.
    """

    def __init__(self, message: str, value=None) -> None:
        super().__init__(message)
        self.value = value


class ParameterCodecError(InferParameterError):
    """Raised when the protobuf runtime rejects a parameter payload."""

    def __init__(self, field_name: str, value, cause: Exception) -> None:
        message = "Failed to encode {}={!r} as protobuf: {}".format(
            field_name, value, cause
        )
        super().__init__(message)
        self.field_name = field_name
        self.value = value
