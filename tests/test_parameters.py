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

import logging

import pytest
from google.protobuf import descriptor_pb2
from v2_dataplane import parameters
from v2_dataplane.client.exceptions import InvalidParameterError
from v2_dataplane.grpc.proto import InferParameterMessage
from v2_dataplane.infer_parameter import InferParameter, ParameterChoice


class TestParameters:
    # from_native

    @pytest.mark.parametrize(
        "value, expected_choice",
        [
            (True, ParameterChoice.BOOL),
            (False, ParameterChoice.BOOL),
            (0, ParameterChoice.INT64),
            (-5, ParameterChoice.INT64),
            ("", ParameterChoice.STRING),
            ("fp16", ParameterChoice.STRING),
        ],
    )
    def test_from_native(self, value, expected_choice):
        # Act
        param = parameters.from_native(value)

        # Assert
        assert param.parameter_choice is expected_choice
        assert param.value == value
        assert type(param.value) is type(value)

    def test_from_native_infer_parameter(self):
        # Arrange
        param = InferParameter(int64_param=3)

        # Act & Assert
        assert parameters.from_native(param) is param

    def test_from_native_message(self):
        # Act
        param = parameters.from_native(InferParameterMessage(bool_param=True))

        # Assert
        assert param == InferParameter(bool_param=True)

    def test_from_native_message_without_oneof(self):
        with pytest.raises(InvalidParameterError):
            parameters.from_native(descriptor_pb2.FileDescriptorProto(name="x"))

    @pytest.mark.parametrize("value", [1.5, None, b"bytes", [1], {"a": 1}])
    def test_from_native_invalid(self, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            parameters.from_native(value)

        assert "expected bool, int or str" in str(exc_info.value)
        assert exc_info.value.value == value

    def test_invalid_parameter_error_is_value_error(self):
        with pytest.raises(ValueError):
            parameters.from_native(1.5)

    # to_native

    def test_to_native(self):
        assert parameters.to_native(InferParameter()) is None
        assert parameters.to_native(InferParameter(bool_param=False)) is False
        assert parameters.to_native(InferParameter(string_param="a")) == "a"

    # maps

    def test_to_infer_parameters(self, backend_fixtures):
        # Arrange
        json = backend_fixtures["infer_parameter"]["get_request_parameters"][
            "response"
        ]

        # Act
        result = parameters.to_infer_parameters(json)

        # Assert
        assert result == {
            "binary_data_output": InferParameter(bool_param=True),
            "max_tokens": InferParameter(int64_param=128),
            "content_type": InferParameter(string_param="application/json"),
        }

    @pytest.mark.parametrize("value", [None, {}])
    def test_to_infer_parameters_empty(self, value):
        assert parameters.to_infer_parameters(value) == {}

    def test_to_infer_parameters_names_invalid_entry(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            parameters.to_infer_parameters({"ok": 1, "temperature": 0.7})

        assert "temperature" in str(exc_info.value)

    def test_to_grpc_parameters(self):
        # Act
        result = parameters.to_grpc_parameters(
            {"a": True, "b": InferParameter(int64_param=2), "c": "x"}
        )

        # Assert
        assert set(result) == {"a", "b", "c"}
        assert all(isinstance(m, InferParameterMessage) for m in result.values())
        assert result["a"].WhichOneof("parameter_choice") == "bool_param"
        assert result["b"].int64_param == 2
        assert result["c"].string_param == "x"

    def test_to_http_parameters(self, backend_fixtures):
        # Arrange
        json = backend_fixtures["infer_parameter"]["get_request_parameters"][
            "response"
        ]
        grpc_parameters = parameters.to_grpc_parameters(json)

        # Act
        result = parameters.to_http_parameters(grpc_parameters)

        # Assert
        assert result == json

    def test_to_http_parameters_drops_unset(self, caplog):
        # Arrange
        caplog.set_level(logging.DEBUG, logger="v2_dataplane.parameters")

        # Act
        result = parameters.to_http_parameters(
            {"flag": InferParameter(bool_param=False), "empty": InferParameter()}
        )

        # Assert
        assert result == {"flag": False}
        assert "Dropping parameter 'empty'" in caplog.text
