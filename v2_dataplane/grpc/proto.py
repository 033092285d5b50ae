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
"""Protobuf message class for `inference.InferParameter`.

The message is described with a `FileDescriptorProto` and registered in a
private descriptor pool, so it never clashes with a generated
`grpc_predict_v2_pb2` module loaded by a serving client in the same process.
Instances are interchangeable on the wire with the KServe generated message.
"""

from __future__ import annotations

import humps
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from v2_dataplane.constants import INFER_PARAMETER, PROTO


_FIELDS = (
    (
        INFER_PARAMETER.BOOL_PARAM,
        INFER_PARAMETER.BOOL_PARAM_FIELD_NUMBER,
        descriptor_pb2.FieldDescriptorProto.TYPE_BOOL,
    ),
    (
        INFER_PARAMETER.INT64_PARAM,
        INFER_PARAMETER.INT64_PARAM_FIELD_NUMBER,
        descriptor_pb2.FieldDescriptorProto.TYPE_INT64,
    ),
    (
        INFER_PARAMETER.STRING_PARAM,
        INFER_PARAMETER.STRING_PARAM_FIELD_NUMBER,
        descriptor_pb2.FieldDescriptorProto.TYPE_STRING,
    ),
)


def _build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = PROTO.FILE_NAME
    file_proto.package = PROTO.PACKAGE
    file_proto.syntax = PROTO.SYNTAX

    message_proto = file_proto.message_type.add()
    message_proto.name = PROTO.INFER_PARAMETER_MESSAGE
    message_proto.oneof_decl.add().name = PROTO.ONEOF_NAME
    for name, number, field_type in _FIELDS:
        field_proto = message_proto.field.add()
        field_proto.name = name
        field_proto.json_name = humps.camelize(name)
        field_proto.number = number
        field_proto.type = field_type
        field_proto.label = descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL
        field_proto.oneof_index = 0
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file_descriptor_proto().SerializeToString())

INFER_PARAMETER_DESCRIPTOR = _pool.FindMessageTypeByName(
    PROTO.PACKAGE + "." + PROTO.INFER_PARAMETER_MESSAGE
)

InferParameterMessage = message_factory.GetMessageClass(INFER_PARAMETER_DESCRIPTOR)
