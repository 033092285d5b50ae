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


class PROTO:
    PACKAGE = "inference"
    FILE_NAME = "grpc_predict_v2.proto"
    SYNTAX = "proto3"
    INFER_PARAMETER_MESSAGE = "InferParameter"
    ONEOF_NAME = "parameter_choice"


class INFER_PARAMETER:
    # Oneof fields, as named in grpc_predict_v2.proto
    BOOL_PARAM = "bool_param"
    INT64_PARAM = "int64_param"
    STRING_PARAM = "string_param"
    PARAMETER_CHOICE_NOT_SET = "PARAMETER_CHOICE_NOT_SET"

    BOOL_PARAM_FIELD_NUMBER = 1
    INT64_PARAM_FIELD_NUMBER = 2
    STRING_PARAM_FIELD_NUMBER = 3

    FIELD_NAMES = (BOOL_PARAM, INT64_PARAM, STRING_PARAM)


class ENV:
    RUN_WITH_TYPECHECK = "V2_DATAPLANE_RUN_WITH_TYPECHECK"
