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
from typing import Any, Dict


class Encoder(json.JSONEncoder):
    def default(self, o: Any) -> Dict[str, Any]:
        try:
            return o.to_dict()
        except AttributeError:
            return super().default(o)


def pretty_print(obj):
    if isinstance(obj, list):
        for item in obj:
            pretty_print(item)
    else:
        print(json.dumps(obj.to_dict(), indent=4, sort_keys=True))


# - json


def extract_field_from_json(obj, fields, default=None):
    if isinstance(fields, list):
        for field in fields:
            value = extract_field_from_json(obj, field, default)
            if value is not None:
                break
    else:
        value = obj.pop(fields) if fields in obj else default
    return value
