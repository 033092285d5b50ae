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

import os

from v2_dataplane.constants import ENV


def run_with_typecheck() -> bool:
    """Whether `ENV.RUN_WITH_TYPECHECK` asks for runtime type checking.

    Any value other than an empty string, `0` or `false` switches it on.
    """
    return os.environ.get(ENV.RUN_WITH_TYPECHECK, "").lower() not in (
        "",
        "0",
        "false",
    )


if run_with_typecheck():
    from typeguard import typechecked
else:

    def typechecked(target):
        return target
