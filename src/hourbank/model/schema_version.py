# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

SchemaVersionState = Literal["not_set", "inside", "outside"]


class SchemaVersion(TypedDict):
    state: SchemaVersionState
    version: Optional[int]


class SchemaInfo(TypedDict):
    current: SchemaVersion
    latest: int


def schema_version_to_str(schema_version: SchemaVersion) -> str:
    if schema_version["state"] == "not_set" or schema_version["version"] is None:
        return "Not set"
    return str(schema_version["version"])
