"""Word parts used to generate species names."""

import json
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Mapping

_log = logging.getLogger(__name__)


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    return [_as_string(item) for item in data.get(key) or []]


@dataclass
class SpeciesNameController:
    """Holds prefixes, cofixes and suffixes for building species names."""

    prefixcofixes: list[str] = field(default_factory=list)
    prefixes_v: list[str] = field(default_factory=list)
    prefixes_c: list[str] = field(default_factory=list)
    cofixes_v: list[str] = field(default_factory=list)
    cofixes_c: list[str] = field(default_factory=list)
    suffixes: list[str] = field(default_factory=list)
    suffixes_c: list[str] = field(default_factory=list)
    suffixes_v: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpeciesNameController":
        """Build from a parsed JSON object; missing lists become empty."""
        suffixes_c = _strings(data, "suffixes_c")
        suffixes_v = _strings(data, "suffixes_v")
        return cls(
            prefixcofixes=_strings(data, "prefixcofix"),
            prefixes_v=_strings(data, "prefixes_v"),
            prefixes_c=_strings(data, "prefixes_c"),
            cofixes_v=_strings(data, "cofixes_v"),
            cofixes_c=_strings(data, "cofixes_c"),
            suffixes=suffixes_c + suffixes_v,
            suffixes_c=suffixes_c,
            suffixes_v=suffixes_v,
        )

    @classmethod
    def from_file(cls, json_file_path: "str | PathLike[str]") -> "SpeciesNameController":
        """Load name parts from a JSON file."""
        with open(json_file_path, encoding="utf-8") as json_file:
            try:
                data = json.load(json_file)
            except json.JSONDecodeError as error:
                _log.error(
                    "Syntax error in json file: %s, description: %s",
                    json_file_path,
                    error,
                )
                raise
        if not isinstance(data, Mapping):
            data = {}
        return cls.from_dict(data)