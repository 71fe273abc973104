# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""YAML module declaration front end.

A declaration file lists modules by type and name, with the remaining keys
being properties:

    modules:
      - type: rust_test
        name: foo_test
        srcs: [foo_test.rs]
        test_suites: [general-tests]

Paths in properties are relative to the directory holding the file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import BaseModel, ValidationError

from rustsmith._internal.io.yaml import load_yaml

from .errors import BlueprintError, PropertyError

logger = logging.getLogger(__name__)

_RESERVED_KEYS = ("type", "name")


@dataclass
class Declaration:
    """One module as written in a declaration file."""

    type: str
    name: str
    module_dir: Path
    properties: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None


def _parse_entry(entry: Any, index: int, path: Path) -> Declaration:
    if not isinstance(entry, dict):
        raise BlueprintError(f"{path}: modules[{index}] must be a mapping, got {type(entry).__name__}")

    missing = [key for key in _RESERVED_KEYS if not entry.get(key)]
    if missing:
        raise BlueprintError(f"{path}: modules[{index}] is missing {', '.join(missing)}")

    properties = {k: v for k, v in entry.items() if k not in _RESERVED_KEYS}
    return Declaration(
        type=str(entry["type"]),
        name=str(entry["name"]),
        module_dir=path.parent.resolve(),
        properties=properties,
        source=path,
    )


def load_blueprint(path: str | Path) -> list[Declaration]:
    """Parse one declaration file.

    Raises:
        BlueprintError: If the file is missing, not valid YAML, or malformed
    """
    path = Path(path)
    try:
        data = load_yaml(path)
    except FileNotFoundError as e:
        raise BlueprintError(str(e)) from e
    except yaml.YAMLError as e:
        raise BlueprintError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise BlueprintError(f"{path}: top level must be a mapping")

    modules = data.get("modules", [])
    if not isinstance(modules, list):
        raise BlueprintError(f"{path}: 'modules' must be a list")

    declarations = [_parse_entry(entry, i, path) for i, entry in enumerate(modules)]
    logger.debug(f"Loaded {len(declarations)} module(s) from {path}")
    return declarations


def load_blueprints(paths: Iterable[str | Path]) -> list[Declaration]:
    """Parse several declaration files; module names must be unique across all of them.

    Raises:
        BlueprintError: On malformed files or duplicate module names
    """
    declarations = []
    seen: dict[str, Path | None] = {}
    for path in paths:
        for decl in load_blueprint(path):
            if decl.name in seen:
                raise BlueprintError(
                    f"{decl.source}: module '{decl.name}' already defined in {seen[decl.name]}"
                )
            seen[decl.name] = decl.source
            declarations.append(decl)
    return declarations


def _field_owners(property_sets: list[BaseModel], key: str) -> list[BaseModel]:
    return [props for props in property_sets if key in type(props).model_fields]


def apply_properties(property_sets: list[BaseModel], name: str, values: dict[str, Any]) -> list[PropertyError]:
    """Fill a module's property sets from declared values.

    Every property set declaring a field receives the value. Unknown keys
    and values failing validation become PropertyErrors; valid keys are
    still applied.
    """
    errors = []
    for key, value in values.items():
        owners = _field_owners(property_sets, key)
        if not owners:
            errors.append(PropertyError(name, key, f'unrecognized property "{key}"'))
            continue

        for props in owners:
            try:
                setattr(props, key, value)
            except ValidationError as e:
                message = "; ".join(err["msg"] for err in e.errors())
                errors.append(PropertyError(name, key, message))
                break

    return errors
