from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, get_type_hints

import yaml

from chorale_solver.pitch_utils.types import SettingsBase


def get_attribute_type(dataclass_class: Type[SettingsBase], attr_name: str):
    type_hints = get_type_hints(dataclass_class)
    if attr_name not in type_hints:
        raise ValueError(f"{attr_name=} not among the fields of {dataclass_class=}")
    return type_hints[attr_name]


S = TypeVar("S", bound=SettingsBase)


def _read_yaml(yaml_path: str | Path) -> Dict[str, Any]:
    with open(yaml_path, "r") as yaml_file:
        config_dict = yaml.safe_load(yaml_file)
    # An empty file gives None
    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"{yaml_path} should contain a mapping, not {config_dict!r}")
    return config_dict


def load_config_from_yaml(settings_class: Type[S], yaml_path: str | Path | None) -> S:
    """
    Unknown keys raise a ValueError. Values for fields whose type is itself a
    dataclass can be given as nested mappings.
    """
    if yaml_path is None:
        return settings_class()
    config_dict = _read_yaml(yaml_path)

    field_names = {f.name for f in fields(settings_class) if f.init}  # type:ignore
    kwargs = {}
    for key, val in config_dict.items():
        if key not in field_names:
            raise ValueError(f"{key=} not among the fields of {settings_class=}")
        expected_type = get_attribute_type(settings_class, key)
        if is_dataclass(expected_type) and isinstance(val, dict):
            val = expected_type(**val)  # type:ignore
        elif isinstance(val, list):
            # YAML has no tuples
            val = tuple(val)
        kwargs[key] = val

    return settings_class(**kwargs)
