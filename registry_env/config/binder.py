"""
Typed Settings Binding

Binds a configuration section onto a pydantic model. Field aliases (or field
names) are looked up case-insensitively; nested models bind from
sub-sections, list fields from indexed children (``Hosts:0``, ``Hosts:1``).
Keys that are absent leave the model default in place.

Author: registry_env Project
License: MIT
"""

import typing
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def _model_type(annotation: Any) -> Optional[Type[BaseModel]]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    for arg in typing.get_args(annotation):
        if isinstance(arg, type) and issubclass(arg, BaseModel):
            return arg
    return None


def _is_list(annotation: Any) -> bool:
    if typing.get_origin(annotation) is list:
        return True
    return any(typing.get_origin(arg) is list for arg in typing.get_args(annotation))


def _section_values(section, model_cls: Type[BaseModel]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    for name, field in model_cls.model_fields.items():
        key = field.alias or name
        sub_model = _model_type(field.annotation)

        if sub_model is not None:
            child = section.get_section(key)
            if child.exists():
                values[key] = _section_values(child, sub_model)
        elif _is_list(field.annotation):
            children = section.get_section(key).get_children()
            if children:
                values[key] = [c.value for c in sorted(children, key=_index_of)]
        else:
            value = section.get(key)
            if value is not None:
                values[key] = value

    return values


def _index_of(section) -> int:
    try:
        return int(section.key)
    except ValueError:
        return 0


def bind(configuration, model_cls: Type[T]) -> T:
    """
    Bind ``configuration`` (a ConfigurationRoot or ConfigurationSection) to
    ``model_cls``.

    Raises:
        pydantic.ValidationError: If a bound value fails model validation
    """
    return model_cls.model_validate(_section_values(configuration, model_cls))
