"""
Conversion between raw nodes and typed configuration objects.

Supported shapes:
- ``dict``: the node itself (copied)
- classes exposing ``from_dict`` / ``to_dict``: the class owns the mapping
- dataclasses: fields are filled recursively from the node; nested
  dataclasses, ``Enum`` members (by value), ``Optional``, ``list``, ``dict`` and
  ``tuple`` annotations are followed
"""

from dataclasses import fields, is_dataclass, MISSING
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints
import types

from confcache.core.exceptions import BindingFailure

T = TypeVar('T')


def bind(node: Dict[str, Any], config_type: Optional[Type[T]]) -> Optional[T]:
    """
    Materialize a typed object from a node.

    Returns None when the key is untyped.

    Raises:
        BindingFailure: If the node does not fit the type
    """
    if config_type is None:
        return None
    try:
        if hasattr(config_type, 'from_dict'):
            return config_type.from_dict(node)
        return _to_object(node, config_type)
    except BindingFailure:
        raise
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise BindingFailure(_type_name(config_type), str(e)) from e


def unbind(instance: Any, config_type: Optional[type] = None) -> Dict[str, Any]:
    """
    Convert a typed object back into a node.

    Raises:
        BindingFailure: If the object cannot be represented as a mapping
    """
    config_type = config_type or type(instance)
    try:
        if hasattr(instance, 'to_dict'):
            node = instance.to_dict()
        else:
            node = _to_node(instance)
    except (TypeError, ValueError, AttributeError) as e:
        raise BindingFailure(_type_name(config_type), str(e)) from e

    if not isinstance(node, dict):
        raise BindingFailure(_type_name(config_type), f"expected a mapping, got {type(node).__name__}")
    return node


def _to_object(value: Any, annotation: Any) -> Any:
    if annotation is Any:
        return value

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        if value is None and type(None) in args:
            return None
        candidates = [arg for arg in args if arg is not type(None)]
        if len(candidates) == 1:
            return _to_object(value, candidates[0])
        return value

    if origin in (list, tuple, set, frozenset):
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"expected a sequence, got {type(value).__name__}")
        args = get_args(annotation)
        if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
            # fixed-length tuple: one annotation per position
            if len(value) != len(args):
                raise TypeError(f"expected {len(args)} items, got {len(value)}")
            return tuple(_to_object(item, item_type) for item, item_type in zip(value, args))
        item_type = args[0] if args else Any
        return origin(_to_object(item, item_type) for item in value)

    if origin is dict or annotation is dict:
        if not isinstance(value, dict):
            raise TypeError(f"expected a mapping, got {type(value).__name__}")
        args = get_args(annotation)
        value_type = args[1] if len(args) == 2 else Any
        return {key: _to_object(item, value_type) for key, item in value.items()}

    if isinstance(annotation, type):
        if is_dataclass(annotation):
            return _to_dataclass(value, annotation)
        if issubclass(annotation, Enum):
            return value if isinstance(value, annotation) else annotation(value)
        if annotation is Path:
            return Path(value)
        if annotation in (int, float) and isinstance(value, bool):
            raise TypeError(f"expected {annotation.__name__}, got bool")
        if annotation is float and isinstance(value, int):
            return float(value)
        if not isinstance(value, annotation):
            raise TypeError(f"expected {annotation.__name__}, got {type(value).__name__}")

    return value


def _to_dataclass(node: Any, cls: type) -> Any:
    if not isinstance(node, dict):
        raise TypeError(f"expected a mapping for {cls.__name__}, got {type(node).__name__}")

    hints = get_type_hints(cls)
    kwargs = {}
    for f in fields(cls):
        if not f.init:
            continue
        if f.name in node:
            kwargs[f.name] = _to_object(node[f.name], hints.get(f.name, Any))
        elif f.default is MISSING and f.default_factory is MISSING:
            raise KeyError(f"missing required field '{f.name}'")
    return cls(**kwargs)


def _to_node(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_node(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _to_node(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_node(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise TypeError(f"cannot represent {type(value).__name__} in a configuration node")


def _type_name(config_type: Any) -> str:
    return getattr(config_type, '__name__', repr(config_type))
