'''Serialization of tally objects to JSON-ready dictionaries.

Evaluators, tallies and elections are stored as a dictionary holding their
fully qualified class name under the ``class`` key plus their constructor
parameters; :func:`from_dict` reverses this. Scores are stored as plain
integers; dictionaries with non-string keys (such as ballots over integer
option identifiers) are wrapped into ``type``-tagged dictionaries.
'''

import sys
import enum
import inspect
import builtins
import importlib
from typing import Any, List, Dict


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names. The class must therefore keep
    its original parameters as attributes of the same name.

    :param class_: The class to add the method to.
    '''
    param_names = list(inspect.signature(class_.__init__).parameters.keys())
    if 'self' in param_names:
        param_names.remove('self')

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, enum.Enum):
        return serialize_value(value.value)
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif hasattr(value, 'items') and hasattr(value, 'keys'):
        if all(isinstance(key, str) for key in value.keys()):
            return {key: serialize_value(val) for key, val in value.items()}
        else:
            return {
                'type': 'dict',
                'keys': [serialize_value(key) for key in value.keys()],
                'values': [serialize_value(val) for val in value.values()]
            }
    elif isinstance(value, list):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'type' in value and is_scoped_identifier(value['type']):
            return deserialize_typed(value)
        elif 'class' in value and is_scoped_identifier(value['class']):
            return deserialize_class(value)
        else:
            return {key: deserialize_value(val) for key, val in value.items()}
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, list):
        return [deserialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_typed(typedef: Dict[str, Any]) -> Any:
    if get_object(typedef['type']) is dict:
        return dict(zip(
            [deserialize_value(key) for key in typedef['keys']],
            [deserialize_value(val) for val in typedef['values']]
        ))
    else:
        raise ValueError(f'invalid typed value contents: {typedef!r}')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_object(clsdef['class'])
    params = clsdef.copy()
    del params['class']
    if hasattr(cls, 'from_dict'):
        return cls.from_dict(params)
    else:
        for key, inner_val in params.items():
            params[key] = deserialize_value(inner_val)
        return cls(**params)


def get_object(identifier: str) -> Any:
    if '.' not in identifier:
        return getattr(builtins, identifier)
    else:
        module, name = identifier.rsplit('.', 1)
        if module not in sys.modules:
            importlib.import_module(module)
        return getattr(sys.modules[module], name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Restore a tally object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe a known class.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid startally object def: dict expected, '
                         f'got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid startally object def: must have a class key')
    elif not is_scoped_identifier(value['class']):
        inval_cls = value['class']
        raise ValueError(f"invalid startally class def: {inval_cls}")
    else:
        return deserialize_value(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a tally object to a JSON-ready dictionary.

    :param obj: An evaluator, tally, election or similar object. It should
        provide a `to_dict()` method.
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    return (
        isinstance(value, str)
        and not value.startswith('.')
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]
