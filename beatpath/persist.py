'''Serialization of tabulation objects to JSON-ready dictionaries.

Evaluators and settings in Beatpath keep their constructor parameters as
attributes, so they can be described by their scoped class name plus those
parameters and rebuilt from such a description. The dictionaries produced
here contain only JSON-compatible values.
'''

import sys
import enum
import inspect
import importlib
from typing import Any, List, Dict


ZERO_PARAMS: List[str] = ['args', 'kwargs']

ATOMIC_TYPES: List[type] = [str, int, float, bool, type(None)]


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a to_dict() serialization method.

    The method serializes the object attributes named like the class
    constructor parameters (or listed in a ``serialize_params`` class
    attribute), so the class must store them in a form its constructor
    accepts back.

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = list(class_.serialize_params)
    else:
        param_names = [
            name for name in inspect.signature(class_.__init__).parameters
            if name != 'self'
        ]
        if param_names == ZERO_PARAMS and class_.__init__ is object.__init__:
            param_names = []

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
        return value.value
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif hasattr(value, 'items') and hasattr(value, 'keys'):
        if not all(isinstance(key, str) for key in value.keys()):
            raise ValueError(f'cannot serialize {value!r}: non-string keys')
        return {key: serialize_value(val) for key, val in value.items()}
    elif hasattr(value, '__iter__'):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'class' in value and is_scoped_identifier(value['class']):
            return deserialize_class(value)
        else:
            return {key: deserialize_value(val) for key, val in value.items()}
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, list):
        return [deserialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_object(clsdef['class'])
    params = {
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    }
    return cls(**params)


def get_object(identifier: str) -> Any:
    module, name = identifier.rsplit('.', 1)
    if module not in sys.modules:
        importlib.import_module(module)
    return getattr(sys.modules[module], name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Rebuild an evaluator or settings object from a dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe a class.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid beatpath object def: dict expected, '
                         f'got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid beatpath object def: must have a class key')
    elif not is_scoped_identifier(value['class']) or '.' not in value['class']:
        inval_cls = value['class']
        raise ValueError(f'invalid beatpath class def: {inval_cls}')
    else:
        return deserialize_value(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize an evaluator or settings object to a JSON-ready dictionary.

    :param obj: An object providing a `to_dict()` method, usually courtesy
        of the :func:`simple_serialization` decorator.
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
