"""Content-addressed type fingerprints.

A fingerprint is a SHA-1 digest over a canonical description of a class:
its import path, its explicit ``__cache_version__`` marker and its declared
field layout. Two processes that load the same class definition compute the
same fingerprint; adding, removing or retyping a field or bumping the version
marker changes it.
"""

import dataclasses
import hashlib
import importlib
import inspect
import logging
import sys
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

VERSION_ATTRIBUTE = "__cache_version__"

_IGNORED_SLOTS = ("__dict__", "__weakref__")


def type_path(cls: type) -> str:
    """Get the ``module:qualname`` import path of a class."""
    return f"{cls.__module__}:{cls.__qualname__}"


def resolve_type(path: str) -> Optional[type]:
    """Resolve an import path to the class currently loaded under it.

    Returns None when the module cannot be imported or the name no longer
    refers to a class.
    """
    module_name, _, qualname = path.partition(":")
    if not module_name or not qualname or "<locals>" in qualname:
        return None

    module = sys.modules.get(module_name)
    if module is None:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.debug(f"Cannot import module {module_name} for type {path}: {e}")
            return None

    target: Any = module
    for part in qualname.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None

    return target if isinstance(target, type) else None


def _type_name(annotation: Any) -> str:
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(name for name in slots if name not in _IGNORED_SLOTS)
    return names


def _annotated_fields(cls: type) -> List[Tuple[str, str]]:
    fields = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        try:
            annotations = inspect.get_annotations(klass)
        except NameError as e:
            # Unresolvable forward reference; the class name still counts
            logger.debug(f"Cannot read annotations of {type_path(klass)}: {e}")
            continue
        for name, annotation in annotations.items():
            fields[name] = _type_name(annotation)
    return list(fields.items())


def field_layout(cls: type) -> List[Tuple[str, str]]:
    """Describe the declared fields of a class as ``(name, type)`` pairs.

    Dataclass fields win, then pydantic ``model_fields``, then ``__slots__``,
    then class annotations merged across the MRO.
    """
    if dataclasses.is_dataclass(cls):
        layout = [(f.name, _type_name(f.type)) for f in dataclasses.fields(cls)]
    elif isinstance(getattr(cls, "model_fields", None), dict):
        layout = [(name, _type_name(info.annotation)) for name, info in cls.model_fields.items()]
    else:
        slots = _slot_names(cls)
        if slots:
            layout = [(name, "") for name in slots]
        else:
            layout = _annotated_fields(cls)

    return sorted(layout)


def describe_type(cls: type) -> str:
    """Build the canonical descriptor hashed into a fingerprint."""
    version = getattr(cls, VERSION_ATTRIBUTE, None)
    fields = ";".join(f"{name}:{annotation}" for name, annotation in field_layout(cls))
    return f"{type_path(cls)}|version={version!r}|fields={fields}"


def type_fingerprint(cls: type) -> str:
    """Compute the fingerprint of a class as currently loaded."""
    return hashlib.sha1(describe_type(cls).encode("utf-8")).hexdigest()
