# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .element import INT64, IntDType, get_dtype
from .errors import BackendCapabilityError

logger = logging.getLogger(__name__)

_LOCK = RLock()

# Per backend class: operation name -> whether the class defines it.
_CAPABILITIES: Dict[Tuple[type, str], bool] = {}
# Backend classes whose primitive sets were already validated, keyed by kind.
_VALIDATED: Dict[Tuple[type, str], Tuple[str, ...]] = {}

_DEFAULT_DTYPE: IntDType = INT64

_BACKEND_FACTORIES: Dict[str, Callable[..., Any]] = {}
_DEFAULT_BACKEND: Optional[str] = None


def _class_has_operation(cls: type, name: str) -> bool:
    """Return whether ``cls`` defines ``name`` and cache the answer per class."""

    key = (cls, name)
    with _LOCK:
        cached = _CAPABILITIES.get(key)
        if cached is not None:
            return cached

        found = callable(getattr(cls, name, None))
        _CAPABILITIES[key] = found
        return found


def _instance_operation(backend: Any, name: str) -> Optional[Callable[..., Any]]:
    # Modules, namespaces and per-instance overrides keep operations in
    # ``__dict__``; those are looked up on every call.
    namespace = getattr(backend, "__dict__", None)
    if not namespace or name not in namespace:
        return None
    value = namespace[name]
    return value if callable(value) else None


def _has_operation(backend: Any, name: str) -> bool:
    if _instance_operation(backend, name) is not None:
        return True
    return _class_has_operation(type(backend), name)


def missing_operations(backend: Any, names: Iterable[str]) -> Tuple[str, ...]:
    """Names from ``names`` that ``backend`` does not provide."""

    return tuple(name for name in names if not _has_operation(backend, name))


def ensure_operations(backend: Any, names: Iterable[str], kind: str) -> None:
    """Validate that ``backend`` implements every operation in ``names``."""

    names = tuple(names)
    key = (type(backend), kind)
    with _LOCK:
        if _VALIDATED.get(key) == names:
            return

        missing = missing_operations(backend, names)
        if missing:
            missing_list = ", ".join(missing)
            raise BackendCapabilityError(
                f"{type(backend).__name__} does not implement the {kind} tensor "
                f"primitives: {missing_list}."
            )

        # Only a class that provides every primitive itself vouches for all
        # of its instances.
        if all(_class_has_operation(type(backend), name) for name in names):
            _VALIDATED[key] = names


def resolve_override(backend: Any, name: str) -> Optional[Callable[..., Any]]:
    """Return the backend's own implementation of the derived operation ``name``."""

    override = _instance_operation(backend, name)
    if override is not None:
        return override
    if not _class_has_operation(type(backend), name):
        return None
    return getattr(backend, name)


# Global default element type


def set_default_dtype(dtype: str) -> None:
    """Set the integer element type used by backends created without one."""

    global _DEFAULT_DTYPE

    resolved = get_dtype(dtype)
    with _LOCK:
        _DEFAULT_DTYPE = resolved


def get_default_dtype() -> str:
    """Get the current default integer element type."""

    return _DEFAULT_DTYPE.name


# Backend registry


def register_backend(name: str, factory: Callable[..., Any]) -> None:
    """Make ``factory`` available through :func:`get_backend` under ``name``."""

    global _DEFAULT_BACKEND

    with _LOCK:
        if name in _BACKEND_FACTORIES and _BACKEND_FACTORIES[name] is not factory:
            logger.warning("Replacing the backend registered as %r", name)
        _BACKEND_FACTORIES[name] = factory
        if _DEFAULT_BACKEND is None:
            _DEFAULT_BACKEND = name
    logger.debug("Registered backend %r", name)


def available_backends() -> Tuple[str, ...]:
    with _LOCK:
        return tuple(sorted(_BACKEND_FACTORIES))


def set_default_backend(name: str) -> None:
    global _DEFAULT_BACKEND

    with _LOCK:
        if name not in _BACKEND_FACTORIES:
            raise BackendCapabilityError(f"No backend registered as {name!r}")
        _DEFAULT_BACKEND = name


def get_default_backend() -> Optional[str]:
    return _DEFAULT_BACKEND


def get_backend(name: Optional[str] = None, **kwargs: Any) -> Any:
    """Instantiate the backend registered as ``name`` (or the default one)."""

    with _LOCK:
        target = name if name is not None else _DEFAULT_BACKEND
        factory = _BACKEND_FACTORIES.get(target) if target is not None else None
    if factory is None:
        known = ", ".join(available_backends()) or "none"
        raise BackendCapabilityError(
            f"No backend registered as {target!r} (registered: {known})"
        )
    return factory(**kwargs)


__all__ = [
    "missing_operations",
    "ensure_operations",
    "resolve_override",
    "set_default_dtype",
    "get_default_dtype",
    "register_backend",
    "available_backends",
    "set_default_backend",
    "get_default_backend",
    "get_backend",
]
