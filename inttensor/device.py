# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Device identifiers shared by every backend."""

from __future__ import annotations

from typing import Optional, Union


class Device:
    """An execution locus: a device kind and an optional ordinal."""

    __slots__ = ("kind", "index")

    def __init__(self, kind: str = "cpu", index: Optional[int] = None):
        if not kind:
            raise ValueError("device kind must be a non-empty string")
        if index is not None and int(index) < 0:
            raise ValueError(f"device index must be non-negative, got {index}")
        self.kind = kind.lower()
        self.index = None if index is None else int(index)

    @classmethod
    def cpu(cls, index: Optional[int] = None) -> "Device":
        return cls("cpu", index)

    @classmethod
    def cuda(cls, index: int = 0) -> "Device":
        return cls("cuda", index)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            other = normalize_device(other)
        if not isinstance(other, Device):
            return NotImplemented
        return self.kind == other.kind and self.index == other.index

    def __hash__(self) -> int:
        return hash((self.kind, self.index))

    def __str__(self) -> str:
        if self.index is None:
            return self.kind
        return f"{self.kind}:{self.index}"

    def __repr__(self) -> str:
        return f"Device({str(self)!r})"


DeviceLike = Union[Device, str, None]


def _parse_verbose(spec: str) -> Device:
    """Parse the ``device{device_type: cuda, device_id: 0}`` debug form."""

    inside = spec.split("{", 1)[1].split("}", 1)[0]
    fields = {}
    for part in inside.split(","):
        if ":" in part:
            key, value = part.split(":", 1)
            fields[key.strip()] = value.strip()
    device_type = fields.get("device_type")
    if not device_type:
        raise ValueError(f"Unrecognised device specification '{spec}'")
    device_id = fields.get("device_id")
    if not device_id or device_id in {"none", "default"}:
        return Device(device_type)
    return Device(device_type, int(device_id))


def normalize_device(device: DeviceLike, default: Optional[Device] = None) -> Device:
    """Turn any accepted device specification into a :class:`Device`."""

    if device is None:
        return default if default is not None else Device.cpu()

    if isinstance(device, Device):
        return device

    if not isinstance(device, str):
        raise TypeError(
            "device specifications must be strings or Device objects, "
            f"got {type(device).__name__}"
        )

    spec = device.strip()
    if spec.startswith("device") and "{" in spec:
        return _parse_verbose(spec)

    if ":" in spec:
        kind, index = spec.split(":", 1)
        try:
            return Device(kind, int(index))
        except ValueError:
            raise ValueError(f"Unrecognised device specification '{device}'") from None
    return Device(spec)


__all__ = ["Device", "DeviceLike", "normalize_device"]
