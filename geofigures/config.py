"""Process-wide defaults for figure registries."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from .figures import DEFAULT_NAME


@dataclass
class RegistryOptions:
    """Configuration knobs for :class:`~geofigures.registry.FigureRegistry`."""

    # one worker keeps concurrent requests in call order
    max_workers: int = 1
    thread_name_prefix: str = "figure-representations"
    fallback_name: str = DEFAULT_NAME

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


_REGISTRY_OPTIONS = RegistryOptions()


def get_registry_options() -> RegistryOptions:
    return copy.deepcopy(_REGISTRY_OPTIONS)


def set_registry_options(options: RegistryOptions) -> None:
    global _REGISTRY_OPTIONS
    _REGISTRY_OPTIONS = copy.deepcopy(options)


__all__ = ["RegistryOptions", "get_registry_options", "set_registry_options"]
