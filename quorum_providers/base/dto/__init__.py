"""Pydantic DTOs for the providers layer."""

from .adapter_params import AdapterParams
from .generation_settings import DEFAULT_WIRE_NAMES, GenerationSettings
from .participant_config import ParticipantConfig

__all__ = [
    "AdapterParams",
    "DEFAULT_WIRE_NAMES",
    "GenerationSettings",
    "ParticipantConfig",
]
