"""Tier catalog, credential validation and provider descriptor for RunPod."""

from runpod_assistant.models.registry import (
    ModelEntry,
    ProviderDescriptor,
    build_provider_descriptor,
    endpoint_url,
    supports_reasoning,
)
from runpod_assistant.models.tiers import (
    CatalogError,
    Cost,
    TierDescriptor,
    UnknownTierError,
    get_tier,
    list_tiers,
    tier_names,
)
from runpod_assistant.models.validation import (
    AccountInfo,
    CredentialValidator,
    ValidationError,
    validate,
)

__all__ = [
    "AccountInfo",
    "CatalogError",
    "Cost",
    "CredentialValidator",
    "ModelEntry",
    "ProviderDescriptor",
    "TierDescriptor",
    "UnknownTierError",
    "ValidationError",
    "build_provider_descriptor",
    "endpoint_url",
    "get_tier",
    "list_tiers",
    "supports_reasoning",
    "tier_names",
    "validate",
]
