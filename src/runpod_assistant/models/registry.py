"""Provider descriptor for the model registry.

The model registry routes requests by provider and model. RunPod is
registered as one provider whose models are the catalog tiers; every tier
gets its own OpenAI-compatible base URL so that a single client adapter
can reach each hosted endpoint.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from runpod_assistant.logging import get_logger
from runpod_assistant.models.tiers import Cost, TierDescriptor, list_tiers

log = get_logger("runpod_assistant.models.registry")

PROVIDER_ID = "runpod"
PROVIDER_NAME = "Runpod"
API_KEY_ENV_VAR = "RUNPOD_API_KEY"

# Client adapter the registry loads for every RunPod model
OPENAI_COMPATIBLE_PACKAGE = "@ai-sdk/openai-compatible"

# Catalog entries carry no release metadata
PLACEHOLDER_RELEASE_DATE = "2025-01-01"

# Model families that expose a reasoning/thinking mode
_REASONING_PATTERNS = ["qwen", "glm"]


class Limit(BaseModel):
    """Token limits of a model."""

    model_config = ConfigDict(frozen=True)

    context: int
    output: int


class BackendRef(BaseModel):
    """Which client adapter serves a model, and where."""

    model_config = ConfigDict(frozen=True)

    package_name: str = Field(serialization_alias="npm")
    api_base_url: str = Field(serialization_alias="api")


class ModelEntry(BaseModel):
    """One model as the registry expects it."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    release_date: str = PLACEHOLDER_RELEASE_DATE
    supports_attachment: bool = Field(default=False, serialization_alias="attachment")
    supports_reasoning: bool = Field(default=False, serialization_alias="reasoning")
    supports_temperature: bool = Field(default=True, serialization_alias="temperature")
    supports_tool_calling: bool = Field(default=True, serialization_alias="tool_call")
    cost: Cost
    limit: Limit
    options: dict[str, Any] = Field(default_factory=dict)
    backend_ref: BackendRef = Field(serialization_alias="provider")


class ProviderDescriptor(BaseModel):
    """Full description of the RunPod provider and its models."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    env_var_names: list[str] = Field(serialization_alias="env")
    models: dict[str, ModelEntry]

    def to_registry_dict(self) -> dict[str, Any]:
        """Serialize using the registry's field names."""
        return self.model_dump(by_alias=True)


def endpoint_url(endpoint_id: str) -> str:
    """Return the OpenAI-compatible base URL of a serverless endpoint."""
    return f"https://api.runpod.ai/v2/{endpoint_id}/openai/v1"


def supports_reasoning(model_id: str) -> bool:
    """Guess whether a model supports reasoning from its identifier.

    Name-based until tiers carry an explicit capability flag.
    """
    id_lower = model_id.lower()
    return any(pattern in id_lower for pattern in _REASONING_PATTERNS)


def model_entry(tier: TierDescriptor) -> ModelEntry:
    """Project a single tier into a registry model entry."""
    return ModelEntry(
        id=tier.model_id,
        name=tier.display_name,
        supports_reasoning=supports_reasoning(tier.model_id),
        cost=tier.cost,
        limit=Limit(context=tier.context_limit, output=tier.output_limit),
        backend_ref=BackendRef(
            package_name=OPENAI_COMPATIBLE_PACKAGE,
            api_base_url=endpoint_url(tier.endpoint_id),
        ),
    )


def build_provider_descriptor() -> ProviderDescriptor:
    """Build the RunPod provider descriptor from the tier catalog.

    Recomputed on every call; nothing is cached.
    """
    models = {key: model_entry(tier) for key, tier in list_tiers().items()}
    log.debug("provider_descriptor_built", provider=PROVIDER_ID, model_count=len(models))
    return ProviderDescriptor(
        id=PROVIDER_ID,
        name=PROVIDER_NAME,
        env_var_names=[API_KEY_ENV_VAR],
        models=models,
    )
