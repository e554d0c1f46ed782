"""RunPod tier catalog.

Each tier maps to one RunPod public serverless endpoint. Tiers are data:
adding a hosted endpoint means adding an entry to ``_TIER_TABLE`` and
nothing else. The table is validated once at import time and only exposed
through copy-returning accessors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from runpod_assistant.logging import get_logger

log = get_logger("runpod_assistant.models.tiers")


class CatalogError(Exception):
    """The built-in tier table is malformed."""


class UnknownTierError(KeyError):
    """Requested tier key is not in the catalog."""

    def __init__(self, key: str, valid: list[str]):
        self.key = key
        self.valid = valid
        super().__init__(f"Unknown tier '{key}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return str(self.args[0])


class Cost(BaseModel):
    """Price in USD per million tokens."""

    model_config = ConfigDict(frozen=True)

    input: float = Field(ge=0)
    output: float = Field(ge=0)


class TierDescriptor(BaseModel):
    """One priced, capacity-limited hosted model offering."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    key: str = Field(min_length=1)
    endpoint_id: str = Field(min_length=1)
    model_id: str = Field(min_length=1)
    display_name: str
    context_limit: int = Field(gt=0)
    output_limit: int = Field(gt=0)
    cost: Cost


# Add more tiers here as endpoints become available.
_TIER_TABLE: list[dict[str, Any]] = [
    {
        "key": "glm-4.7-flash",
        "endpoint_id": "tmirn00irdwrp9",
        "model_id": "glm-4.7-flash",
        "display_name": "GLM 4.7 Flash",
        "context_limit": 202752,
        "output_limit": 8192,
        "cost": {"input": 0.5, "output": 0.5},
    },
]


def _load_catalog(table: list[dict[str, Any]]) -> dict[str, TierDescriptor]:
    """Validate a raw tier table and index it by key.

    Raises:
        CatalogError: If the table is empty, has duplicate keys, or an entry
            does not match the TierDescriptor schema.
    """
    if not table:
        raise CatalogError("Tier catalog must contain at least one tier")

    catalog: dict[str, TierDescriptor] = {}
    for raw in table:
        try:
            tier = TierDescriptor.model_validate(raw)
        except ValidationError as e:
            raise CatalogError(f"Invalid tier entry {raw.get('key')!r}: {e}") from e
        if tier.key in catalog:
            raise CatalogError(f"Duplicate tier key '{tier.key}'")
        catalog[tier.key] = tier
    return catalog


_CATALOG: dict[str, TierDescriptor] = _load_catalog(_TIER_TABLE)


def list_tiers() -> dict[str, TierDescriptor]:
    """Return all tiers keyed by tier name.

    The returned dict is a fresh copy; mutating it does not affect the
    catalog. Descriptors themselves are frozen.
    """
    return dict(_CATALOG)


def tier_names() -> list[str]:
    """Return the tier keys in catalog order."""
    return list(_CATALOG)


def get_tier(key: str) -> TierDescriptor:
    """Look up a single tier.

    Raises:
        UnknownTierError: If no tier has this key.
    """
    try:
        return _CATALOG[key]
    except KeyError:
        log.debug("unknown_tier_requested", tier=key)
        raise UnknownTierError(key, tier_names()) from None
