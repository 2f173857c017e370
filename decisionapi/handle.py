"""Decision request state and construction of campaign responses."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from decisionapi.request_parser import DecisionRequest

_CAMPAIGN_SEPARATOR = "/campaigns/"


@dataclass
class TargetingContext:
    """Visitor context used for targeting: the request's own keys and partner segments."""

    standard: dict[str, Any] = field(default_factory=dict)
    integration_providers: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class Request:
    """Everything known about one decision request while it is being handled."""

    decision_request: DecisionRequest = field(default_factory=DecisionRequest)
    full_visitor_context: TargetingContext = field(default_factory=TargetingContext)
    campaign_id: str = ""
    mode: str = ""
    extras: list[str] = field(default_factory=list)
    expose_all_keys: bool = False
    send_context_event: bool = False
    created_at: float = field(default_factory=time.time)

    @property
    def timestamp_ms(self) -> int:
        """Creation time in milliseconds since the epoch."""
        return int(self.created_at * 1000)

    def has_extra(self, extra: str) -> bool:
        """Whether ``extra`` was asked for in the request's extras."""
        return extra in self.extras


@dataclass
class Variation:
    """One variation of a variation group and the flag values it sets."""

    id: str = ""
    modifications: dict[str, Any] | None = None
    modification_type: str = ""
    reference: bool = False
    allocation: float = 0.0


@dataclass
class VariationGroup:
    """A group of variations belonging to a campaign."""

    id: str = ""
    campaign_id: str = ""
    variations: list[Variation] = field(default_factory=list)


@dataclass
class CampaignResponse:
    """The variation a visitor was given for one campaign."""

    id: str
    variation_group_id: str
    variation_id: str
    modifications: dict[str, Any] | None
    modification_type: str = ""
    reference: bool = False

    def to_dict(self) -> dict[str, Any]:
        modifications = None
        if self.modifications is not None:
            modifications = {"type": self.modification_type, "value": self.modifications}
        return {
            "id": self.id,
            "variationGroupId": self.variation_group_id,
            "variation": {
                "id": self.variation_id,
                "modifications": modifications,
                "reference": self.reference,
            },
        }


def new_request_from_http(path: str) -> Request:
    """Start a request for a URL path; ``/campaigns/<id>`` selects a single campaign."""
    parts = path.split(_CAMPAIGN_SEPARATOR)
    campaign_id = parts[1] if len(parts) == 2 else ""
    return Request(campaign_id=campaign_id)


def should_trigger_hit(decision_request: DecisionRequest) -> bool:
    """False when the request explicitly turns off hits or activation."""
    return decision_request.trigger_hit is not False and decision_request.activate is not False


def build_campaign_response(
    variation_group: VariationGroup, variation: Variation, should_fill_keys: bool
) -> CampaignResponse:
    """Build the response for the variation a visitor got.

    With ``should_fill_keys``, every key set by any variation of the group appears
    in the chosen variation's values, as None where the variation does not set it.
    """
    if should_fill_keys:
        if variation.modifications is None:
            variation.modifications = {}
        for other in variation_group.variations:
            for key in other.modifications or {}:
                variation.modifications.setdefault(key, None)

    return CampaignResponse(
        id=variation_group.campaign_id,
        variation_group_id=variation_group.id,
        variation_id=variation.id,
        modifications=variation.modifications,
        modification_type=variation.modification_type,
        reference=variation.reference,
    )