"""Advisory text generation with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides a deterministic stub when no key is present for testing.

Advisory text is informational only: it never feeds back into the trip
snapshot. Failures surface as AdvisoryGenerationError.
"""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from tourcalc.config import Settings, get_settings
from tourcalc.errors import AdvisoryGenerationError
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import TripParameters

logger = logging.getLogger(__name__)

MAX_ADVISORY_CHARS = 10000


class AdvisoryClient(Protocol):
    """Protocol for advisory text implementations."""

    async def draft_proposal(self, params: TripParameters, breakdown: CostBreakdown) -> str:
        """Draft a client-facing proposal email for the trip.

        Args:
            params: Trip snapshot
            breakdown: Breakdown computed from that snapshot

        Returns:
            Markdown text

        Raises:
            AdvisoryGenerationError: If no text could be generated
        """
        ...

    async def analyze_costs(self, breakdown: CostBreakdown) -> str:
        """Suggest ways to reduce costs or improve the margin.

        Args:
            breakdown: Breakdown to analyze

        Returns:
            Markdown bullet list

        Raises:
            AdvisoryGenerationError: If no text could be generated
        """
        ...


def _included_services(params: TripParameters) -> str:
    services = []
    if params.guide.included:
        services.append("expert cycling guide")
    if params.driver.included:
        services.append("driver with support van")
    services.append("half-board accommodation")
    if params.has_bike_rental:
        services.append("bike rental")
    return ", ".join(services)


def build_proposal_prompt(
    params: TripParameters, breakdown: CostBreakdown, language: str = "Italian"
) -> str:
    """Build the proposal prompt from the snapshot and its breakdown."""
    return f"""Act as a tour operator specialised in cycling holidays.
Write a formal, engaging draft email to send to a client proposing this trip.
Use a professional but warm tone. Include a short hypothetical itinerary based on the duration.

Trip details:
- Trip name: {params.trip_name}
- Duration: {params.duration_days} days
- Participants: {params.participant_count}
- Included services: {_included_services(params)}

Pricing (use it to justify the value, do not list raw costs):
- Proposed price per person: EUR {breakdown.suggested_price_per_person:.2f}

Format the answer as Markdown. Answer in {language}."""


def build_analysis_prompt(breakdown: CostBreakdown, language: str = "Italian") -> str:
    """Build the cost analysis prompt from a breakdown."""
    fixed = breakdown.fixed_costs
    staff_share = fixed.staff_fees + fixed.staff_travel + fixed.staff_accommodation
    return f"""Analyse the following figures for a group trip run by a tour operator.
Give 3 short strategic tips to reduce costs or improve the margin, pointing out where most
of the money goes.

Figures:
- Total fixed costs: EUR {fixed.total:.2f} (staff, van, staff lodging)
- Total variable costs: EUR {breakdown.variable_costs.total:.2f} (client lodging, bikes, extras)
- Commissions and fees: EUR {breakdown.commercial_costs.total:.2f}
- Current net profit: EUR {breakdown.total_profit:.2f}
- Staff cost share: EUR {staff_share:.2f}

Answer in {language} as a Markdown bullet list."""


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def draft_proposal(self, params: TripParameters, breakdown: CostBreakdown) -> str:
        """Generate deterministic stub proposal."""
        return (
            f"# {params.trip_name}\n\n"
            f"A {params.duration_days}-day cycling tour for {params.participant_count} "
            f"participants with {_included_services(params)}.\n\n"
            f"**Price per person**: EUR {breakdown.suggested_price_per_person:.2f}\n\n"
            f"*This is a stub response generated without LLM synthesis.*"
        )

    async def analyze_costs(self, breakdown: CostBreakdown) -> str:
        """Generate deterministic stub analysis pointing at the largest cost group."""
        groups = {
            "fixed costs": breakdown.fixed_costs.total,
            "variable costs": breakdown.variable_costs.total,
            "commissions": breakdown.commercial_costs.total,
        }
        largest = max(groups, key=lambda name: groups[name])
        return (
            f"- Largest cost group: {largest} (EUR {groups[largest]:.2f})\n"
            f"- Net profit: EUR {breakdown.total_profit:.2f}\n"
            f"- *This is a stub response generated without LLM synthesis.*"
        )


class OpenAIClient:
    """OpenAI-backed advisory client."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", language: str = "Italian"):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            language: Language the answers are written in
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.language = language

    async def draft_proposal(self, params: TripParameters, breakdown: CostBreakdown) -> str:
        """Generate a proposal using OpenAI API."""
        return await self._complete(build_proposal_prompt(params, breakdown, self.language))

    async def analyze_costs(self, breakdown: CostBreakdown) -> str:
        """Generate a cost analysis using OpenAI API."""
        return await self._complete(build_analysis_prompt(breakdown, self.language))

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.7,
                max_tokens=2000,
            )
        except Exception as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise AdvisoryGenerationError() from e

        text = response.choices[0].message.content or ""

        # Validation: Check for empty response
        if not text.strip():
            logger.warning("OpenAI returned empty response")
            raise AdvisoryGenerationError()

        # Validation: Check for unreasonably long response
        if len(text) > MAX_ADVISORY_CHARS:
            logger.warning(
                f"OpenAI response unexpectedly large ({len(text)} chars), "
                f"truncating to {MAX_ADVISORY_CHARS}"
            )
            text = text[:MAX_ADVISORY_CHARS] + "\n\n[Truncated]"

        return text


def get_advisory_client(settings: Settings | None = None) -> AdvisoryClient:
    """Factory function to get appropriate advisory client based on config.

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for advisory text")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            language=settings.advisory_language,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()
