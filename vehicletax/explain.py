"""Plain-language explanation of a computed estimate, written by Claude.

The model only narrates numbers that the estimator already produced. It never
computes or corrects them.
"""

import logging
import os

from vehicletax.exceptions import ExplanationError
from vehicletax.formatting import format_inr, format_percent, plain
from vehicletax.models.estimate import EstimateResult

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

ADVISOR_IDENTITY = """\
You are a helpful assistant at a Karnataka Regional Transport Office (RTO) help \
desk. You explain lifetime road tax to owners re-registering a vehicle that was \
first registered in another state.

Rules:
- The figures below were computed by the RTO tax tables. Use them exactly as given.
- Do not recalculate, round differently, or suggest a different amount.
- Explain why the depreciation band and tax rate band apply, in plain language.
- Mention that the tax-rate band depends on the original invoice cost, not the \
depreciated value.
- Keep it under 150 words. No markdown headings.
"""


def build_explanation_prompt(result: EstimateResult) -> str:
    """Build the user prompt embedding the already-computed estimate."""
    lines = [
        "Computed estimate:",
        f"  Vehicle type: {result.category.label}",
        f"  Original cost: {format_inr(result.original_cost)}",
        f"  Vehicle age: {plain(result.age_years)} years",
        f"  Depreciation band: {result.depreciation_band.label} "
        f"({format_percent(result.applied_depreciation_fraction)} of original cost)",
        f"  Depreciated value: {format_inr(result.depreciated_value)}",
        f"  Tax rate band: {result.tax_rate_band.label} "
        f"({format_percent(result.applied_tax_rate)})",
        f"  Estimated lifetime tax: {format_inr(result.estimated_tax)}",
        "",
        "Step-by-step breakdown:",
        result.breakdown_text,
        "",
        "Explain this estimate to the vehicle owner.",
    ]
    return "\n".join(lines)


class Explainer:
    """Produces a prose explanation of an EstimateResult using the Claude API."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_MODEL):
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ExplanationError("ANTHROPIC_API_KEY not set. Export it or pass an API key.")
        self.model = model
        self._client = None

    @property
    def client(self):
        if self._client is None:
            import anthropic

            self._client = anthropic.Anthropic(api_key=self._api_key)
        return self._client

    def explain(self, result: EstimateResult, max_tokens: int = 1024) -> str:
        """Make a single API call and return the explanation text.

        Raises:
            ExplanationError: the call failed or returned no text.
        """
        logger.info("Requesting explanation from %s", self.model)
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=ADVISOR_IDENTITY,
                messages=[{"role": "user", "content": build_explanation_prompt(result)}],
            )
        except Exception as exc:
            logger.error("Explanation request failed: %s", exc)
            raise ExplanationError(str(exc)) from exc

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise ExplanationError("model returned no text")
        if response.stop_reason == "max_tokens":
            logger.warning("Explanation was truncated (hit max_tokens=%d)", max_tokens)
        return text
