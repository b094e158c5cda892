"""GIF selection agent."""

from dataclasses import dataclass

from reactiongif.agents.base import BaseAgent
from reactiongif.agents.prompts import SELECTION_PROMPT
from reactiongif.models.gif import GifCandidate
from reactiongif.models.strategy import Selection
from reactiongif.services.protocols import TextCompletionModel


@dataclass
class SelectionInput:
    """Input for selection."""

    text: str
    candidates: list[GifCandidate]
    guidance: str | None = None


@dataclass
class SelectedGif:
    """The chosen candidate and why."""

    candidate: GifCandidate
    reasoning: str


def format_candidates(candidates: list[GifCandidate]) -> str:
    """Render candidates as numbered ``N. "title" - alt text`` lines."""
    lines = []
    for index, candidate in enumerate(candidates):
        description = f" - {candidate.alt_text}" if candidate.alt_text else ""
        lines.append(f'{index}. "{candidate.title}"{description}')
    return "\n".join(lines)


def resolve_selection(candidates: list[GifCandidate], selection: Selection) -> GifCandidate:
    """Candidate at the selected index, or the first one if the index is out of range."""
    if 0 <= selection.selected_index < len(candidates):
        return candidates[selection.selected_index]
    return candidates[0]


class GifSelectorAgent(BaseAgent[SelectionInput, SelectedGif]):
    """Asks the language model to pick the best GIF from a candidate list."""

    name = "gif_selector"

    def __init__(self, completion_model: TextCompletionModel, model: str | None = None):
        """Initialize the agent.

        Args:
            completion_model: Client producing schema-validated completions
            model: Model identifier for this call site
        """
        super().__init__()
        self.completion_model = completion_model
        self.model = model

    async def process(self, input_data: SelectionInput) -> SelectedGif:
        """Select one candidate.

        Raises:
            ValueError: If there are no candidates to choose from
        """
        if not input_data.candidates:
            raise ValueError("Cannot select from an empty candidate list")

        guidance = f"Perspective: {input_data.guidance}\n" if input_data.guidance else ""
        selection = await self.completion_model.complete_structured(
            prompt=SELECTION_PROMPT.format(
                text=input_data.text,
                guidance=guidance,
                options=format_candidates(input_data.candidates),
            ),
            schema=Selection,
            model=self.model,
        )

        if selection.selected_index >= len(input_data.candidates):
            self.logger.warning(
                "selection_out_of_range",
                selected_index=selection.selected_index,
                candidates=len(input_data.candidates),
            )

        return SelectedGif(
            candidate=resolve_selection(input_data.candidates, selection),
            reasoning=selection.reasoning,
        )
