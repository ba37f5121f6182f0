"""
Domain Service: Prompt Builder

Constructs the allergen detection prompt.
Pure business logic with no infrastructure dependencies.
"""

from allergen_bench.domain.value_objects import ALLERGEN_LABELS, EMPTY_SENTINEL


class PromptBuilder:
    """
    Domain service for building benchmark prompts.

    Every model is benchmarked with the same fixed template so results are
    comparable across models.
    """

    def build_allergen_prompt(self, ingredients: str) -> str:
        """
        Construct the allergen detection prompt for one food item.

        Embeds the ingredient text and the fixed nine-label vocabulary, and
        instructs the model to answer EMPTY when no allergen is present.
        """
        allowed = ", ".join(ALLERGEN_LABELS)
        return (
            "Task: Detect food allergens.\n"
            "Ingredients:\n"
            f"{ingredients.strip()}\n"
            "Allowed allergens:\n"
            f"{allowed}\n"
            "Rules:\n"
            "- Output ONLY a comma-separated list of allergens.\n"
            f"- If none are present, output {EMPTY_SENTINEL}."
        )
