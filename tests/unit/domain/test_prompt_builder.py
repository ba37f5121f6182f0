"""
Unit tests for PromptBuilder.
"""

from allergen_bench.domain.services import PromptBuilder
from allergen_bench.domain.value_objects import ALLERGEN_LABELS


class TestBuildAllergenPrompt:

    def test_embeds_ingredients(self):
        prompt = PromptBuilder().build_allergen_prompt("  wheat flour, sugar, butter \n")

        assert "Ingredients:\nwheat flour, sugar, butter\n" in prompt

    def test_lists_full_vocabulary(self):
        prompt = PromptBuilder().build_allergen_prompt("rice")

        assert ", ".join(ALLERGEN_LABELS) in prompt

    def test_rules(self):
        prompt = PromptBuilder().build_allergen_prompt("rice")

        assert prompt.startswith("Task: Detect food allergens.")
        assert "Output ONLY a comma-separated list of allergens." in prompt
        assert prompt.endswith("If none are present, output EMPTY.")

    def test_deterministic(self):
        builder = PromptBuilder()
        assert builder.build_allergen_prompt("tofu") == builder.build_allergen_prompt("tofu")
