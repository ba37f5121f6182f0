"""
Markdown Report Generator

Generates a human-readable leaderboard report from one evaluation pass.
"""

import time
from pathlib import Path

from allergen_bench.application.interfaces import IReportGenerator
from allergen_bench.domain.value_objects import Leaderboard, RankingMetric


def _ms(value: float) -> str:
    return "N/A" if value == 0.0 else f"{value:.0f} ms"


def _kb(value: float) -> str:
    return "N/A" if value == 0.0 else f"{value:.0f} KB"


def _rate(value: float) -> str:
    return "N/A" if value == 0.0 else f"{value:.1f}"


class MarkdownReportGenerator(IReportGenerator):
    """Generates leaderboard reports as Markdown."""

    def generate(self, leaderboard: Leaderboard, output_path: Path) -> None:
        """Write the full report to output_path."""
        with open(output_path, "w", encoding="utf-8") as f:
            f.write("# Allergen Detection Benchmark Leaderboard\n\n")
            f.write(f"**Generated**: {time.strftime('%Y-%m-%d %H:%M:%S')}\n\n")

            if not len(leaderboard):
                f.write("No benchmark records found.\n")
                return

            f.write(f"**Models evaluated**: {len(leaderboard)}\n\n")

            self._write_leaderboard(f, leaderboard)
            self._write_model_cards(f, leaderboard)
            self._write_quality_table(f, leaderboard)
            self._write_safety_table(f, leaderboard)
            self._write_efficiency_table(f, leaderboard)
            self._write_scoring(f)

    def _write_leaderboard(self, f, leaderboard: Leaderboard):
        """Write overall leaderboard table"""
        f.write("## Leaderboard\n\n")
        f.write("| # | Model | Score | Accuracy | Avg Latency (ms) | Hallucination | Over-Prediction |\n")
        f.write("|---|-------|-------|----------|------------------|---------------|-----------------|\n")

        for entry in leaderboard:
            s = entry.summary
            f.write(f"| {entry.position} | ")
            f.write(f"{s.model} | ")
            f.write(f"{s.score:.3f} | ")
            f.write(f"{s.accuracy:.2%} | ")
            f.write(f"{s.avg_latency_ms:.1f} | ")
            f.write(f"{s.hallucination_rate:.2%} | ")
            f.write(f"{s.over_prediction_rate:.2%} |\n")

    def _write_model_cards(self, f, leaderboard: Leaderboard):
        """Write per-model badges, strengths and weaknesses"""
        f.write("\n## Model Details\n\n")

        for entry in leaderboard:
            f.write(f"### {entry.position}. {entry.model}\n\n")
            if entry.badges:
                f.write("**Badges**: ")
                f.write(", ".join(badge.label for badge in entry.badges))
                f.write("\n\n")
            f.write("**Strengths**: ")
            f.write(entry.strengths.replace("\n", ", "))
            f.write("\n\n")
            f.write("**Weaknesses**: ")
            f.write(entry.weaknesses.replace("\n", ", "))
            f.write("\n\n")

        f.write("**Per-metric rankings**:\n\n")
        for metric in RankingMetric:
            models = leaderboard.rankings.get(metric, [])
            f.write(f"- {metric.badge_title}: {' > '.join(models)}\n")
        f.write("\n")

    def _write_quality_table(self, f, leaderboard: Leaderboard):
        """Write quality metrics table"""
        f.write("## Quality\n\n")
        f.write("| Model | Precision | Recall | Micro-F1 | Macro-F1 | Exact Match | Hamming Loss | FNR |\n")
        f.write("|-------|-----------|--------|----------|----------|-------------|--------------|-----|\n")

        for entry in leaderboard:
            q = entry.summary.quality
            f.write(f"| {entry.model} | ")
            f.write(f"{q.precision:.2%} | ")
            f.write(f"{q.recall:.2%} | ")
            f.write(f"{q.micro_f1:.3f} | ")
            f.write(f"{q.macro_f1:.3f} | ")
            f.write(f"{q.exact_match_rate:.2%} | ")
            f.write(f"{q.hamming_loss:.3f} | ")
            f.write(f"{q.fnr:.2%} |\n")

    def _write_safety_table(self, f, leaderboard: Leaderboard):
        """Write safety metrics table"""
        f.write("\n## Safety\n\n")
        f.write("| Model | Hallucination (items) | Hallucination (labels) | Over-Prediction (FP/item) | Abstention |\n")
        f.write("|-------|-----------------------|------------------------|---------------------------|------------|\n")

        for entry in leaderboard:
            s = entry.summary
            f.write(f"| {entry.model} | ")
            f.write(f"{s.hallucination_rate:.2%} | ")
            f.write(f"{s.quality.hallucination_rate:.2%} | ")
            f.write(f"{s.quality.over_prediction_rate:.3f} | ")
            f.write(f"{s.quality.abstention_rate:.2%} |\n")

    def _write_efficiency_table(self, f, leaderboard: Leaderboard):
        """Write efficiency metrics table"""
        f.write("\n## Efficiency\n\n")
        f.write("| Model | Latency | TTFT | ITPS | OTPS | OET | Total Time | Java Heap | Native Heap | PSS |\n")
        f.write("|-------|---------|------|------|------|-----|------------|-----------|-------------|-----|\n")

        for entry in leaderboard:
            e = entry.summary.efficiency
            f.write(f"| {entry.model} | ")
            f.write(f"{_ms(e.latency_ms)} | ")
            f.write(f"{_ms(e.ttft_ms)} | ")
            f.write(f"{_rate(e.itps)} | ")
            f.write(f"{_rate(e.otps)} | ")
            f.write(f"{_ms(e.oet_ms)} | ")
            f.write(f"{_ms(e.total_time_ms)} | ")
            f.write(f"{_kb(e.java_heap_kb)} | ")
            f.write(f"{_kb(e.native_heap_kb)} | ")
            f.write(f"{_kb(e.pss_kb)} |\n")

    def _write_scoring(self, f):
        """Write scoring methodology section"""
        f.write("\n## Scoring\n\n")
        f.write("- **Score**: 0.5 x accuracy - 0.2 x normalised latency - 0.2 x hallucination - 0.1 x over-prediction\n")
        f.write("- **Accuracy**: mapped allergen text identical to predicted text\n")
        f.write("- **Normalised latency**: average latency / slowest model's average latency\n")
        f.write("- **Hallucination / Over-Prediction**: share of items predicting an allergen not in the ground truth / more allergens than the ground truth\n")
        f.write("- **Badges**: top 3 in a per-metric ranking\n")
