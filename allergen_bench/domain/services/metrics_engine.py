"""
Pure multi-label metrics engine with no I/O dependencies.

Turns one model's (ground truth, prediction) label-set pairs into a
QualityResult. Stateless; safe to call from any thread.
"""

from typing import AbstractSet, Dict, Iterable, Sequence, Tuple

from allergen_bench.domain.value_objects import ALLERGEN_LABELS, QualityResult

LabelPair = Tuple[AbstractSet[str], AbstractSet[str]]


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def f1_from_counts(tp: int, fp: int, fn: int) -> float:
    """F1 = 2tp / (2tp + fp + fn), 0.0 when there is no support at all."""
    return safe_ratio(2.0 * tp, 2.0 * tp + fp + fn)


class MetricsEngine:
    """
    Multi-label quality and safety statistics for allergen predictions.

    Micro counts pool every token, including tokens outside the fixed
    vocabulary. Macro-F1 is computed over the fixed vocabulary only and
    always averages one term per label, even for labels with zero support.
    """

    def __init__(self, labels: Sequence[str] = ALLERGEN_LABELS):
        self._labels = tuple(labels)

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def calculate(self, pairs: Iterable[LabelPair]) -> QualityResult:
        """
        Compute the quality bundle for one model.

        Args:
            pairs: (ground_truth_set, predicted_set) per benchmark record

        Returns:
            QualityResult; all zeros for empty input
        """
        tp = fp = fn = 0
        exact_match = 0
        hamming_sum = 0
        abstain = 0
        total = 0

        label_tp: Dict[str, int] = {label: 0 for label in self._labels}
        label_fp: Dict[str, int] = {label: 0 for label in self._labels}
        label_fn: Dict[str, int] = {label: 0 for label in self._labels}

        for ground_truth, predicted in pairs:
            gt_set = frozenset(ground_truth)
            pr_set = frozenset(predicted)
            total += 1

            correct = len(gt_set & pr_set)
            tp += correct
            fp += len(pr_set) - correct
            fn += len(gt_set) - correct

            if not pr_set:
                abstain += 1
            if gt_set == pr_set:
                exact_match += 1

            hamming_sum += len(gt_set | pr_set) - correct

            for label in self._labels:
                in_gt = label in gt_set
                in_pr = label in pr_set
                if in_gt and in_pr:
                    label_tp[label] += 1
                elif in_pr:
                    label_fp[label] += 1
                elif in_gt:
                    label_fn[label] += 1

        if total == 0:
            return QualityResult()

        per_label_f1 = [
            f1_from_counts(label_tp[label], label_fp[label], label_fn[label])
            for label in self._labels
        ]

        return QualityResult(
            precision=safe_ratio(tp, tp + fp),
            recall=safe_ratio(tp, tp + fn),
            micro_f1=f1_from_counts(tp, fp, fn),
            macro_f1=safe_ratio(sum(per_label_f1), len(per_label_f1)),
            fnr=safe_ratio(fn, tp + fn),
            hallucination_rate=safe_ratio(fp, fp + tp),
            over_prediction_rate=safe_ratio(fp, total),
            abstention_rate=safe_ratio(abstain, total),
            exact_match_rate=safe_ratio(exact_match, total),
            hamming_loss=safe_ratio(hamming_sum, total),
            tp=tp,
            fp=fp,
            fn=fn,
            total=total,
        )
