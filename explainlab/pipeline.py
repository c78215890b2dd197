"""End-to-end explain-a-prediction workflows for census and spam data."""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

import pandas as pd
import plotly.graph_objects as go

from .config import AppConfig, load_config
from .data.loader import fetch_spam, read_census
from .data.recode import prepare
from .errors import ExplainLabError
from .eval.leakage import LeakageIssue, check_binning_leakage
from .eval.metrics import evaluate_classifier
from .eval.prepare_splits import Partition, stratified_split
from .explain.lime_utils import ExplanationResult, explain_tabular, explain_text
from .explain.plot import plot_explanations, save_figure
from .features.text import make_dtm_builder
from .models.trainers import Classifier, NeuralNetTrainer, TextBoostingTrainer
from .utils import mlflow_utils as mlf
from .utils.seed import set_seed

REPORTS_DIR = Path("reports")


@dataclass(frozen=True)
class WorkflowResult:
    """Everything one workflow run produced, passed back to the caller."""

    partition: Partition
    model: Classifier
    metrics: dict
    explanations: List[ExplanationResult]
    figure: go.Figure
    leakage: List[LeakageIssue] = field(default_factory=list)


def run_census(cfg: AppConfig, raw: pd.DataFrame | None = None) -> WorkflowResult:
    """Recode the census table, fit the network and explain one test row."""
    if raw is None:
        raw = read_census(cfg.census.source)
    cleaned, edges = prepare(raw, unmapped=cfg.census.unmapped)
    part = stratified_split(cleaned, cfg.census.label, cfg.census.test_size, cfg.seed)
    leakage = check_binning_leakage(raw, part.train.index, edges)

    trainer = NeuralNetTrainer(cfg.nnet, seed=cfg.seed)
    model = trainer.fit(part.X_train, part.y_train)
    metrics = evaluate_classifier(model, part.X_test, part.y_test)
    mlf.log_params({"workflow": "census", **(trainer.best_params_ or {})})
    mlf.log_metrics({"accuracy": metrics["accuracy"]})

    results = explain_tabular(
        model,
        part.X_train,
        part.X_test,
        cfg.explain.instance,
        n_features=cfg.explain.n_features,
        n_labels=cfg.explain.n_labels,
        num_samples=cfg.explain.num_samples,
        seed=cfg.seed,
    )
    fig = plot_explanations(results, title="Census income: local explanation")
    return WorkflowResult(part, model, metrics, results, fig, leakage)


def run_spam(cfg: AppConfig, corpus: pd.DataFrame | None = None) -> WorkflowResult:
    """Fit the boosted model on hashed messages and explain one test message."""
    if corpus is None:
        corpus = fetch_spam(cfg.spam.url, cfg.spam.member)
    part = stratified_split(corpus, cfg.spam.label, cfg.spam.test_size, cfg.seed)
    dtm = make_dtm_builder(cfg.spam.hash_bits)

    model = TextBoostingTrainer(dtm, cfg.gbm, seed=cfg.seed).fit(
        part.train["text"], part.y_train
    )
    metrics = evaluate_classifier(model, dtm(part.test["text"]), part.y_test)
    mlf.log_params({"workflow": "spam", "hash_bits": cfg.spam.hash_bits, **cfg.gbm.model_dump()})
    mlf.log_metrics({"accuracy": metrics["accuracy"]})

    results = explain_text(
        model,
        dtm,
        part.test["text"].tolist(),
        cfg.explain.instance,
        n_features=cfg.explain.n_features,
        n_labels=cfg.explain.n_labels,
        num_samples=cfg.explain.num_samples,
        seed=cfg.seed,
    )
    fig = plot_explanations(results, title="SMS spam: local explanation")
    return WorkflowResult(part, model, metrics, results, fig)


WORKFLOWS = {"census": run_census, "spam": run_spam}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Train a classifier and explain one prediction")
    parser.add_argument("workflow", choices=sorted(WORKFLOWS))
    parser.add_argument("--instance", type=int, help="Test row position to explain")
    parser.add_argument("--n-features", type=int)
    parser.add_argument("--n-labels", type=int)
    parser.add_argument("--out", type=Path, help="HTML file for the explanation figure")
    parser.add_argument("--track", action="store_true", help="Log the run to MLflow")
    parser.add_argument("overrides", nargs="*", help="Config overrides, key=value")
    args = parser.parse_intermixed_args(argv)

    overrides = list(args.overrides)
    if args.instance is not None:
        overrides.append(f"explain.instance={args.instance}")
    if args.n_features is not None:
        overrides.append(f"explain.n_features={args.n_features}")
    if args.n_labels is not None:
        overrides.append(f"explain.n_labels={args.n_labels}")
    if args.track:
        overrides.append("tracking.enabled=true")

    cfg = load_config(overrides)
    set_seed(cfg.seed)
    out_path = args.out or REPORTS_DIR / f"{args.workflow}_explanation.html"

    try:
        with mlf.tracked_run(cfg.tracking, run_name=args.workflow):
            result = WORKFLOWS[args.workflow](cfg)
            saved = save_figure(result.figure, out_path)
            mlf.log_explanations(result.explanations)
            mlf.log_artifact(saved)
    except ExplainLabError as exc:
        print("[ERROR]", exc, file=sys.stderr)
        return 1

    part = result.partition
    print(f"[OK] {args.workflow}: {len(part.train)} train / {len(part.test)} test rows")
    print(f"Test accuracy: {result.metrics['accuracy']:.4f}")
    print(result.metrics["confusion"])
    for issue in result.leakage:
        print(f"[{issue.level.upper()}] {issue.message}")
    for r in result.explanations:
        print(f"Case {r.instance}, label {r.label} (p={r.probability:.3f}):")
        for feature, weight in r.contributions:
            print(f"  {feature:<40} {weight:+.4f}")
    print(f"Figure written to {saved}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
