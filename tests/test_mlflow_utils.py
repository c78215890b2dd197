import mlflow
from mlflow.tracking import MlflowClient

from explainlab.config.schema import TrackingConfig
from explainlab.explain.lime_utils import ExplanationResult
from explainlab.utils import mlflow_utils as mlf


def _result(label: str) -> ExplanationResult:
    return ExplanationResult(
        instance=0,
        label=label,
        probability=0.8,
        contributions=(("age <= 28.00", -0.2), ("sex=Male", 0.1)),
        intercept=0.5,
        score=0.4,
    )


def test_disabled_tracking_opens_no_run():
    with mlf.tracked_run(TrackingConfig(enabled=False)) as run_id:
        assert run_id is None
        assert mlflow.active_run() is None
        mlf.log_params({"a": 1})
        mlf.log_metrics({"accuracy": 0.5})
        mlf.log_explanations([_result("spam")])


def test_tracked_run_logs_explanations(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    uri = f"sqlite:///{tmp_path / 'mlflow.db'}"
    tracking = TrackingConfig(enabled=True, experiment="unit", tracking_uri=uri)
    with mlf.tracked_run(tracking, run_name="census") as run_id:
        mlf.log_params({"size": 5})
        mlf.log_metrics({"accuracy": 0.75})
        mlf.log_explanations([_result("LessThan50K"), _result("GreaterThan50K")])
    assert mlflow.active_run() is None

    client = MlflowClient(tracking_uri=uri)
    run = client.get_run(run_id)
    assert run.data.params["size"] == "5"
    assert run.data.metrics["accuracy"] == 0.75
    assert "explanations.csv" in [a.path for a in client.list_artifacts(run_id)]


def test_default_tracking_store_is_sqlite(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MLFLOW_TRACKING_URI", raising=False)
    with mlf.tracked_run(TrackingConfig(enabled=True, experiment="unit")) as run_id:
        assert mlflow.get_tracking_uri() == mlf.DEFAULT_TRACKING_URI
        mlf.log_metrics({"accuracy": 0.5})
    assert run_id is not None
    assert (tmp_path / "mlflow.db").exists()
