import numpy as np
import pytest

from explainlab.config.schema import GbmConfig, NnetConfig, Resampling
from explainlab.data.recode import dataprep
from explainlab.eval.metrics import evaluate_classifier
from explainlab.eval.prepare_splits import stratified_split
from explainlab.features.text import make_dtm_builder, word_tokenizer
from explainlab.models.trainers import NeuralNetTrainer, TextBoostingTrainer, categorical_columns


@pytest.fixture
def census_partition(raw_census):
    return stratified_split(dataprep(raw_census), "income", test_size=0.25, seed=0)


def test_categorical_columns(census_partition):
    cols = categorical_columns(census_partition.X_train)
    assert "age" not in cols and "hr_per_week" not in cols
    assert "capital_gain" in cols and "country" in cols


def test_nnet_without_resampling(census_partition):
    cfg = NnetConfig(size=[3], decay=[0.1], max_iter=200, resampling=Resampling(method="none"))
    trainer = NeuralNetTrainer(cfg, seed=0)
    model = trainer.fit(census_partition.X_train, census_partition.y_train)
    assert trainer.best_params_ == {"size": 3, "decay": 0.1}
    preds = model.predict(census_partition.X_test)
    assert set(preds) <= {"GreaterThan50K", "LessThan50K"}
    proba = model.predict_proba(census_partition.X_test)
    assert np.allclose(proba.sum(axis=1), 1.0)


def test_nnet_grid_search_picks_from_grid(census_partition):
    cfg = NnetConfig(
        size=[2, 4],
        decay=[0.01, 0.5],
        max_iter=100,
        resampling=Resampling(method="repeatedcv", number=2, repeats=2),
    )
    trainer = NeuralNetTrainer(cfg, seed=0)
    model = trainer.fit(census_partition.X_train, census_partition.y_train)
    assert trainer.best_params_["size"] in (2, 4)
    assert trainer.best_params_["decay"] in (0.01, 0.5)
    metrics = evaluate_classifier(model, census_partition.X_test, census_partition.y_test)
    assert 0.0 <= metrics["accuracy"] <= 1.0
    assert metrics["confusion"].to_numpy().sum() == len(census_partition.X_test)


def test_word_tokenizer_lowercases():
    assert word_tokenizer("WIN a FREE prize!!") == ["win", "a", "free", "prize"]


def test_dtm_builder_is_stateless():
    dtm = make_dtm_builder(hash_bits=8)
    a = dtm(["free cash now"])
    b = dtm(["now cash free"])
    assert a.shape == (1, 256)
    assert (a != b).nnz == 0
    assert a.sum() == 3


def test_text_booster_separates_vocabularies(spam_corpus):
    dtm = make_dtm_builder(hash_bits=10)
    cfg = GbmConfig(n_estimators=30, learning_rate=0.3, num_leaves=7, max_depth=3, min_child_samples=2)
    model = TextBoostingTrainer(dtm, cfg, seed=0).fit(spam_corpus["text"], spam_corpus["label"])
    assert list(model.classes_) == ["ham", "spam"]
    metrics = evaluate_classifier(model, dtm(spam_corpus["text"]), spam_corpus["label"])
    assert metrics["accuracy"] > 0.8
