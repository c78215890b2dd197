"""Trainers for the census network and the spam booster."""

from .trainers import NeuralNetTrainer, TextBoostingTrainer, Trainer  # noqa: F401
