"""Pytest configuration and fixtures for cronview tests."""

import pytest
from cronview import EstimatorConfig, OccurrenceEstimator


@pytest.fixture
def estimator():
    """Create an estimator with default configuration."""
    return OccurrenceEstimator()


@pytest.fixture
def strict_estimator():
    """Create an estimator that requires reference instants for interval jobs."""
    return OccurrenceEstimator(EstimatorConfig(require_reference_instant=True))
