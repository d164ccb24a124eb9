"""Shared fixtures for the traffic pathfinding tests."""

import random

import pytest


@pytest.fixture
def rng():
    return random.Random(1234)
