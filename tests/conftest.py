"""Shared fixtures for KnowCode tests."""

from __future__ import annotations

import pytest
import yaml

from knowcode.config.settings import Settings
from knowcode.engine.prosigns import ProsignMapping

REFERENCE_TEXT = (
    "VVV VVV CQ CQ DE W6JSV W6JSV <BT> NAME IS JOHN JOHN <BT> "
    "QTH IS SAN JOSE CA SAN JOSE CA <BT> RIG IS A KX3 AND ANT IS A DIPOLE <AR>"
)


@pytest.fixture
def bt_table():
    return [ProsignMapping(prosign="<BT>", alternate="=")]


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def sample_test_key(tmp_path):
    """Write a minimal test key to YAML."""
    data = {
        "test": {
            "id": "test-20wpm",
            "title": "20 WPM Extra",
            "speed_wpm": 20,
            "passing_score": 2,
            "answers": {"q1": "A", "q2": "C", "q3": "D"},
            "reference_text": REFERENCE_TEXT,
        }
    }
    path = tmp_path / "test_key.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def sample_submission(tmp_path):
    data = {
        "callsign": " w6jsv ",
        "answers": {"q1": "a", "q2": "B"},
        "copy_text": "cq de w6jsv w6jsv = name is john john = qth is san jose",
    }
    path = tmp_path / "submission.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
