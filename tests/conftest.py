import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def write_config(tmp_path):
    """Write raw text to a config file and return its path."""

    def _write(text, name="config.json"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
