from __future__ import annotations

from pathlib import Path

from insights.config import DEFAULT_DATA_DIR, DEFAULT_RISK_LIMIT, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.risk_jitter == 0.0
    assert settings.risk_limit == DEFAULT_RISK_LIMIT
    assert settings.log_level == "INFO"


def test_reads_environment(tmp_path):
    settings = Settings.from_env(
        {
            "INSIGHTS_DATA_DIR": str(tmp_path),
            "INSIGHTS_RISK_JITTER": "7.5",
            "INSIGHTS_RISK_LIMIT": "25",
            "INSIGHTS_LOG_LEVEL": "debug",
        }
    )
    assert settings.data_dir == Path(tmp_path)
    assert settings.risk_jitter == 7.5
    assert settings.risk_limit == 25
    assert settings.log_level == "DEBUG"


def test_malformed_values_fall_back():
    settings = Settings.from_env({"INSIGHTS_RISK_JITTER": "lots", "INSIGHTS_RISK_LIMIT": "many"})
    assert settings.risk_jitter == 0.0
    assert settings.risk_limit == DEFAULT_RISK_LIMIT
    assert Settings.from_env({"INSIGHTS_RISK_LIMIT": "1000"}).risk_limit == 200
    assert Settings.from_env({"INSIGHTS_RISK_JITTER": "-3"}).risk_jitter == 0.0
