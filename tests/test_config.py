import pytest

from schedsim.config import SchedulerConfig
from schedsim.errors import ConfigurationError
from schedsim.models import Algorithm


def test_defaults():
    config = SchedulerConfig.from_env({})
    assert config.quantum == 2
    assert config.log_level == "WARNING"
    assert config.compare_algorithms == list(Algorithm)


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SCHEDSIM_QUANTUM", "4")
    monkeypatch.setenv("SCHEDSIM_LOG_LEVEL", "debug")
    monkeypatch.setenv("SCHEDSIM_ALGORITHMS", "fcfs, rr")
    config = SchedulerConfig.from_env()
    assert config.quantum == 4
    assert config.log_level == "DEBUG"
    assert config.compare_algorithms == [Algorithm.FCFS, Algorithm.ROUND_ROBIN]


@pytest.mark.parametrize(
    "environ",
    [
        {"SCHEDSIM_QUANTUM": "two"},
        {"SCHEDSIM_QUANTUM": "0"},
        {"SCHEDSIM_LOG_LEVEL": "LOUD"},
        {"SCHEDSIM_ALGORITHMS": "fcfs,lottery"},
    ],
)
def test_rejects_malformed_values(environ):
    with pytest.raises(ConfigurationError):
        SchedulerConfig.from_env(environ)
