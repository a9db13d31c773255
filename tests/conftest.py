"""Pytest configuration and shared fixtures."""
import pytest
from dataclasses import dataclass
from typing import ClassVar

from settingsnapshot import Settings
import settingsnapshot.config as config_module
import settingsnapshot.members as members_module


@dataclass
class ServiceConfig:
    """Plain dataclass config - no Settings base."""
    timeout: int = 30
    name: str = "svc"


@dataclass
class WorkerConfig(Settings):
    """Dataclass config using the Settings base."""
    num_workers: int = 4
    debug: bool = False
    learning_rate: float = 0.001
    registry_version: ClassVar[int] = 2


class RenderConfig(Settings):
    """Property-based config with validation and a read-only member."""

    def __init__(self):
        self._scale = 1.0
        self._retries = 3
        self._mode = "fast"

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = value

    @property
    def retries(self) -> int:
        return self._retries

    @retries.setter
    def retries(self, value: int) -> None:
        if value < 0:
            raise ValueError("retries must be >= 0")
        self._retries = value

    @property
    def mode(self) -> str:
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        self._mode = value

    @property
    def version(self) -> str:
        """Read-only, never a setting."""
        return "1.0"


@pytest.fixture(autouse=True)
def reset_framework_config():
    """Restore marker types, write-failure logger and discovery cache after each test."""
    original_markers = list(config_module._marker_types)
    original_logger = config_module._write_failure_logger

    yield

    config_module._marker_types[:] = original_markers
    config_module._write_failure_logger = original_logger
    members_module.clear_cache()


@pytest.fixture
def service_config():
    """Provide the {timeout: 30, name: "svc"} config."""
    return ServiceConfig()


@pytest.fixture
def worker_config():
    return WorkerConfig(num_workers=8)


@pytest.fixture
def render_config():
    return RenderConfig()
