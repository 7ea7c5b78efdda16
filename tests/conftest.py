"""Pytest configuration and fixtures for test suite."""

import os
import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Keep a developer's .env or shell overrides out of the test run
for _name in list(os.environ):
    if _name.startswith("LEGAL_ENGINE_") or _name.startswith("LEGAL_20"):
        del os.environ[_name]

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


# =============================================================================
# Time
# =============================================================================

@pytest.fixture
def today():
    """Fixed reference date so deadline status never depends on the wall clock."""
    return date(2024, 3, 1)


@pytest.fixture
def now_datetime():
    return datetime(2024, 3, 1, 9, 30)


# =============================================================================
# Settings and parameters
# =============================================================================

@pytest.fixture
def engine_settings():
    """Settings isolated from any .env file in the working directory."""
    from config.settings import EngineSettings
    return EngineSettings(_env_file=None)


@pytest.fixture
def parameters_dir(tmp_path):
    """A parameter directory with a 2024 and a 2025 file."""
    (tmp_path / "parameters_2024.yaml").write_text(
        "_metadata:\n"
        "  version: '2024.1'\n"
        "  parameter_year: 2024\n"
        "  effective_date: '2024-03-01'\n"
        "  source: 'NYS OCA'\n"
        "cssa_income_cap: 183000\n"
        "maintenance_income_cap: 228000\n",
        encoding="utf-8",
    )
    (tmp_path / "parameters_2025.yaml").write_text(
        "cssa_income_cap: 190000\n"
        "maintenance_income_cap: 228000\n"
        "new_cap: 1000\n",
        encoding="utf-8",
    )
    return tmp_path


# =============================================================================
# Binder collaborators
# =============================================================================

@pytest.fixture
def record_store():
    from binder.record_store import InMemoryTaskRecordStore
    return InMemoryTaskRecordStore()


@pytest.fixture
def audit_recorder():
    from audit.audit_recorder import LoggingAuditRecorder
    return LoggingAuditRecorder()


@pytest.fixture
def paralegal():
    from binder.context import Actor, Role
    return Actor(user_id="u-para", role=Role.PARALEGAL, team_id="team-1")


@pytest.fixture
def assistant():
    from binder.context import Actor, Role
    return Actor(user_id="u-asst", role=Role.ASSISTANT, team_id="team-1")


@pytest.fixture
def task_binder(record_store, audit_recorder, engine_settings):
    from binder.task_binder import TaskInstanceBinder
    return TaskInstanceBinder(record_store, audit_recorder, engine_settings)
