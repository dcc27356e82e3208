# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import importlib.util
from datetime import datetime
from pathlib import Path

import pytest

EVALUATORS_DIR = Path(__file__).resolve().parent.parent / "extensions" / "when_evaluators"


def time(value: str) -> datetime:
    return datetime.fromisoformat(value)


@pytest.fixture(scope="session")
def cron_app():
    path = EVALUATORS_DIR / "calendar_cron" / "app.py"
    spec = importlib.util.spec_from_file_location("calendar_cron_app", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
