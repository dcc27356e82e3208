# SPDX-FileCopyrightText: 2025 Eric Löffler <eric.loeffler@opalia.systems>
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

LOG_LEVEL_ENV = "CRONSPEC_LOG_LEVEL"
LOG_JSON_ENV = "CRONSPEC_LOG_JSON"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EvaluatorSettings:
    log_level: int = logging.WARNING
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvaluatorSettings":
        env = os.environ if environ is None else environ

        level_name = env.get(LOG_LEVEL_ENV, "").strip().upper()
        level = logging.getLevelName(level_name) if level_name else logging.WARNING
        # getLevelName returns a string for unknown names
        if not isinstance(level, int):
            level = logging.WARNING

        log_json = env.get(LOG_JSON_ENV, "").strip().lower() in _TRUTHY

        return cls(log_level=level, log_json=log_json)
