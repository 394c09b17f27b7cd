from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clean_fermat_env(monkeypatch):
    # config tests set these explicitly; nothing should leak in from the shell
    for name in ("FERMAT_MAX_CANDIDATE", "FERMAT_TRIAL_BUDGET", "FERMAT_SEED", "FERMAT_WORKERS"):
        monkeypatch.delenv(name, raising=False)
