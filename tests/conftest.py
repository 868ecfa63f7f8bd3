"""
Pytest fixtures for the credential rewards checker.

No test talks to an RPC endpoint: the classifier gets a FakeChecker and the
real CredentialChecker gets its aggregate3 round trip replaced.
"""
import asyncio
import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest

# Add the project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import CREDENTIAL_IDS, CheckerConfig  # noqa: E402
from credentials import CHECK_ERROR_MESSAGE  # noqa: E402
from models import CredentialCheckResult  # noqa: E402

ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


class FakeChecker:
    """Stands in for CredentialChecker with canned per-credential answers.

    The all-credentials batch succeeds only when ``batch_ok`` is set, or when
    it is left as None and every single credential is held. ``failing`` ids
    answer like a failed query. ``gates`` maps ids to events a single-id
    check waits on, so a test decides the completion order.
    """

    def __init__(
        self,
        held: Sequence[int] = (),
        batch_ok: Optional[bool] = None,
        failing: Sequence[int] = (),
        gates: Optional[Dict[int, asyncio.Event]] = None,
    ):
        self.held = set(held)
        self.batch_ok = batch_ok
        self.failing = set(failing)
        self.gates = gates or {}
        self.calls = []
        self.completed = []

    async def check_credentials(self, address, credential_ids):
        ids = tuple(credential_ids)
        self.calls.append(ids)
        if len(ids) > 1:
            ok = self.batch_ok if self.batch_ok is not None else set(ids) <= self.held
            return CredentialCheckResult(success=ok)
        (cred_id,) = ids
        if cred_id in self.gates:
            await self.gates[cred_id].wait()
        self.completed.append(cred_id)
        if cred_id in self.failing:
            return CredentialCheckResult(success=False, message=CHECK_ERROR_MESSAGE)
        return CredentialCheckResult(success=cred_id in self.held)


@pytest.fixture
def address():
    return ADDRESS


@pytest.fixture
def all_ids():
    return list(CREDENTIAL_IDS)


@pytest.fixture
def config():
    return CheckerConfig(rpc_url="http://127.0.0.1:8545")
