import logging
from typing import List, Optional, Sequence, Tuple

from web3 import AsyncWeb3, Web3

from config import CREDENTIAL_IDS, CheckerConfig, load_config
from models import CredentialCheckResult

logger = logging.getLogger(__name__)

CHECK_ERROR_MESSAGE = "Error checking credential status"

# abi-encoded bool `true`: 32-byte big-endian 1
MINTED_RETURN_DATA = (1).to_bytes(32, "big")

PHI_REGISTRY_ABI = [
    {
        "type": "function",
        "name": "isCredMinted",
        "inputs": [
            {"name": "credChainId", "type": "uint256"},
            {"name": "credId", "type": "uint256"},
            {"name": "minter", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
    },
]

MULTICALL3_ABI = [
    {
        "type": "function",
        "name": "aggregate3",
        "inputs": [
            {
                "name": "calls",
                "type": "tuple[]",
                "components": [
                    {"name": "target", "type": "address"},
                    {"name": "allowFailure", "type": "bool"},
                    {"name": "callData", "type": "bytes"},
                ],
            },
        ],
        "outputs": [
            {
                "name": "returnData",
                "type": "tuple[]",
                "components": [
                    {"name": "success", "type": "bool"},
                    {"name": "returnData", "type": "bytes"},
                ],
            },
        ],
        "stateMutability": "view",
    },
]

Call = Tuple[str, bool, bytes]


def normalize_address(addr: str) -> str:
    if not isinstance(addr, str) or not Web3.is_address(addr):
        raise ValueError(f"Invalid address: {addr}")
    return Web3.to_checksum_address(addr)


def validate_credential_ids(credential_ids: Sequence[int]) -> List[int]:
    ids = list(credential_ids)
    if not ids:
        raise ValueError("At least one credential id is required")
    unknown = [i for i in ids if i not in CREDENTIAL_IDS]
    if unknown:
        raise ValueError(f"Unknown credential ids: {unknown}")
    return ids


class CredentialChecker:
    """Read-only client for the Phi credential registry.

    Every check is a single Multicall3 ``aggregate3`` round trip with
    ``allowFailure`` off, so one reverting sub-call fails the whole batch.
    """

    def __init__(self, config: Optional[CheckerConfig] = None):
        self.config = config or load_config()

    def _make_client(self) -> AsyncWeb3:
        return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.config.rpc_url))

    async def _close_client(self, w3: AsyncWeb3) -> None:
        # drops the aiohttp sessions the provider cached for this client
        try:
            await w3.provider.disconnect()
        except Exception as e:
            logger.debug("Error closing RPC client: %s", e)

    def build_calls(self, w3: AsyncWeb3, address: str, credential_ids: Sequence[int]) -> List[Call]:
        registry = w3.eth.contract(address=self.config.registry_address, abi=PHI_REGISTRY_ABI)
        calls = []
        for cred_id in credential_ids:
            call_data = registry.encode_abi(
                "isCredMinted", args=[self.config.cred_chain_id, cred_id, address]
            )
            calls.append((self.config.registry_address, False, Web3.to_bytes(hexstr=call_data)))
        return calls

    async def _aggregate(self, w3: AsyncWeb3, calls: List[Call]) -> List[Tuple[bool, bytes]]:
        multicall = w3.eth.contract(address=self.config.multicall_address, abi=MULTICALL3_ABI)
        return await multicall.functions.aggregate3(calls).call()

    async def check_credentials(self, address: str, credential_ids: Sequence[int]) -> CredentialCheckResult:
        """Return success only if the account holds every credential in ``credential_ids``.

        Never raises: client, encoding, transport and decoding errors all come
        back as a failed result carrying ``CHECK_ERROR_MESSAGE``, which callers
        cannot tell apart from a credential that is simply not held.
        """
        w3 = None
        try:
            account = normalize_address(address)
            ids = validate_credential_ids(credential_ids)
            w3 = self._make_client()
            calls = self.build_calls(w3, account, ids)
            results = await self._aggregate(w3, calls)
            all_minted = len(results) == len(calls) and all(
                success and bytes(return_data) == MINTED_RETURN_DATA for success, return_data in results
            )
        except Exception as e:
            logger.warning("Error checking Phi credentials %s for %s: %s", credential_ids, address, e)
            logger.debug("Credential check failure", exc_info=True)
            return CredentialCheckResult(success=False, message=CHECK_ERROR_MESSAGE)
        finally:
            if w3 is not None:
                await self._close_client(w3)

        logger.debug("Credentials %s for %s minted: %s", ids, account, all_minted)
        return CredentialCheckResult(success=all_minted)
