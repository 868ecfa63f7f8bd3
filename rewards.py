import asyncio
import logging

from config import CREDENTIAL_IDS, TIER_8_OF_8
from credentials import CredentialChecker
from models import TierReport

logger = logging.getLogger(__name__)


async def classify(address: str, checker: CredentialChecker) -> TierReport:
    """Work out which reward tiers ``address`` qualifies for.

    One batched check over all credentials covers full holders in a single
    round trip. Otherwise each credential is checked on its own, concurrently,
    and the held ones are counted. Failed checks count as not held.
    """
    all_held = await checker.check_credentials(address, CREDENTIAL_IDS)
    if all_held.success:
        logger.info("%s holds all %d credentials", address, len(CREDENTIAL_IDS))
        return TierReport.from_count(len(CREDENTIAL_IDS))

    results = await asyncio.gather(
        *(checker.check_credentials(address, [cred_id]) for cred_id in CREDENTIAL_IDS)
    )
    held = [cred_id for cred_id, result in zip(CREDENTIAL_IDS, results) if result.success]
    logger.info("%s holds credentials %s", address, held)
    return TierReport.from_count(len(held))


def format_report(report: TierReport) -> str:
    count = report.total_count
    lines = [
        f"Credential check results: {report.model_dump(by_alias=True)}",
        f"User has {count} out of {TIER_8_OF_8} credentials",
    ]
    if report.has8of8:
        lines.append("User eligible for 8/8 rewards (has all credentials)")
    elif report.has4of4:
        lines.append(f"User eligible for 4/4 rewards (has {count} credentials)")
    elif report.has2of8:
        lines.append(f"User eligible for 2/8 rewards (has {count} credentials)")
    else:
        lines.append(f"User not eligible for any rewards (has only {count} credentials)")
    return "\n".join(lines)
