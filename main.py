from typing import List

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query

from config import CREDENTIAL_IDS, load_config
from credentials import CredentialChecker, normalize_address, validate_credential_ids
from models import CredentialCheckResult, TierReport
from rewards import classify

load_dotenv()

app = FastAPI(title="Phi Credential Rewards Checker")

checker = CredentialChecker(load_config())


@app.get("/", response_model=dict)
def root():
    return {"service": "phi-credential-rewards", "version": "0.1"}


@app.get("/rewards", response_model=TierReport)
async def rewards(address: str = Query(..., description="Account address to check for reward tiers")):
    try:
        account = normalize_address(address)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        return await classify(account, checker)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal error: {e}")


@app.get("/credentials", response_model=CredentialCheckResult)
async def credentials(
    address: str = Query(..., description="Account address to check"),
    ids: List[int] = Query(list(CREDENTIAL_IDS), description="Credential ids that must all be held"),
):
    # reject bad input here; the checker itself would only report it as not held
    try:
        account = normalize_address(address)
        cred_ids = validate_credential_ids(ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await checker.check_credentials(account, cred_ids)
