"""Profile endpoints for the signed-in account."""
from fastapi import APIRouter, Depends

from topup_market.core.security import get_current_account
from topup_market.interfaces.http.deps import get_account_service
from topup_market.modules.accounts import Account, AccountUpdateInput, UNSET
from topup_market.modules.accounts.service import AccountService
from topup_market.schemas import AccountResponse, ProfileUpdateRequest

router = APIRouter()


@router.get("/me", response_model=AccountResponse, summary="Current account profile and balance")
async def get_profile(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)


@router.patch("/me", response_model=AccountResponse, summary="Update name or phone number")
async def update_profile(
    payload: ProfileUpdateRequest,
    account: Account = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    # only fields present in the request body are changed; phone_number=null clears it
    provided = payload.model_fields_set
    updated = await account_service.update_profile(
        account.id,
        AccountUpdateInput(
            full_name=payload.full_name if "full_name" in provided else UNSET,
            phone_number=payload.phone_number if "phone_number" in provided else UNSET,
        ),
    )
    return AccountResponse.model_validate(updated)
