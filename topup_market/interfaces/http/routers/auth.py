"""Sign-up and sign-in endpoints."""
from fastapi import APIRouter, Depends, status

from topup_market.core.security import create_access_token
from topup_market.interfaces.http.deps import get_account_service
from topup_market.modules.accounts import Account, AccountCreateInput
from topup_market.modules.accounts.service import AccountService
from topup_market.schemas import AccountResponse, AuthResponse, SignInRequest, SignUpRequest

router = APIRouter()


def _auth_response(account: Account) -> AuthResponse:
    return AuthResponse(
        account=AccountResponse.model_validate(account),
        access_token=create_access_token(account.id, account.email, account.role),
    )


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account with a zero balance",
)
async def sign_up(
    payload: SignUpRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AuthResponse:
    account = await account_service.register(
        AccountCreateInput(
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
            phone_number=payload.phone_number,
        )
    )
    return _auth_response(account)


@router.post("/sign-in", response_model=AuthResponse, summary="Exchange credentials for a bearer token")
async def sign_in(
    payload: SignInRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AuthResponse:
    account = await account_service.authenticate(payload.email, payload.password)
    return _auth_response(account)
