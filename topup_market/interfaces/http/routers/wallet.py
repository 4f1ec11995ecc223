"""Balance, top-up, purchase and history endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Response, status

from topup_market.core.security import get_current_account
from topup_market.interfaces.http.deps import (
    get_account_service,
    get_ledger_service,
    get_transaction_log,
)
from topup_market.modules.accounts import Account
from topup_market.modules.accounts.service import AccountService
from topup_market.modules.ledger.service import LedgerService
from topup_market.modules.transactions.service import TransactionLogService
from topup_market.schemas import (
    AccountResponse,
    PurchaseRequest,
    TopUpRequest,
    TransactionListResponse,
    TransactionResponse,
    WalletBalanceResponse,
)

router = APIRouter()


@router.get("/balance", response_model=WalletBalanceResponse, summary="Current balance")
async def get_balance(
    account: Account = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
) -> WalletBalanceResponse:
    balance = await account_service.get_balance(account.id)
    return WalletBalanceResponse(account_id=account.id, balance=balance)


@router.post(
    "/topups",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Credit the balance",
)
async def top_up(
    payload: TopUpRequest,
    response: Response,
    account: Account = Depends(get_current_account),
    ledger: LedgerService = Depends(get_ledger_service),
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
) -> AccountResponse:
    updated = await ledger.top_up(
        account_id=account.id,
        amount=payload.amount,
        idempotency_key=idempotency_key,
    )
    if updated.replayed:
        response.status_code = status.HTTP_200_OK
    return AccountResponse.model_validate(updated)


@router.post(
    "/purchases",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Buy a product with the balance",
)
async def purchase(
    payload: PurchaseRequest,
    response: Response,
    account: Account = Depends(get_current_account),
    ledger: LedgerService = Depends(get_ledger_service),
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
) -> TransactionResponse:
    transaction = await ledger.purchase(
        account_id=account.id,
        product_id=payload.product_id,
        target=payload.target,
        notes=payload.notes,
        idempotency_key=idempotency_key,
    )
    if transaction.replayed:
        response.status_code = status.HTTP_200_OK
    return TransactionResponse.model_validate(transaction)


@router.get("/transactions", response_model=TransactionListResponse, summary="Transaction history, newest first")
async def list_transactions(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    account: Account = Depends(get_current_account),
    log: TransactionLogService = Depends(get_transaction_log),
) -> TransactionListResponse:
    records = await log.list_by_account(account.id, limit, offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(record) for record in records]
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse, summary="Single transaction")
async def get_transaction(
    transaction_id: str,
    account: Account = Depends(get_current_account),
    log: TransactionLogService = Depends(get_transaction_log),
) -> TransactionResponse:
    return TransactionResponse.model_validate(await log.get(transaction_id, account_id=account.id))
