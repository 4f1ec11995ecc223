"""Back-office endpoints used by the fulfillment worker."""
from fastapi import APIRouter, Depends

from topup_market.core.security import get_current_admin
from topup_market.interfaces.http.deps import get_ledger_service
from topup_market.modules.accounts import Account
from topup_market.modules.ledger.service import LedgerService
from topup_market.schemas import SettleRequest, TransactionResponse

router = APIRouter()


@router.post(
    "/transactions/{transaction_id}/settle",
    response_model=TransactionResponse,
    summary="Record the fulfillment outcome of a purchase",
)
async def settle_transaction(
    transaction_id: str,
    payload: SettleRequest,
    _: Account = Depends(get_current_admin),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    transaction = await ledger.settle(transaction_id, payload.outcome)
    return TransactionResponse.model_validate(transaction)
