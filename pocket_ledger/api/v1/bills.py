"""/v1/bills - scheduled payment obligations"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pocket_ledger.api.v1.schemas import BillCreate, BillListResponse, BillResponse
from pocket_ledger.api.dependencies import get_current_user_id, parse_record_id
from pocket_ledger.domain.models import BillDraft
from pocket_ledger.infrastructure.database.session import get_db
from pocket_ledger.infrastructure.database.repositories import BillRepository

router = APIRouter()


@router.post("/bills", response_model=BillResponse, status_code=201)
def create_bill(
    request_body: BillCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a one-off bill"""
    bill_repo = BillRepository(db)
    bill = bill_repo.create_bill(
        BillDraft(
            user_id=user_id,
            name=request_body.name,
            amount_cents=request_body.amount_cents,
            due_date=request_body.due_date,
        )
    )
    db.commit()
    return BillResponse.model_validate(bill)


@router.get("/bills", response_model=BillListResponse)
def list_bills(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Bills ordered by due date, earliest first"""
    bills = BillRepository(db).list_bills(user_id)
    return BillListResponse(user_id=user_id, bills=[BillResponse.model_validate(b) for b in bills])


@router.post("/bills/{bill_id}/pay", response_model=BillResponse)
def pay_bill(
    bill_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Mark a bill as paid; paying twice is a no-op"""
    bill_uuid = parse_record_id(bill_id, "bill")

    bill_repo = BillRepository(db)
    bill = bill_repo.get_bill(user_id, bill_uuid)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")

    bill_repo.mark_paid(bill)
    db.commit()
    return BillResponse.model_validate(bill)


@router.delete("/bills/{bill_id}", status_code=204)
def delete_bill(
    bill_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    bill_uuid = parse_record_id(bill_id, "bill")

    bill_repo = BillRepository(db)
    bill = bill_repo.get_bill(user_id, bill_uuid)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")

    bill_repo.delete_bill(bill)
    db.commit()
