# server/api/transactions.py

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from api.auth import get_current_user_id
from api.live import TRANSACTION_EVENT, publish
from core.errors import NotAuthorizedForResource, NotFound, ValidationError
from database import get_db
from models.product import Product
from models.transaction import Transaction
from models.user import User
from schemas import TransactionCreate, TransactionOut, TransactionStatusUpdate


router = APIRouter()


def _with_parties(query):
    return query.options(
        joinedload(Transaction.from_user),
        joinedload(Transaction.to_user),
        joinedload(Transaction.product),
    )


def get_party_transaction(db: Session, transaction_id: int, user_id: int) -> Transaction:
    """
    Loads a transaction the requester is a party to, either as sender or
    recipient. Anyone else gets the same 404 as a missing id.
    """
    tx = db.get(Transaction, transaction_id)
    if tx is None:
        raise NotFound()
    if user_id not in (tx.from_user_id, tx.to_user_id):
        raise NotAuthorizedForResource()
    return tx


@router.get("/transactions", response_model=list[TransactionOut])
def list_transactions(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    txs = (
        _with_parties(db.query(Transaction))
        .filter(or_(Transaction.from_user_id == user_id, Transaction.to_user_id == user_id))
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .all()
    )
    return [TransactionOut.model_validate(tx) for tx in txs]


@router.post("/transactions", response_model=TransactionOut)
def create_transaction(
    req: TransactionCreate,
    background_tasks: BackgroundTasks,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if db.get(User, req.to_user_id) is None:
        raise ValidationError("Unable to create transaction")
    if req.product_id is not None and db.get(Product, req.product_id) is None:
        raise ValidationError("Unable to create transaction")

    tx = Transaction(
        from_user_id=user_id,
        to_user_id=req.to_user_id,
        product_id=req.product_id,
        amount=req.amount,
    )
    db.add(tx)
    db.commit()
    db.refresh(tx)

    result = TransactionOut.model_validate(tx)
    publish(background_tasks, TRANSACTION_EVENT, result.to_json())
    return result


@router.get("/transactions/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    transaction_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    tx = get_party_transaction(db, transaction_id, user_id)
    return TransactionOut.model_validate(tx)


@router.patch("/transactions/{transaction_id}", response_model=TransactionOut)
def update_transaction_status(
    transaction_id: int,
    req: TransactionStatusUpdate,
    background_tasks: BackgroundTasks,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    tx = get_party_transaction(db, transaction_id, user_id)
    tx.status = req.status
    db.commit()
    db.refresh(tx)

    result = TransactionOut.model_validate(tx)
    publish(background_tasks, TRANSACTION_EVENT, result.to_json())
    return result
