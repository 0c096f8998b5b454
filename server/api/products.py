# server/api/products.py

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session, joinedload
from api.auth import get_current_user_id
from api.live import PRODUCT_DELETE_EVENT, PRODUCT_EVENT, publish
from core.errors import NotAuthorizedForResource, NotFound, ValidationError
from database import get_db
from models.product import Product
from schemas import ProductCreate, ProductOut, ProductUpdate


router = APIRouter()


def get_owned_product(db: Session, product_id: int, user_id: int) -> Product:
    """
    Loads a product the requester owns. Missing and foreign products raise
    the same 404 so ownership is never disclosed.
    """
    product = db.get(Product, product_id)
    if product is None:
        raise NotFound()
    if product.user_id != user_id:
        raise NotAuthorizedForResource()
    return product


@router.get("/products", response_model=list[ProductOut])
def list_products(db: Session = Depends(get_db)):
    products = (
        db.query(Product)
        .options(joinedload(Product.user))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    return [ProductOut.model_validate(p) for p in products]


@router.post("/products", response_model=ProductOut)
def create_product(
    req: ProductCreate,
    background_tasks: BackgroundTasks,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    product = Product(
        name=req.name,
        price=req.price,
        description=req.description,
        user_id=user_id,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    result = ProductOut.model_validate(product)
    publish(background_tasks, PRODUCT_EVENT, result.to_json())
    return result


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if product is None:
        raise NotFound()
    return ProductOut.model_validate(product)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    req: ProductUpdate,
    background_tasks: BackgroundTasks,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    product = get_owned_product(db, product_id, user_id)

    changes = req.model_dump(exclude_unset=True)
    for field in ("name", "price"):
        if field in changes and changes[field] is None:
            raise ValidationError()
    for field, value in changes.items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)

    result = ProductOut.model_validate(product)
    publish(background_tasks, PRODUCT_EVENT, result.to_json())
    return result


@router.delete("/products/{product_id}")
def delete_product(
    product_id: int,
    background_tasks: BackgroundTasks,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    product = get_owned_product(db, product_id, user_id)
    db.delete(product)
    db.commit()

    publish(background_tasks, PRODUCT_DELETE_EVENT, {"id": product_id})
    return {"id": product_id}
