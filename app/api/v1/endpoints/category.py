from typing import List
import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.api import deps
from app.core.cache import CATEGORY_TREE_PATTERN, category_tree_key, clear_cache_pattern, get_cache, set_cache
from app.core.config import settings
from app.core.permissions import PagePermission
from app.db.session import get_db
from app.models.category import Category as CategoryModel
from app.models.user import User as UserModel
from app.schemas.category import Category, CategoryCreate, CategoryNode, CategoryUpdate, ChildCount
from app.utils.category import (
    CategoryCycleError,
    build_category_tree,
    calculate_level,
    flatten_category_tree,
    generate_unique_slug,
    get_category_path,
    get_child_count,
    get_descendant_ids,
    next_sort_order,
    would_create_cycle,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Standard error messages
CATEGORY_NOT_FOUND = "Category not found"
PARENT_NOT_FOUND = "Parent category not found"

def _ordered_categories(db: Session, include_inactive: bool = True) -> List[CategoryModel]:
    query = db.query(CategoryModel)
    if not include_inactive:
        query = query.filter(CategoryModel.is_active.is_(True))
    return query.order_by(CategoryModel.sort_order, CategoryModel.name).all()

def _get_or_404(db: Session, category_id: str, detail: str = CATEGORY_NOT_FOUND) -> CategoryModel:
    category = db.query(CategoryModel).filter(CategoryModel.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return category

def _invalidate_tree_cache() -> None:
    clear_cache_pattern(CATEGORY_TREE_PATTERN)

@router.get("/", response_model=List[CategoryNode])
async def get_category_tree(
    include_inactive: bool = True,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.DASHBOARD))
):
    """Retrieve all categories as a tree of root categories with nested children"""
    try:
        cache_key = category_tree_key(include_inactive)
        cached_data = get_cache(cache_key)
        if cached_data is not None:
            return cached_data

        tree = build_category_tree(_ordered_categories(db, include_inactive))
        data = jsonable_encoder(tree)
        set_cache(cache_key, data, expire=settings.CATEGORY_TREE_CACHE_TTL)
        return data

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building category tree: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving categories"
        )

@router.get("/flat", response_model=List[Category])
async def get_flat_categories(
    include_inactive: bool = True,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.DASHBOARD))
):
    """
    List categories flat, in tree order (each parent followed by its children).
    """
    tree = build_category_tree(_ordered_categories(db, include_inactive))
    return [
        Category.model_validate(node.model_dump(exclude={"children", "product_count"}))
        for node in flatten_category_tree(tree)
    ]

@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.DASHBOARD))
):
    """
    Get a specific category by ID.
    """
    return _get_or_404(db, category_id)

@router.get("/{category_id}/path", response_model=List[Category])
async def get_category_breadcrumb(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.DASHBOARD))
):
    """
    Get the breadcrumb of a category, root first.
    """
    categories = db.query(CategoryModel).all()
    try:
        path = get_category_path(categories, category_id)
    except CategoryCycleError as e:
        logger.error(str(e))
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not path:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CATEGORY_NOT_FOUND)
    return path

@router.get("/{category_id}/children/count", response_model=ChildCount)
async def count_children(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.DASHBOARD))
):
    rows = db.query(CategoryModel.id, CategoryModel.parent_id).all()
    return ChildCount(category_id=category_id, count=get_child_count(rows, category_id))

@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.CATEGORIES))
):
    """
    Create a new category (admin only).
    """
    parent_id = category.parent_id or None
    if parent_id:
        _get_or_404(db, parent_id, PARENT_NOT_FOUND)

    existing = db.query(CategoryModel).all()
    db_category = CategoryModel(
        id=f"cat_{uuid.uuid4()}",
        name=category.name,
        slug=generate_unique_slug(category.name, [c.slug for c in existing]),
        description=category.description,
        parent_id=parent_id,
        level=calculate_level(existing, parent_id),
        sort_order=next_sort_order(existing, parent_id),
        is_active=True,
        image=category.image,
    )
    db.add(db_category)
    try:
        db.commit()
    except IntegrityError:
        # Another request stored the same slug between our read and this insert
        db.rollback()
        logger.warning(f"Slug conflict while creating category {db_category.slug!r}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A category with this slug already exists, please retry"
        )
    db.refresh(db_category)
    logger.info(f"Category {db_category.id} ({db_category.slug}) created by user {current_user.id}")

    _invalidate_tree_cache()
    return db_category

@router.patch("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    category: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.CATEGORIES))
):
    """
    Update a category (admin only). Moving it under a new parent recomputes the
    level of the category and everything below it.
    """
    db_category = _get_or_404(db, category_id)
    data = category.model_dump(exclude_unset=True)

    if "parent_id" in data:
        new_parent_id = data.pop("parent_id") or None
        if new_parent_id != db_category.parent_id:
            if new_parent_id:
                _get_or_404(db, new_parent_id, PARENT_NOT_FOUND)
            # Lock the rows so a concurrent move cannot slip a cycle past this check
            categories = (
                db.query(CategoryModel)
                .with_for_update()
                .populate_existing()
                .all()
            )
            if would_create_cycle(categories, category_id, new_parent_id):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="A category cannot be moved under itself or one of its descendants"
                )
            new_level = calculate_level(categories, new_parent_id)
            new_sort_order = next_sort_order(categories, new_parent_id)
            delta = new_level - (db_category.level or 0)
            if delta:
                descendant_ids = set(get_descendant_ids(categories, category_id))
                for row in categories:
                    if row.id in descendant_ids:
                        row.level = (row.level or 0) + delta
            db_category.parent_id = new_parent_id
            db_category.level = new_level
            db_category.sort_order = new_sort_order

    for key, value in data.items():
        if value is None and key in ("name", "is_active", "sort_order"):
            continue
        setattr(db_category, key, value)

    db.commit()
    db.refresh(db_category)
    logger.info(f"Category {category_id} updated by user {current_user.id}")

    _invalidate_tree_cache()
    return db_category

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(deps.require_page_access(PagePermission.CATEGORIES))
):
    """
    Delete a category (admin only). Categories with children must be emptied first.
    """
    category = _get_or_404(db, category_id)

    rows = db.query(CategoryModel.id, CategoryModel.parent_id).all()
    children = get_child_count(rows, category_id)
    if children:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category still has {children} subcategories"
        )

    db.delete(category)
    db.commit()
    logger.info(f"Category {category_id} deleted by user {current_user.id}")

    _invalidate_tree_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
