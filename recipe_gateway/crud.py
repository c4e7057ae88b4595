from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import ConflictError, StoreError, ValidationError
from .log import get_logger

logger = get_logger(__name__)


def _rollback(db: Session, exc: Exception):
    db.rollback()
    logger.exception("database error: {}", exc)
    return StoreError(str(exc))


def get_user(db: Session, user_id: int):
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, email: str, password_hash: str):
    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")
    db_user = models.User(email=email, password_hash=password_hash)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("Email already registered")
    except SQLAlchemyError as e:
        raise _rollback(db, e) from e
    db.refresh(db_user)
    return db_user


def list_favorites(db: Session, user_id: int):
    return (
        db.query(models.Favorite)
        .filter(models.Favorite.user_id == user_id)
        .order_by(models.Favorite.created_at.desc(),
                  models.Favorite.id.desc())
        .all()
    )


def add_favorite(db: Session, user_id: int,
                 recipe: schemas.FavoriteCreate):
    if not recipe.id or not recipe.id.strip():
        raise ValidationError("Recipe id is required", field="id")
    if not recipe.title or not recipe.title.strip():
        raise ValidationError("Recipe title is required", field="title")
    # duplicates are allowed: each add stores its own snapshot
    db_favorite = models.Favorite(
        user_id=user_id,
        recipe_id=recipe.id.strip(),
        title=recipe.title,
        image=recipe.image,
        category=recipe.category,
        area=recipe.area,
    )
    db.add(db_favorite)
    try:
        db.commit()
    except SQLAlchemyError as e:
        raise _rollback(db, e) from e
    db.refresh(db_favorite)
    return db_favorite


def remove_favorite(db: Session, user_id: int, recipe_id: str) -> int:
    try:
        deleted = (
            db.query(models.Favorite)
            .filter(models.Favorite.user_id == user_id,
                    models.Favorite.recipe_id == recipe_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _rollback(db, e) from e
    return deleted
