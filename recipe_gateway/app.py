import time
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from . import crud, schemas
from .accounts import AccountStore, Identity
from .config import Settings, get_settings
from .db import SessionLocal, init_db
from .errors import AuthError, register_exception_handlers
from .log import get_logger, setup_logging
from .search import RecipeSearch
from .upstream import MealDBClient

logger = get_logger(__name__)
bearer = HTTPBearer(auto_error=False)


def _mealdb_client(settings: Settings) -> MealDBClient:
    return MealDBClient(settings.mealdb_base_url,
                        timeout=settings.http_timeout)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, json=settings.log_json)
    init_db()
    app.state.mealdb = _mealdb_client(settings)
    logger.info("recipe gateway started, upstream {}",
                settings.mealdb_base_url)
    yield
    await app.state.mealdb.aclose()


settings = get_settings()
app = FastAPI(title="Recipe Gateway", lifespan=lifespan)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("{} {} -> {} ({:.1f} ms)", request.method, request.url.path,
                response.status_code, elapsed)
    return response


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_upstream(request: Request) -> MealDBClient:
    client = getattr(request.app.state, "mealdb", None)
    if client is None:
        # lifespan didn't run (e.g. embedded without startup events)
        client = request.app.state.mealdb = _mealdb_client(get_settings())
    return client


def get_search(client: MealDBClient = Depends(get_upstream)) -> RecipeSearch:
    return RecipeSearch(client)


def get_accounts(db: Session = Depends(get_db),
                 settings: Settings = Depends(get_settings)) -> AccountStore:
    return AccountStore(
        db,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl=timedelta(minutes=settings.token_ttl_minutes),
    )


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    accounts: AccountStore = Depends(get_accounts),
) -> Identity:
    if credentials is None:
        raise AuthError("Authentication required")
    return accounts.verify(credentials.credentials)


router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


# -- auth --

@router.post("/auth/register", status_code=status.HTTP_201_CREATED,
             response_model=schemas.UserOut)
def register(body: schemas.Credentials,
             accounts: AccountStore = Depends(get_accounts)):
    return accounts.register(body.email, body.password)


@router.post("/auth/login", response_model=schemas.LoginResponse)
def login(body: schemas.Credentials,
          accounts: AccountStore = Depends(get_accounts)):
    token, user = accounts.authenticate(body.email, body.password)
    return {"token": token,
            "user": {"id": user.id, "email": user.email}}


@router.get("/auth/me", response_model=schemas.UserOut)
def me(identity: Identity = Depends(get_identity),
       db: Session = Depends(get_db)):
    # a valid token can outlive its user row only if the db was reset
    if crud.get_user(db, identity.user_id) is None:
        raise AuthError("Invalid token")
    return {"id": identity.user_id, "email": identity.email}


# -- recipes --

@router.get("/recipes/search", response_model=List[schemas.RecipeSummary])
async def search_recipes(q: str | None = None, category: str | None = None,
                         area: str | None = None,
                         search: RecipeSearch = Depends(get_search)):
    return await search.search(q, category=category, area=area)


@router.get("/recipes/categories", response_model=List[str])
async def list_categories(search: RecipeSearch = Depends(get_search)):
    return await search.categories()


@router.get("/recipes/areas", response_model=List[str])
async def list_areas(search: RecipeSearch = Depends(get_search)):
    return await search.areas()


@router.get("/recipes/random", response_model=schemas.Recipe)
async def random_recipe(search: RecipeSearch = Depends(get_search)):
    return await search.random_recipe()


@router.post("/recipes/by-ingredients",
             response_model=List[schemas.RecipeSummary])
async def recipes_by_ingredients(body: schemas.IngredientSearch,
                                 search: RecipeSearch = Depends(get_search)):
    return await search.search_by_ingredients(body.ingredients, body.exclude)


@router.get("/recipes/{recipe_id}", response_model=schemas.Recipe)
async def view_recipe(recipe_id: str,
                      search: RecipeSearch = Depends(get_search)):
    return await search.get_recipe(recipe_id)


# -- favorites --

@router.get("/favorites", response_model=List[schemas.Favorite])
def list_favorites(identity: Identity = Depends(get_identity),
                   db: Session = Depends(get_db)):
    return [schemas.Favorite.from_row(f)
            for f in crud.list_favorites(db, identity.user_id)]


@router.post("/favorites", status_code=status.HTTP_201_CREATED,
             response_model=schemas.FavoriteAdded)
def add_favorite(body: schemas.FavoriteCreate,
                 identity: Identity = Depends(get_identity),
                 db: Session = Depends(get_db)):
    favorite = crud.add_favorite(db, identity.user_id, body)
    return schemas.FavoriteAdded(message="Added to favorites",
                                 favorite_id=favorite.id)


@router.delete("/favorites/{recipe_id}", response_model=schemas.FavoriteRemoved)
def remove_favorite(recipe_id: str,
                    identity: Identity = Depends(get_identity),
                    db: Session = Depends(get_db)):
    deleted = crud.remove_favorite(db, identity.user_id, recipe_id)
    return {"message": "Removed from favorites", "deleted": deleted}


app.include_router(router, prefix=settings.api_prefix)
