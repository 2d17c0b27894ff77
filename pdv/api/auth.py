"""
Authentication API endpoints
"""

from fastapi import APIRouter, Depends, status
import structlog

from pdv.core.database import get_store
from pdv.core.dependencies import CurrentUser, get_current_user
from pdv.core.security import token_lifetime_seconds
from pdv.core.store import JsonStore
from pdv.schemas.token import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from pdv.schemas.user import MeResponse, TenantResponse, UserResponse
from pdv.services import auth_service, tenant_service

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: JsonStore = Depends(get_store)
):
    """Create a trial store and its admin user"""
    registration = auth_service.register(
        store,
        email=body.email,
        password=body.password,
        name=body.name,
        store_name=body.store_name,
    )
    return RegisterResponse(
        user=UserResponse.model_validate(registration.user.to_document()),
        tenant=TenantResponse.model_validate(registration.tenant.to_document()),
        token=registration.token,
        expires_in=token_lifetime_seconds(),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    store: JsonStore = Depends(get_store)
):
    """Login user"""
    result = auth_service.login(store, email=body.email, password=body.password)
    return LoginResponse(
        user=UserResponse.model_validate(result.user.to_document()),
        token=result.token,
        expires_in=token_lifetime_seconds(),
    )


@router.get("/me", response_model=MeResponse)
def get_current_user_info(
    current_user: CurrentUser = Depends(get_current_user),
    store: JsonStore = Depends(get_store)
):
    """Get current user info"""
    user = auth_service.get_user(store, current_user.id, current_user.tenant_id)
    tenant = tenant_service.get_tenant(store, current_user.tenant_id)
    return MeResponse(
        user=UserResponse.model_validate(user.to_document()),
        tenant=TenantResponse.model_validate(tenant.to_document()),
    )
