"""
Wasla - Schemas
"""
from wasla.schemas.common import PaginatedResponse, MessageResponse
from wasla.schemas.auth import (
    LoginRequest, TokenResponse, RefreshRequest, ChangePasswordRequest,
    UserResponse, TenantCreate, TenantResponse
)
from wasla.schemas.staff import StaffCreate, StaffUpdate
from wasla.schemas.tenant import (
    TenantAdminResponse, TenantToggleRequest, SubscriptionUpdateRequest,
    ExtendTrialRequest, ActivateSubscriptionRequest, TrialStatusResponse, PlatformStats
)
from wasla.schemas.subscriber import (
    SubscriberCreate, SubscriberUpdate, SubscriberResponse, RenewRequest
)
from wasla.schemas.package import PackageCreate, PackageUpdate, PackageResponse
from wasla.schemas.network import RouterCreate, RouterUpdate, RouterResponse
from wasla.schemas.sale import SaleCreate, SaleUpdate, SaleResponse
from wasla.schemas.payment import PaymentCreate, PaymentResponse
from wasla.schemas.activity import ActivityLogResponse, ActivityLogGroup
from wasla.schemas.dashboard import DashboardStats, MonthPoint, MonthlyReport
