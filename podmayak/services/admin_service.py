"""
Admin operations: dashboard stats, user role/plan changes and system settings
"""
import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from podmayak.core.config import settings
from podmayak.database.models import Renovation, SubscriptionPlan, SystemSetting, User, UserRole
from podmayak.schemas.admin import AdminStatsResponse, UserField

logger = logging.getLogger(__name__)

API_KEY_SETTING = "apiKey"

PLAN_CYCLE = {
    SubscriptionPlan.FREE: SubscriptionPlan.PRO,
    SubscriptionPlan.PRO: SubscriptionPlan.ENTERPRISE,
    SubscriptionPlan.ENTERPRISE: SubscriptionPlan.FREE,
}


class AdminService:
    """Service for admin dashboard operations"""

    async def list_users(self, db: AsyncSession) -> List[User]:
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def get_stats(self, db: AsyncSession) -> AdminStatsResponse:
        """User counts, generation count and the monthly revenue estimate from plan prices"""
        result = await db.execute(select(User.plan, func.count(User.id)).group_by(User.plan))
        plan_counts = {SubscriptionPlan(plan): count for plan, count in result.all()}

        total_generations = (await db.execute(select(func.count(Renovation.id)))).scalar_one()

        return AdminStatsResponse(
            total_users=sum(plan_counts.values()),
            pro_users=plan_counts.get(SubscriptionPlan.PRO, 0) + plan_counts.get(SubscriptionPlan.ENTERPRISE, 0),
            total_generations=total_generations,
            total_revenue=sum(settings.plan_prices.get(plan.value, 0) * count for plan, count in plan_counts.items()),
        )

    async def cycle_user_field(self, db: AsyncSession, user: User, field: UserField) -> User:
        """Toggle role user <-> admin, or advance plan free -> pro -> enterprise -> free"""
        if field == UserField.ROLE:
            user.role = UserRole.USER if user.role == UserRole.ADMIN else UserRole.ADMIN
        else:
            user.plan = PLAN_CYCLE[SubscriptionPlan(user.plan)]

        await db.commit()
        await db.refresh(user)
        logger.info(f"Admin changed {field.value} of user {user.id}: role={user.role.value}, plan={user.plan.value}")
        return user

    async def get_system_setting(self, db: AsyncSession, key: str) -> Optional[Any]:
        result = await db.execute(select(SystemSetting.value).where(SystemSetting.key == key))
        return result.scalar_one_or_none()

    async def set_system_setting(self, db: AsyncSession, key: str, value: Any, updated_by: Optional[str] = None):
        await db.merge(SystemSetting(key=key, value=value, updated_by=updated_by))
        await db.commit()
        logger.info(f"System setting '{key}' updated by {updated_by}")

    async def get_api_key_override(self, db: AsyncSession) -> Optional[str]:
        """Admin-provided generation key, which takes precedence over the environment key"""
        value = await self.get_system_setting(db, API_KEY_SETTING)
        return value or None


# Global service instance
admin_service = AdminService()
