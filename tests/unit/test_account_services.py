"""
Unit tests for auth, token, draft and admin services against a SQLite database
"""
import pytest
import pytest_asyncio

from podmayak.core.errors import AuthError, AuthErrorCode, InsufficientTokensError
from podmayak.database.models import Renovation, SubscriptionPlan, UserRole
from podmayak.schemas.admin import UserField
from podmayak.schemas.drafts import DraftUpdate
from podmayak.schemas.renovation import RenovationConfig
from podmayak.services.admin_service import API_KEY_SETTING, admin_service
from podmayak.services.auth_service import auth_service
from podmayak.services.draft_service import draft_service
from podmayak.services.token_service import token_service


@pytest_asyncio.fixture
async def user(db_session):
    return await auth_service.create_user(db_session, email="Nigar@Podmayak.az", password="secret123")


class TestAuthService:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_new_user_defaults(self, user):
        assert user.email == "nigar@podmayak.az"
        assert user.display_name == "nigar"
        assert user.role == UserRole.USER
        assert user.plan == SubscriptionPlan.FREE
        assert user.tokens == 5

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_weak_password(self, db_session):
        with pytest.raises(AuthError) as exc_info:
            await auth_service.register_user(db_session, "a@podmayak.az", "123")
        assert exc_info.value.auth_code == AuthErrorCode.WEAK_PASSWORD

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_duplicate_email(self, db_session, user):
        with pytest.raises(AuthError) as exc_info:
            await auth_service.register_user(db_session, "NIGAR@podmayak.az", "secret123")
        assert exc_info.value.auth_code == AuthErrorCode.EMAIL_ALREADY_IN_USE

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_authenticate(self, db_session, user):
        authenticated = await auth_service.authenticate_user(db_session, "nigar@podmayak.az", "secret123")
        assert authenticated.id == user.id
        assert authenticated.last_login is not None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session, user):
        with pytest.raises(AuthError) as exc_info:
            await auth_service.authenticate_user(db_session, "nigar@podmayak.az", "wrong-password")
        assert exc_info.value.auth_code == AuthErrorCode.INVALID_CREDENTIAL

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        with pytest.raises(AuthError):
            await auth_service.authenticate_user(db_session, "nobody@podmayak.az", "secret123")

    @pytest.mark.unit
    def test_token_roundtrip(self):
        token = auth_service.create_access_token({"sub": "user-1"})
        assert auth_service.decode_token(token)["sub"] == "user-1"
        assert auth_service.decode_token("not-a-token") is None


class TestTokenService:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_deduct(self, db_session, user):
        assert await token_service.deduct_token(db_session, user.id) is True
        assert await token_service.get_balance(db_session, user.id) == 4

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_never_below_zero(self, db_session, user):
        for _ in range(5):
            assert await token_service.deduct_token(db_session, user.id)
        assert await token_service.deduct_token(db_session, user.id) is False
        assert await token_service.get_balance(db_session, user.id) == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_ensure_can_spend(self, db_session, user):
        await token_service.ensure_can_spend(db_session, user.id)
        await token_service.deduct_token(db_session, user.id, amount=5)
        with pytest.raises(InsufficientTokensError):
            await token_service.ensure_can_spend(db_session, user.id)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_add_tokens(self, db_session, user):
        assert await token_service.add_tokens(db_session, user.id, 25) == 30

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_add_requires_positive_amount(self, db_session, user):
        with pytest.raises(ValueError):
            await token_service.add_tokens(db_session, user.id, 0)


class TestDraftService:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_save_and_get(self, db_session, user):
        config = RenovationConfig(color_preference=["White"])
        saved = await draft_service.save(db_session, user.id, DraftUpdate(image="data:image/png;base64,AAAA", config=config))

        assert saved.image == "data:image/png;base64,AAAA"
        assert saved.image_dropped is False
        draft = await draft_service.get(db_session, user.id)
        assert draft.config["color_preference"] == ["White"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_oversized_image_dropped(self, db_session, user, monkeypatch):
        monkeypatch.setattr("podmayak.services.draft_service.settings.draft_max_image_chars", 10)

        saved = await draft_service.save(
            db_session, user.id, DraftUpdate(image="data:image/png;base64," + "A" * 40, config=RenovationConfig())
        )

        assert saved.image is None
        assert saved.image_dropped is True
        assert saved.config == RenovationConfig()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delete(self, db_session, user):
        await draft_service.save(db_session, user.id, DraftUpdate(config=RenovationConfig()))
        assert await draft_service.delete(db_session, user.id) is True
        assert await draft_service.get(db_session, user.id) is None
        assert await draft_service.delete(db_session, user.id) is False


class TestAdminService:

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_role_toggles(self, db_session, user):
        user = await admin_service.cycle_user_field(db_session, user, UserField.ROLE)
        assert user.role == UserRole.ADMIN
        user = await admin_service.cycle_user_field(db_session, user, UserField.ROLE)
        assert user.role == UserRole.USER

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_plan_cycles(self, db_session, user):
        plans = []
        for _ in range(3):
            user = await admin_service.cycle_user_field(db_session, user, UserField.PLAN)
            plans.append(user.plan)
        assert plans == [SubscriptionPlan.PRO, SubscriptionPlan.ENTERPRISE, SubscriptionPlan.FREE]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stats(self, db_session, user):
        other = await auth_service.create_user(db_session, email="pro@podmayak.az", password="secret123")
        await admin_service.cycle_user_field(db_session, other, UserField.PLAN)
        db_session.add(
            Renovation(
                user_id=user.id,
                original_image="/static/uploads/a.png",
                generated_image="/static/uploads/b.png",
                config=RenovationConfig().model_dump(mode="json"),
                timestamp=1,
            )
        )
        await db_session.commit()

        stats = await admin_service.get_stats(db_session)

        assert stats.total_users == 2
        assert stats.pro_users == 1
        assert stats.total_generations == 1
        assert stats.total_revenue == 29

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_api_key_override(self, db_session, user):
        assert await admin_service.get_api_key_override(db_session) is None

        await admin_service.set_system_setting(db_session, API_KEY_SETTING, "admin-key", updated_by=user.id)
        assert await admin_service.get_api_key_override(db_session) == "admin-key"

        await admin_service.set_system_setting(db_session, API_KEY_SETTING, "")
        assert await admin_service.get_api_key_override(db_session) is None
