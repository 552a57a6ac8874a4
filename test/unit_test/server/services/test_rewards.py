import pytest

from teestore.core.errors import BusinessRuleError, NotFoundError
from teestore.server.services.rewards import RewardService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def rewards(repos, pricing) -> RewardService:
    return RewardService(repos, pricing)


class TestRewardBalance:
    async def test_balance_value_in_rupees(self, rewards, customer):
        balance = rewards.balance(customer)

        assert balance.points == 100
        assert balance.value == 50.0
        assert balance.max_points_per_order == 50


class TestAdjust:
    """Test manual point adjustments."""

    async def test_credit_is_recorded_in_ledger(self, rewards, session, customer, admin):
        transaction = await rewards.adjust(customer.id, 40, "Goodwill", admin.id)

        assert transaction.type == "admin_adjustment"
        assert transaction.amount == 40
        assert transaction.balance == 140
        assert transaction.admin_user_id == admin.id

        await session.refresh(customer)
        assert customer.reward_points == 140

    async def test_debit_down_to_zero(self, rewards, customer, admin):
        transaction = await rewards.adjust(customer.id, -100, "Expired", admin.id)

        assert transaction.balance == 0

    async def test_balance_cannot_go_negative(self, rewards, session, customer, admin):
        with pytest.raises(BusinessRuleError, match="Insufficient points"):
            await rewards.adjust(customer.id, -101, "Too much", admin.id)

        await session.refresh(customer)
        assert customer.reward_points == 100

    async def test_zero_adjustment_is_rejected(self, rewards, customer, admin):
        with pytest.raises(BusinessRuleError):
            await rewards.adjust(customer.id, 0, "Nothing", admin.id)

    async def test_unknown_user(self, rewards, admin):
        with pytest.raises(NotFoundError):
            await rewards.adjust(999, 10, "Ghost", admin.id)

    async def test_history_newest_first(self, rewards, customer, admin):
        await rewards.adjust(customer.id, 10, "First", admin.id)
        await rewards.adjust(customer.id, 20, "Second", admin.id)
        await rewards.adjust(customer.id, -5, "Third", admin.id)

        history = await rewards.history(customer.id)
        assert [t.description for t in history] == ["Third", "Second", "First"]

        page = await rewards.history(customer.id, limit=1, offset=1)
        assert [t.description for t in page] == ["Second"]
