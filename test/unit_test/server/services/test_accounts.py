"""
Unit tests for the account service: signup, signin, profile and the
address book.
"""

import pytest

from teestore.core.errors import AuthenticationError, BusinessRuleError, ConflictError, NotFoundError
from teestore.core.models.io.auth import SigninRequest, SignupRequest
from teestore.core.models.io.users import AddressCreate, AddressUpdate, PasswordChange, UserUpdate
from teestore.core.security import decode_access_token, verify_password
from teestore.server.services.accounts import AccountService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def accounts(repos) -> AccountService:
    return AccountService(repos)


def _address(**fields) -> AddressCreate:
    values = {
        "full_name": "Asha Rao",
        "phone": "9876543210",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "KA",
        "pin_code": "560001",
    }
    values.update(fields)
    return AddressCreate.model_validate(values)


class TestSignup:
    async def test_password_is_hashed(self, accounts):
        user = await accounts.signup(SignupRequest(name=" Meera ", email="meera@example.com", password="hunter22"))

        assert user.id is not None
        assert user.name == "Meera"
        assert user.role == 0
        assert user.password_hash != "hunter22"
        assert verify_password("hunter22", user.password_hash)

    async def test_duplicate_email(self, accounts, customer):
        with pytest.raises(ConflictError):
            await accounts.signup(SignupRequest(name="Asha", email=customer.email, password="secret123"))


class TestSignin:
    """Test signing in."""

    async def test_token_identifies_user(self, accounts, customer):
        response = await accounts.signin(SigninRequest(email=customer.email, password="secret123"))

        assert response.user.id == customer.id
        assert response.user.role == 0
        assert decode_access_token(response.token) == customer.id
        assert response.expiry_time > 0

    async def test_unknown_email(self, accounts):
        with pytest.raises(BusinessRuleError, match="does not exist"):
            await accounts.signin(SigninRequest(email="nobody@example.com", password="secret123"))

    async def test_wrong_password(self, accounts, customer):
        with pytest.raises(AuthenticationError):
            await accounts.signin(SigninRequest(email=customer.email, password="wrong-password"))

    async def test_deactivated_account(self, accounts, customer):
        await accounts.deactivate(customer)

        with pytest.raises(AuthenticationError, match="deactivated"):
            await accounts.signin(SigninRequest(email=customer.email, password="secret123"))


class TestProfile:
    async def test_update_profile(self, accounts, customer):
        user = await accounts.update_profile(customer, UserUpdate(city="Mysuru", phone="99"))

        assert user.city == "Mysuru"
        assert user.phone == "99"
        assert user.email == "asha@example.com"

    async def test_email_taken_by_someone_else(self, accounts, customer, other_customer):
        with pytest.raises(ConflictError):
            await accounts.update_profile(customer, UserUpdate(email=other_customer.email))

    async def test_change_password(self, accounts, customer):
        await accounts.change_password(customer, PasswordChange(current_password="secret123", new_password="newpass1"))

        assert verify_password("newpass1", customer.password_hash)

    async def test_change_password_requires_current(self, accounts, customer):
        with pytest.raises(BusinessRuleError):
            await accounts.change_password(customer, PasswordChange(current_password="nope", new_password="newpass1"))


class TestAddressBook:
    """Test the single-default invariant of saved addresses."""

    async def test_first_address_becomes_default(self, accounts, customer):
        addresses = await accounts.add_address(customer, _address())

        assert len(addresses) == 1
        assert addresses[0]["is_default"] is True
        assert addresses[0]["id"]

    async def test_new_default_replaces_old(self, accounts, customer):
        await accounts.add_address(customer, _address(city="Bengaluru"))
        await accounts.add_address(customer, _address(city="Mysuru"))
        addresses = await accounts.add_address(customer, _address(city="Chennai", is_default=True))

        defaults = [address["city"] for address in addresses if address["is_default"]]
        assert defaults == ["Chennai"]

    async def test_update_address(self, accounts, customer):
        first = (await accounts.add_address(customer, _address()))[0]
        second = (await accounts.add_address(customer, _address(city="Mysuru")))[1]

        addresses = await accounts.update_address(customer, second["id"], AddressUpdate(phone="11", is_default=True))

        by_id = {address["id"]: address for address in addresses}
        assert by_id[second["id"]]["phone"] == "11"
        assert by_id[second["id"]]["is_default"] is True
        assert by_id[first["id"]]["is_default"] is False

    async def test_deleting_default_promotes_next(self, accounts, customer):
        first = (await accounts.add_address(customer, _address()))[0]
        await accounts.add_address(customer, _address(city="Mysuru"))

        addresses = await accounts.delete_address(customer, first["id"])

        assert len(addresses) == 1
        assert addresses[0]["city"] == "Mysuru"
        assert addresses[0]["is_default"] is True

    async def test_unknown_address(self, accounts, customer):
        with pytest.raises(NotFoundError):
            await accounts.delete_address(customer, "missing")
        with pytest.raises(NotFoundError):
            await accounts.update_address(customer, "missing", AddressUpdate(city="X"))
