import pytest

from test.constants import (
    ANOTHER_USER_EMAIL,
    ANOTHER_USER_NAME,
    TEST_MERCHANT_EMAIL,
    TEST_MERCHANT_NAME,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)


@pytest.fixture
async def merchant_token(register_account, login_token) -> str:
    await register_account(name=TEST_MERCHANT_NAME, email=TEST_MERCHANT_EMAIL, role='merchant')
    return await login_token(email=TEST_MERCHANT_EMAIL)


@pytest.fixture
async def user_token(register_account, login_token) -> str:
    await register_account(name=TEST_USER_NAME, email=TEST_USER_EMAIL)
    return await login_token(email=TEST_USER_EMAIL)


@pytest.fixture
async def another_user_token(register_account, login_token) -> str:
    await register_account(name=ANOTHER_USER_NAME, email=ANOTHER_USER_EMAIL)
    return await login_token(email=ANOTHER_USER_EMAIL)
