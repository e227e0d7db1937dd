import pytest

from apps.listings.tests.factories import make_listing, make_user


@pytest.fixture
def host(db):
    return make_user(email="host@example.com", is_host=True)


@pytest.fixture
def guest(db):
    return make_user(email="guest@example.com")


@pytest.fixture
def listing(host):
    return make_listing(host)
