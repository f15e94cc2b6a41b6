import pytest

from dbss_verify.scheme import issue_member_key, setup_group, sign


@pytest.fixture(scope="session")
def group():
    """Three-manager group and one member credential."""
    gpk, shares = setup_group(3)
    member = issue_member_key(shares)
    return gpk, shares, member


@pytest.fixture(scope="session")
def gpk(group):
    return group[0]


@pytest.fixture(scope="session")
def hoge_signature(group):
    gpk, _shares, member = group
    return sign(b"hoge", member, gpk)
