import pytest

from starledger import Blockchain, address_from_public_key, generate_keypair


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def chain(clock):
    return Blockchain(clock=clock)


@pytest.fixture
def trusting_chain(clock):
    # Accepts any signature, for tests that only exercise chain mechanics
    return Blockchain(clock=clock, verifier=lambda message, address, signature: True)


@pytest.fixture(scope="session")
def wallet():
    private_hex, public_hex = generate_keypair()
    return {
        "address": address_from_public_key(public_hex),
        "private_key": private_hex,
        "public_key": public_hex,
    }


@pytest.fixture(scope="session")
def other_wallet():
    private_hex, public_hex = generate_keypair()
    return {
        "address": address_from_public_key(public_hex),
        "private_key": private_hex,
        "public_key": public_hex,
    }
