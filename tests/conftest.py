import pytest

from gascaplogic.schema import Restriction, Subscriber


@pytest.fixture
def stepped_restriction():
    # 30% from the epoch, 50% from 1404/10/15
    return Restriction(
        tariff_code="7",
        periods=[
            {"effective_from": "1404/09/28", "percentage": 30},
            {"effective_from": "1404/10/15", "percentage": 50},
        ],
    )


@pytest.fixture
def flat_restriction():
    return Restriction.seed("7", 30)


@pytest.fixture
def subscribers():
    return [
        Subscriber(
            subscription_id="S1",
            name="Tile works",
            city="Yazd",
            tariff_code="7",
            baseline=5000,
            daily=[3000, 3200, 4000, -1],
        ),
        Subscriber(
            subscription_id="S2",
            name="Glass plant",
            city="Meybod",
            tariff_code="7",
            baseline=5000,
            daily=[3000, 3100, 3400],
        ),
        Subscriber(
            subscription_id="S3",
            name="Brick kiln",
            city="Ardakan",
            tariff_code="4",
            baseline=1000,
            daily=[1700, None, 1800],
        ),
        Subscriber(
            subscription_id="S4",
            name="No baseline",
            city="Yazd",
            tariff_code="4",
            baseline=None,
            daily=[500],
        ),
        Subscriber(
            subscription_id="S5",
            name="No readings",
            city="Yazd",
            tariff_code="4",
            baseline=1000,
            daily=[-1, -1],
        ),
    ]
