from datetime import date

import pytest
import pytest_asyncio

from src.app.core.domain.models import Client, Transaction


@pytest_asyncio.fixture
async def two_clients(unit_of_work):
    """Persist two clients with a handful of transactions spread over May 2024."""
    async with unit_of_work:
        ana = await unit_of_work.add(Client(name="Ana", email="ana@example.com", phone="(11) 91234-5678"))
        bia = await unit_of_work.add(Client(name="Bia", email="bia@example.com", phone="(11) 91234-5679"))
        await unit_of_work.add(Transaction(amount=100.0, date=date(2024, 5, 1), client_id=ana.id))
        await unit_of_work.add(Transaction(amount=50.5, date=date(2024, 5, 15), client_id=ana.id))
        await unit_of_work.add(Transaction(amount=20.0, date=date(2024, 5, 31), client_id=ana.id))
        await unit_of_work.add(Transaction(amount=7.25, date=date(2024, 5, 15), client_id=bia.id))
    return ana, bia


@pytest.mark.asyncio
async def test_get_by_id_and_exists(transaction_repository, two_clients):
    ana, _ = two_clients
    [first, *_] = await transaction_repository.get_all()

    found = await transaction_repository.get_by_id(first.id)

    assert found is not None
    assert found.amount == 100.0
    assert found.date == date(2024, 5, 1)
    assert found.client_id == ana.id
    assert await transaction_repository.exists_by_id(first.id) is True
    assert await transaction_repository.get_by_id(999) is None
    assert await transaction_repository.exists_by_id(999) is False


@pytest.mark.asyncio
async def test_find_by_client(transaction_repository, two_clients):
    ana, bia = two_clients

    assert [t.amount for t in await transaction_repository.find_by_client(ana.id)] == [100.0, 50.5, 20.0]
    assert [t.amount for t in await transaction_repository.find_by_client(bia.id)] == [7.25]
    assert await transaction_repository.find_by_client(999) == []


@pytest.mark.asyncio
async def test_find_by_date(transaction_repository, two_clients):
    matches = await transaction_repository.find_by_date(date(2024, 5, 15))

    assert sorted(t.amount for t in matches) == [7.25, 50.5]


@pytest.mark.asyncio
async def test_find_by_date_range_includes_both_ends(transaction_repository, two_clients):
    matches = await transaction_repository.find_by_date_range(date(2024, 5, 1), date(2024, 5, 15))

    assert sorted(t.amount for t in matches) == [7.25, 50.5, 100.0]
    assert await transaction_repository.find_by_date_range(date(2024, 6, 1), date(2024, 6, 30)) == []


@pytest.mark.asyncio
async def test_find_by_client_and_date_range(transaction_repository, two_clients):
    ana, _ = two_clients

    matches = await transaction_repository.find_by_client_and_date_range(
        ana.id, date(2024, 5, 10), date(2024, 5, 31)
    )

    assert [t.amount for t in matches] == [50.5, 20.0]


@pytest.mark.asyncio
async def test_aggregates(transaction_repository, two_clients):
    ana, bia = two_clients

    assert await transaction_repository.sum_amount_by_client(ana.id) == pytest.approx(170.5)
    assert await transaction_repository.count_by_client(ana.id) == 3
    assert await transaction_repository.count_by_client(bia.id) == 1
    assert await transaction_repository.count() == 4


@pytest.mark.asyncio
async def test_sum_for_client_without_transactions_is_zero(transaction_repository, unit_of_work):
    async with unit_of_work:
        lonely = await unit_of_work.add(Client(name="Caio", email="caio@example.com", phone="(11) 3456-7890"))

    total = await transaction_repository.sum_amount_by_client(lonely.id)

    assert total == 0.0
    assert isinstance(total, float)
