import pytest

from utils.unified_schema import EntityStatements

from factories import income_record


@pytest.fixture
def make_entity():
    def _make(entity_id, income=None, balance_sheet=None, cash_flow=None, **ttm):
        return EntityStatements.from_raw(
            entity_id,
            income=income,
            balance_sheet=balance_sheet,
            cash_flow=cash_flow,
            **ttm,
        )
    return _make


@pytest.fixture
def five_year_entity(make_entity):
    """2019..2023 revenue growing 10% a year, plus a TTM record."""
    revenues = [(2019, 100.0), (2020, 110.0), (2021, 121.0), (2022, 133.1), (2023, 146.41)]
    return make_entity(
        'AAA',
        income=[income_record(year, revenue) for year, revenue in revenues],
        ttm_income={'date': '2024-06-30', 'revenue': 150.0},
    )


@pytest.fixture
def four_year_entity(make_entity):
    revenues = [(2020, 110.0), (2021, 121.0), (2022, 133.1), (2023, 146.41)]
    return make_entity(
        'AAA',
        income=[income_record(year, revenue) for year, revenue in revenues],
        ttm_income={'date': '2024-06-30', 'revenue': 150.0},
    )
