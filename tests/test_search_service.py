"""
Tests for listing search: filtering, ordering, pagination and query parsing.
Run: pytest tests/test_search_service.py -v
"""
import math

import pytest

from app.errors import InvalidArgument
from app.models.property import ListingType, PropertyType, SearchCriteria, SortOrder
from app.services.search_service import parse_search_params, resolve, to_query_params


def ids(result):
    return [p.id for p in result.items]


def test_no_filters_returns_active_listings_newest_first(corpus):
    """Empty criteria: every active listing counted, first page newest first"""
    result = resolve(SearchCriteria(page_size=4), corpus)

    assert result.total == 6
    assert ids(result) == [8, 5, 4, 3]
    assert result.total_pages == 2


def test_inactive_listings_are_excluded(corpus):
    result = resolve(SearchCriteria(page_size=50), corpus)
    assert 6 not in ids(result)
    assert 7 not in ids(result)


def test_price_range_is_inclusive(corpus):
    result = resolve(SearchCriteria(min_price=45000, max_price=85000, page_size=50), corpus)

    assert sorted(ids(result)) == [1, 2, 5]
    assert all(45000 <= p.price <= 85000 for p in result.items)


def test_open_ended_price_bounds(corpus):
    assert sorted(ids(resolve(SearchCriteria(min_price=12500000), corpus))) == [4, 8]
    assert sorted(ids(resolve(SearchCriteria(max_price=60000), corpus))) == [1, 5]


def test_bedrooms_is_a_minimum(corpus):
    result = resolve(SearchCriteria(bedrooms=3, page_size=50), corpus)

    assert sorted(ids(result)) == [3, 4]
    assert all(p.bedrooms >= 3 for p in result.items)


def test_bathrooms_is_a_minimum(corpus):
    result = resolve(SearchCriteria(bathrooms=3, page_size=50), corpus)
    assert sorted(ids(result)) == [3, 4]


def test_sqft_range(corpus):
    result = resolve(SearchCriteria(min_sqft=900, max_sqft=2722, page_size=50), corpus)
    assert sorted(ids(result)) == [2, 4, 5, 8]


def test_location_matches_address_city_or_state_case_insensitively(corpus):
    by_city = resolve(SearchCriteria(location="KARACHI"), corpus)
    by_address = resolve(SearchCriteria(location="model town"), corpus)
    by_state = resolve(SearchCriteria(location="capital territory"), corpus)

    assert ids(by_city) == [2]
    assert ids(by_address) == [3]
    assert ids(by_state) == [4]


def test_type_filters_are_exact(corpus):
    houses = resolve(SearchCriteria(property_type=PropertyType.HOUSE), corpus)
    sales = resolve(SearchCriteria(listing_type=ListingType.SALE, page_size=50), corpus)

    assert ids(houses) == [3]
    assert sorted(ids(sales)) == [4, 8]


def test_filters_combine_conjunctively(corpus):
    criteria = SearchCriteria(
        location="lahore",
        property_type=PropertyType.APARTMENT,
        max_price=100000,
    )
    assert ids(resolve(criteria, corpus)) == [1]


def test_empty_match_is_not_an_error(corpus):
    result = resolve(SearchCriteria(location="quetta"), corpus)
    assert result.items == []
    assert result.total == 0
    assert result.total_pages == 0


@pytest.mark.parametrize("order", list(SortOrder))
def test_pages_concatenate_to_full_result(corpus, order):
    """Walking every page yields each match exactly once, in order"""
    full = resolve(SearchCriteria(sort=order, page_size=100), corpus)
    page_size = 4
    pages = math.ceil(full.total / page_size)

    walked = []
    for page in range(1, pages + 1):
        walked.extend(ids(resolve(SearchCriteria(sort=order, page=page, page_size=page_size), corpus)))

    assert walked == ids(full)
    assert len(set(walked)) == full.total


def test_sort_orders(corpus):
    def ordered(order):
        return ids(resolve(SearchCriteria(sort=order, page_size=50), corpus))

    assert ordered(SortOrder.NEWEST) == [8, 5, 4, 3, 2, 1]
    assert ordered(SortOrder.OLDEST) == [1, 2, 3, 4, 5, 8]
    assert ordered(SortOrder.PRICE_LOW) == [1, 5, 2, 3, 8, 4]
    assert ordered(SortOrder.PRICE_HIGH) == [4, 8, 3, 2, 5, 1]


def test_page_past_the_end_is_empty_but_keeps_total(corpus):
    result = resolve(SearchCriteria(page=10, page_size=4), corpus)
    assert result.items == []
    assert result.total == 6


@pytest.mark.parametrize(
    "criteria",
    [
        SearchCriteria(page=0),
        SearchCriteria(page=-1),
        SearchCriteria(page_size=0),
        SearchCriteria(min_price=-5),
        SearchCriteria(min_price=100, max_price=50),
        SearchCriteria(min_sqft=2000, max_sqft=1000),
        SearchCriteria(bedrooms=0),
    ],
)
def test_invalid_criteria_are_rejected(corpus, criteria):
    with pytest.raises(InvalidArgument):
        resolve(criteria, corpus)


def test_parse_reads_every_known_key():
    criteria = parse_search_params(
        {
            "location": " DHA ",
            "propertyType": "house",
            "listingType": "rent",
            "minPrice": "1000",
            "maxPrice": "250000.50",
            "bedrooms": "2",
            "bathrooms": "1.5",
            "minSqft": "500",
            "maxSqft": "3000",
            "sort": "price-high",
            "page": "3",
            "limit": "24",
        }
    )

    assert criteria.location == "DHA"
    assert criteria.property_type == PropertyType.HOUSE
    assert criteria.listing_type == ListingType.RENT
    assert criteria.min_price == 1000
    assert criteria.max_price == 250000.5
    assert criteria.bedrooms == 2
    assert criteria.bathrooms == 1.5
    assert (criteria.min_sqft, criteria.max_sqft) == (500, 3000)
    assert criteria.sort == SortOrder.PRICE_HIGH
    assert (criteria.page, criteria.page_size) == (3, 24)


def test_parse_omits_non_numeric_and_blank_values():
    criteria = parse_search_params(
        {"minPrice": "cheap", "maxPrice": "", "bedrooms": "two", "bathrooms": "nan", "location": "  "}
    )

    assert criteria.min_price is None
    assert criteria.max_price is None
    assert criteria.bedrooms is None
    assert criteria.bathrooms is None
    assert criteria.location is None


def test_parse_omits_unknown_enum_values():
    criteria = parse_search_params({"propertyType": "all", "listingType": "lease", "sort": "random"})

    assert criteria.property_type is None
    assert criteria.listing_type is None
    assert criteria.sort == SortOrder.NEWEST


def test_parse_defaults_and_keeps_out_of_range_pages():
    assert parse_search_params({}, default_page_size=12).page_size == 12
    assert parse_search_params({}).page == 1
    assert parse_search_params({"page": "0"}).page == 0


def test_to_query_params_only_emits_set_fields():
    criteria = SearchCriteria(location="dha karachi", property_type=PropertyType.APARTMENT, bedrooms=2)

    assert to_query_params(criteria) == {
        "location": "dha karachi",
        "propertyType": "apartment",
        "bedrooms": "2",
    }


def test_parse_truncates_decimal_integers():
    criteria = parse_search_params({"bedrooms": "2.5", "minSqft": " 1200.9 ", "bathrooms": "1.5"})

    assert criteria.bedrooms == 2
    assert criteria.min_sqft == 1200
    assert criteria.bathrooms == 1.5


@pytest.mark.parametrize("raw", ["1_000", "1e5", "inf", "-inf", "-", "0x10", "2.", ".5"])
def test_parse_omits_numbers_that_are_not_plain_decimals(raw):
    criteria = parse_search_params({"bedrooms": raw, "minPrice": raw})

    assert criteria.bedrooms is None
    assert criteria.min_price is None


def test_parse_omits_oversized_integers():
    criteria = parse_search_params({"page": "9" * 5000, "limit": "1" + "0" * 18})

    assert criteria.page == 1
    assert criteria.page_size == 12


def test_parse_keeps_negative_values_for_validation(corpus):
    criteria = parse_search_params({"minPrice": "-5"})

    assert criteria.min_price == -5
    with pytest.raises(InvalidArgument):
        resolve(criteria, corpus)
