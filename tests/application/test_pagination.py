import math

import pytest

from src.application.interfaces.pagination import Page, PageRequest
from src.domain.exceptions import ValidationException


@pytest.mark.parametrize("total", [0, 1, 19, 20, 21, 95, 100])
@pytest.mark.parametrize("limit", [1, 7, 20])
def test_total_pages_is_ceiling(total, limit):
    page = Page.of([], total, PageRequest(page=1, limit=limit))

    assert page.total_pages == math.ceil(total / limit)
    assert page.total == total


def test_page_past_the_end_is_empty_not_an_error():
    page = Page.of([], 45, PageRequest(page=10, limit=20))

    assert page.items == []
    assert page.has_next is False
    assert page.has_previous is True


def test_middle_page():
    request = PageRequest(page=2, limit=20)

    page = Page.of(list(range(20, 40)), 45, request)

    assert request.offset == 20
    assert page.has_next is True
    assert page.has_previous is True


def test_first_and_only_page():
    page = Page.of(["a", "b"], 2, PageRequest())

    assert (page.page, page.limit, page.total_pages) == (1, 20, 1)
    assert page.has_next is False
    assert page.has_previous is False


@pytest.mark.parametrize("page, limit", [(0, 20), (1, 0), (-1, 5)])
def test_invalid_request(page, limit):
    with pytest.raises(ValidationException):
        PageRequest(page=page, limit=limit)
