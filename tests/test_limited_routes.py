from datetime import datetime
from http import HTTPStatus

import pytest

from goflow.limited_routes import LimitedRoutes

MOMENT = datetime(2024, 1, 2, 3, 4, 5)


class CountingLimiter:
    def __init__(self, budget):
        self.budget = budget

    def allow(self):
        if self.budget > 0:
            self.budget -= 1
            return True
        return False


class Slots:
    def __init__(self, capacity):
        self.capacity = capacity
        self.in_use = 0
        self.releases = 0

    def acquire(self):
        if self.in_use < self.capacity:
            self.in_use += 1
            return True
        return False

    def release(self):
        self.in_use -= 1
        self.releases += 1


def make_routes(api=1, smooth=1, db=1):
    return LimitedRoutes(CountingLimiter(api), CountingLimiter(smooth), Slots(db), db_delay=0)


def test_api_allowed_then_limited():
    routes = make_routes(api=1)
    first = routes.handle("/api", MOMENT)
    assert first.status == HTTPStatus.OK
    assert first.body == f"API request processed at {MOMENT}\n"
    second = routes.handle("/api", MOMENT)
    assert second.status == HTTPStatus.TOO_MANY_REQUESTS
    assert second.body.strip() == "Rate limited"
    assert second.is_error


def test_process_limited_message():
    routes = make_routes(smooth=0)
    response = routes.handle("/process", MOMENT)
    assert response.status == HTTPStatus.TOO_MANY_REQUESTS
    assert response.body.strip() == "Processing queue full"


def test_process_allowed_reports_time():
    routes = make_routes(smooth=2)
    response = routes.handle("/process", MOMENT)
    assert response.status == HTTPStatus.OK
    assert str(MOMENT) in response.body


def test_db_releases_slot():
    routes = make_routes(db=1)
    for _ in range(3):
        assert routes.handle("/db", MOMENT).status == HTTPStatus.OK
    assert routes.db_limiter.in_use == 0
    assert routes.db_limiter.releases == 3


def test_db_unavailable_when_full():
    routes = make_routes(db=0)
    response = routes.handle("/db", MOMENT)
    assert response.status == HTTPStatus.SERVICE_UNAVAILABLE
    assert response.body.strip() == "Too many DB operations"
    assert routes.db_limiter.releases == 0


def test_limiters_are_independent():
    routes = make_routes(api=0, smooth=1)
    assert routes.handle("/api", MOMENT).status == HTTPStatus.TOO_MANY_REQUESTS
    assert routes.handle("/process", MOMENT).status == HTTPStatus.OK


@pytest.mark.parametrize("path", ["/", "/missing", "/api/"])
def test_unknown_path(path):
    response = make_routes().handle(path, MOMENT)
    assert response.status == HTTPStatus.NOT_FOUND


def test_paths_listed():
    assert make_routes().paths == ["/api", "/process", "/db"]