"""Tests for the advocate listing endpoints."""

from sqlalchemy.exc import OperationalError

from app.domain.exceptions import CacheUnavailable

URL = "/api/advocates"


class TestListAdvocates:
    """GET /api/advocates"""

    def test_defaults(self, client, add_advocates):
        add_advocates(25)

        response = client.get(URL)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"data", "total", "page", "limit", "totalPages"}
        assert body["total"] == 25
        assert body["page"] == 1
        assert body["limit"] == 10
        assert body["totalPages"] == 3
        assert len(body["data"]) == 10

    def test_no_match_scenario(self, client, add_advocates):
        add_advocates(25)

        response = client.get(URL, params={"city": "Nowhere"})

        assert response.status_code == 200
        assert response.json() == {
            "data": [],
            "total": 0,
            "page": 1,
            "limit": 10,
            "totalPages": 0,
        }

    def test_last_partial_page_scenario(self, client, add_advocates):
        add_advocates(25)

        body = client.get(URL, params={"page": 3, "limit": 10}).json()

        assert len(body["data"]) == 5
        assert body["total"] == 25
        assert body["totalPages"] == 3

    def test_records_are_camel_case(self, client, add_advocates, make_row):
        add_advocates(
            [
                make_row(
                    1,
                    first_name="Alice",
                    last_name="Johnson",
                    city="Chicago",
                    degree="MSW",
                    specialties=["Trauma & PTSD"],
                    years_of_experience=5,
                    phone_number=5554567890,
                )
            ]
        )

        record = client.get(URL).json()["data"][0]

        assert record["firstName"] == "Alice"
        assert record["lastName"] == "Johnson"
        assert record["city"] == "Chicago"
        assert record["degree"] == "MSW"
        assert record["specialties"] == ["Trauma & PTSD"]
        assert record["yearsOfExperience"] == 5
        assert record["phoneNumber"] == 5554567890
        assert "id" in record
        assert "createdAt" in record

    def test_limit_is_clamped(self, client, add_advocates):
        add_advocates(150)

        body = client.get(URL, params={"limit": 500}).json()

        assert body["limit"] == 100
        assert len(body["data"]) == 100
        assert body["totalPages"] == 2

    def test_malformed_pagination_falls_back_to_defaults(self, client, add_advocates):
        add_advocates(12)

        response = client.get(URL, params={"page": "abc", "limit": "lots"})

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["limit"] == 10

    def test_non_positive_page_is_clamped(self, client, add_advocates):
        add_advocates(3)

        body = client.get(URL, params={"page": -4, "limit": 0}).json()

        assert body["page"] == 1
        assert body["limit"] == 1

    def test_huge_page_reads_past_the_end(self, client, add_advocates):
        add_advocates(25)

        response = client.get(URL, params={"page": str(10**20)})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["total"] == 25
        assert body["totalPages"] == 3
        assert body["limit"] == 10

    def test_huge_experience_bounds_are_clamped(self, client, add_advocates, make_row):
        add_advocates([make_row(i, years_of_experience=i) for i in range(1, 4)])

        too_high = client.get(URL, params={"minExperience": str(10**20)})
        everyone = client.get(
            URL, params={"minExperience": str(-(10**20)), "maxExperience": str(10**20)}
        )

        assert too_high.status_code == 200
        assert too_high.json()["total"] == 0
        assert everyone.status_code == 200
        assert everyone.json()["total"] == 3

    def test_all_filters(self, client, add_advocates, make_row):
        variants = [
            ("Sarah", "PhD", 10),
            ("Sarah", "MD", 10),
            ("Sam", "PhD", 10),
            ("Sarah", "PhD", 1),
        ]
        add_advocates(
            [
                make_row(
                    i, first_name=name, city="Austin", degree=degree, years_of_experience=years
                )
                for i, (name, degree, years) in enumerate(variants, start=1)
            ]
        )

        body = client.get(
            URL,
            params={
                "city": "aus",
                "degree": "phd",
                "minExperience": 5,
                "maxExperience": 12,
                "search": "sar",
            },
        ).json()

        assert body["total"] == 1
        assert body["data"][0]["phoneNumber"] == 5550000001

    def test_inverted_experience_range(self, client, add_advocates):
        add_advocates(5)

        response = client.get(URL, params={"minExperience": 10, "maxExperience": 2})

        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_malformed_experience_bound_is_ignored(self, client, add_advocates):
        add_advocates(4)

        body = client.get(URL, params={"minExperience": "ten"}).json()

        assert body["total"] == 4

    def test_blank_text_filters_are_ignored(self, client, add_advocates):
        add_advocates(4)

        body = client.get(URL, params={"city": "", "search": "   "}).json()

        assert body["total"] == 4

    def test_repeat_request_served_from_cache(self, client, store, add_advocates):
        add_advocates(5)

        first = client.get(URL, params={"degree": "md"})
        reads = store.reads
        second = client.get(URL, params={"degree": "md"})

        assert reads == 2
        assert store.reads == 2
        assert second.content == first.content

    def test_store_failure_returns_generic_error(self, client, store, cache, add_advocates):
        add_advocates(3)
        store.fail_with = OperationalError(
            "SELECT", {}, Exception("password authentication failed")
        )

        response = client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch advocates"}
        assert "password" not in response.text
        assert len(cache) == 0


class TestInvalidateCache:
    """POST /api/advocates/cache/invalidate"""

    def test_invalidate_forces_fresh_reads(self, client, store, add_advocates):
        add_advocates(3)
        client.get(URL)
        add_advocates(2)

        response = client.post(f"{URL}/cache/invalidate")
        body = client.get(URL).json()

        assert response.status_code == 200
        assert response.json() == {"invalidated": "advocates"}
        assert body["total"] == 5
        assert store.reads == 4

    def test_unreachable_cache_returns_503(self, client, cache):
        async def unavailable(tag):
            raise CacheUnavailable("redis down")

        cache.invalidate = unavailable

        response = client.post(f"{URL}/cache/invalidate")

        assert response.status_code == 503
        assert response.json() == {"error": "Cache unavailable"}
