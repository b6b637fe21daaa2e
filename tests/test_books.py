"""Tests for the book catalog endpoints."""

import uuid
from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient

PROBLEMS = "https://bookstore-api.example.com/problems"

CreateBook = Callable[..., dict[str, Any]]


class TestCreateBook:
    def test_create_book(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        payload = {
            "title": "Refactoring",
            "price": "47.50",
            "published_year": 2018,
            "isbn": "978-0134757599",
            "authors": [{"name": "Martin Fowler"}],
            "genres": [{"name": "Software"}],
            "quantity_in_stock": 12,
            "cost_price": "25.00",
            "supplier_info": "Addison-Wesley",
        }

        response = client.post("/api/books", json=payload, headers=admin_headers)

        assert response.status_code == 201
        book = response.json()["data"]
        assert response.headers["Location"] == f"/api/books/{book['id']}"
        assert book["title"] == "Refactoring"
        assert book["price"] == 47.5
        assert book["isbn"] == "978-0134757599"
        assert [a["name"] for a in book["authors"]] == ["Martin Fowler"]
        assert [g["name"] for g in book["genres"]] == ["Software"]
        assert book["available_quantity"] == 12
        assert book["is_available"] is True
        assert book["needs_restock"] is False
        assert book["margin"] == 22.5
        assert book["margin_percent"] == 90.0
        assert book["reorder_level"] == 5
        assert book["view_count"] == 0

    def test_minimal_book(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/books", json={"title": "Untitled", "price": "0"}, headers=admin_headers
        )

        assert response.status_code == 201
        book = response.json()["data"]
        assert book["authors"] == []
        assert book["quantity_in_stock"] == 0
        assert book["margin"] is None
        assert book["needs_restock"] is True

    def test_author_names_are_reused_ignoring_case(
        self, create_book: CreateBook
    ) -> None:
        first = create_book(title="Book One", authors=[{"name": "Jane Austen"}])
        second = create_book(title="Book Two", authors=[{"name": "jane austen"}])

        assert first["authors"][0]["id"] == second["authors"][0]["id"]

    def test_author_by_id(self, create_book: CreateBook) -> None:
        first = create_book(title="Book One")
        author_id = first["authors"][0]["id"]

        second = create_book(title="Book Two", authors=[{"id": author_id}])

        assert [a["id"] for a in second["authors"]] == [author_id]

    def test_unknown_author_id(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        missing = str(uuid.uuid4())
        response = client.post(
            "/api/books",
            json={"title": "Ghost", "price": "1.00", "authors": [{"id": missing}]},
            headers=admin_headers,
        )

        assert response.status_code == 404
        problem = response.json()
        assert problem["type"] == f"{PROBLEMS}/resource-not-found"
        assert problem["resource_type"] == "Author"
        assert problem["identifier"] == missing

    def test_duplicate_isbn(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        create_book(isbn="1234567890")

        response = client.post(
            "/api/books",
            json={"title": "Copycat", "price": "1.00", "isbn": "1234567890"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.headers["content-type"] == "application/problem+json"
        problem = response.json()
        assert problem["type"] == f"{PROBLEMS}/duplicate-resource"
        assert problem["title"] == "Duplicate Resource"
        assert problem["status"] == 409
        assert "1234567890" in problem["detail"]
        assert "timestamp" in problem

    def test_missing_fields_rejected(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/books", json={"price": "-1"}, headers=admin_headers)

        assert response.status_code == 400
        problem = response.json()
        assert problem["type"] == f"{PROBLEMS}/validation-error"
        fields = {error["field"] for error in problem["errors"]}
        assert {"title", "price"} <= fields

    def test_blank_title_rejected(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/books", json={"title": "   ", "price": "1.00"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "title"

    def test_published_year_range(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/books",
            json={"title": "Scroll", "price": "1.00", "published_year": 1200},
            headers=admin_headers,
        )
        assert response.status_code == 400


class TestGetBook:
    def test_get_counts_views(
        self, client: TestClient, user_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book()

        client.get(f"/api/books/{book['id']}", headers=user_headers)
        response = client.get(f"/api/books/{book['id']}", headers=user_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == book["id"]
        assert data["view_count"] == 2
        assert data["version"] == book["version"]

    def test_not_found(self, client: TestClient, user_headers: dict[str, str]) -> None:
        missing = uuid.uuid4()
        response = client.get(f"/api/books/{missing}", headers=user_headers)

        assert response.status_code == 404
        problem = response.json()
        assert problem["resource_type"] == "Book"
        assert problem["detail"] == f"Book not found with identifier: {missing}"
        assert problem["instance"] == f"/api/books/{missing}"

    def test_malformed_id(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.get("/api/books/not-a-uuid", headers=user_headers)
        assert response.status_code == 400


class TestUpdateBook:
    def test_update_replaces_details(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book(supplier_info="Original supplier")

        response = client.put(
            f"/api/books/{book['id']}",
            json={"id": book["id"], "title": "Second Edition", "price": "45.00"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["title"] == "Second Edition"
        assert updated["price"] == 45.0
        # Omitted relations and inventory keep their stored values
        assert [a["name"] for a in updated["authors"]] == ["Andrew Hunt", "David Thomas"]
        assert updated["quantity_in_stock"] == 20
        assert updated["supplier_info"] == "Original supplier"
        assert updated["version"] == book["version"] + 1

    def test_update_replaces_authors_when_given(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book()

        response = client.put(
            f"/api/books/{book['id']}",
            json={
                "id": book["id"],
                "title": book["title"],
                "price": "39.99",
                "authors": [{"name": "Solo Author"}],
            },
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert [a["name"] for a in response.json()["data"]["authors"]] == ["Solo Author"]

    def test_id_mismatch(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book()
        other_id = str(uuid.uuid4())

        response = client.put(
            f"/api/books/{book['id']}",
            json={"id": other_id, "title": "X", "price": "1.00"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        problem = response.json()
        assert problem["type"] == f"{PROBLEMS}/id-mismatch"
        assert problem["path_id"] == book["id"]
        assert problem["body_id"] == other_id

    def test_body_without_id_is_a_mismatch(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book()

        response = client.put(
            f"/api/books/{book['id']}",
            json={"title": "No id", "price": "1.00"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        problem = response.json()
        assert problem["type"] == f"{PROBLEMS}/id-mismatch"
        assert problem["path_id"] == book["id"]
        assert problem["body_id"] is None
        unchanged = client.get(f"/api/books/{book['id']}", headers=admin_headers).json()["data"]
        assert unchanged["title"] == book["title"]

    def test_update_missing_book(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        missing = str(uuid.uuid4())
        response = client.put(
            f"/api/books/{missing}",
            json={"id": missing, "title": "X", "price": "1.00"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_isbn_taken_by_another_book(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        create_book(title="First", isbn="111")
        second = create_book(title="Second", isbn="222")

        response = client.put(
            f"/api/books/{second['id']}",
            json={"id": second["id"], "title": "Second", "price": "1.00", "isbn": "111"},
            headers=admin_headers,
        )
        assert response.status_code == 409

    def test_keeping_own_isbn_is_allowed(
        self, client: TestClient, admin_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        book = create_book(isbn="111")

        response = client.put(
            f"/api/books/{book['id']}",
            json={"id": book["id"], "title": "Renamed", "price": "1.00", "isbn": "111"},
            headers=admin_headers,
        )
        assert response.status_code == 200


class TestDeleteBook:
    def test_delete_is_idempotent(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        create_book: CreateBook,
    ) -> None:
        book = create_book()

        assert client.delete(f"/api/books/{book['id']}", headers=admin_headers).status_code == 204
        assert client.delete(f"/api/books/{book['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/books/{book['id']}", headers=admin_headers).status_code == 404


class TestSearchBooks:
    def test_filters_and_meta(
        self, client: TestClient, user_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        create_book(title="Dune", authors=[{"name": "Frank Herbert"}], genres=[{"name": "Sci-Fi"}])
        create_book(title="Emma", authors=[{"name": "Jane Austen"}], genres=[{"name": "Classic"}])
        create_book(title="Persuasion", authors=[{"name": "Jane Austen"}], genres=[{"name": "Classic"}])

        response = client.get(
            "/api/books", params={"author": "austen", "size": 1}, headers=user_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert [b["title"] for b in body["data"]] == ["Emma"]
        assert body["meta"] == {"page": 0, "size": 1, "total": 2, "total_pages": 2}

    def test_sort(
        self, client: TestClient, user_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        create_book(title="Cheap", price="5.00")
        create_book(title="Pricey", price="50.00")

        response = client.get("/api/books", params={"sort": "price,desc"}, headers=user_headers)

        assert [b["title"] for b in response.json()["data"]] == ["Pricey", "Cheap"]

    def test_empty_catalog(self, client: TestClient, user_headers: dict[str, str]) -> None:
        body = client.get("/api/books", headers=user_headers).json()
        assert body["data"] == []
        assert body["meta"]["total_pages"] == 0

    def test_invalid_sort(self, client: TestClient, user_headers: dict[str, str]) -> None:
        response = client.get("/api/books", params={"sort": "isbn,asc"}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["type"] == f"{PROBLEMS}/invalid-sort"

    def test_page_size_bounds(self, client: TestClient, user_headers: dict[str, str]) -> None:
        assert client.get("/api/books", params={"size": 101}, headers=user_headers).status_code == 400
        assert client.get("/api/books", params={"size": 0}, headers=user_headers).status_code == 400
        assert client.get("/api/books", params={"page": -1}, headers=user_headers).status_code == 400


class TestPopularBooks:
    def test_most_viewed_first(
        self, client: TestClient, user_headers: dict[str, str], create_book: CreateBook
    ) -> None:
        quiet = create_book(title="Quiet")
        loud = create_book(title="Loud")
        create_book(title="Sold Out", quantity_in_stock=0)
        for book in (loud, loud, quiet):
            client.get(f"/api/books/{book['id']}", headers=user_headers)

        response = client.get("/api/books/popular", headers=user_headers)

        assert response.status_code == 200
        assert [b["title"] for b in response.json()["data"]] == ["Loud", "Quiet"]
