"""Tests for BookRepository against SQLite."""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from bookstore.application.catalog.protocols import BookSearchCriteria
from bookstore.application.common.pagination import Pagination
from bookstore.application.common.sorting import parse_sort
from bookstore.database import Base
from bookstore.domain.catalog.entities import Author, Book, Genre
from bookstore.infrastructure.catalog.repositories import (
    AuthorRepository,
    BookRepository,
    GenreRepository,
)


@pytest.fixture
def repo(db_session: Session) -> BookRepository:
    return BookRepository(db_session)


def _save(
    db_session: Session,
    repo: BookRepository,
    title: str,
    price: Decimal = Decimal("10.00"),
    authors: tuple[str, ...] = (),
    genres: tuple[str, ...] = (),
    **inventory: int,
) -> Book:
    author_repo, genre_repo = AuthorRepository(db_session), GenreRepository(db_session)
    book = repo.save(
        Book.create(
            title=title,
            price=price,
            authors=[author_repo.save(Author.create(name)) for name in authors],
            genres=[genre_repo.save(Genre.create(name)) for name in genres],
            **inventory,
        )
    )
    db_session.commit()
    return book


def _search(repo: BookRepository, sort: str | None = None, **criteria: str) -> list[str]:
    books, _ = repo.search(BookSearchCriteria(**criteria), Pagination(size=50), parse_sort(sort))
    return [b.title for b in books]


def test_save_and_find(db_session: Session, repo: BookRepository) -> None:
    saved = _save(db_session, repo, "Dune", authors=("Frank Herbert",), genres=("Sci-Fi",))

    found = repo.find_by_id(saved.id)

    assert found is not None
    assert found.title == "Dune"
    assert [a.name for a in found.authors] == ["Frank Herbert"]
    assert [g.name for g in found.genres] == ["Sci-Fi"]
    assert found.version == 1


def test_search_is_case_insensitive_substring(db_session: Session, repo: BookRepository) -> None:
    _save(db_session, repo, "Dune", authors=("Frank Herbert",), genres=("Sci-Fi",))
    _save(db_session, repo, "Emma", authors=("Jane Austen",), genres=("Classic",))

    assert _search(repo, title="UN") == ["Dune"]
    assert _search(repo, author="austen") == ["Emma"]
    assert _search(repo, genre="sci") == ["Dune"]
    assert _search(repo, title="dune", author="austen") == []


def test_search_returns_each_book_once(db_session: Session, repo: BookRepository) -> None:
    _save(db_session, repo, "Good Omens", authors=("Terry Pratchett", "Neil Gaiman"))

    assert _search(repo, author="e") == ["Good Omens"]


def test_search_treats_wildcards_literally(db_session: Session, repo: BookRepository) -> None:
    _save(db_session, repo, "100% Python")
    _save(db_session, repo, "Plain Python")

    assert _search(repo, title="%") == ["100% Python"]


def test_search_sorting_and_paging(db_session: Session, repo: BookRepository) -> None:
    for title, price in [("B", "30"), ("A", "10"), ("C", "20")]:
        _save(db_session, repo, title, price=Decimal(price))

    assert _search(repo) == ["A", "B", "C"]
    assert _search(repo, sort="price,desc") == ["B", "C", "A"]

    books, total = repo.search(
        BookSearchCriteria(), Pagination(page=1, size=2), parse_sort("title,asc")
    )
    assert total == 3
    assert [b.title for b in books] == ["C"]


def test_inventory_queries(db_session: Session, repo: BookRepository) -> None:
    _save(db_session, repo, "Plenty", quantity_in_stock=50)
    _save(db_session, repo, "Scarce", quantity_in_stock=8, reorder_level=10)
    _save(db_session, repo, "Held", quantity_in_stock=4, reserved_quantity=4)

    assert [b.title for b in repo.find_needing_restock()] == ["Held", "Scarce"]
    assert [b.title for b in repo.find_low_stock(10)] == ["Held", "Scarce"]
    assert [b.title for b in repo.find_low_stock(0)] == ["Held"]
    assert repo.count() == 3


def test_popularity_skips_unavailable(db_session: Session, repo: BookRepository) -> None:
    quiet = _save(db_session, repo, "Quiet", quantity_in_stock=1)
    loud = _save(db_session, repo, "Loud", quantity_in_stock=1)
    held = _save(db_session, repo, "Held", quantity_in_stock=1, reserved_quantity=1)
    for book in (loud, loud, held, quiet):
        repo.increment_view_count(book.id)
    db_session.commit()

    assert [b.title for b in repo.find_available_by_popularity(10)] == ["Loud", "Quiet"]


def test_increment_view_count_leaves_version(db_session: Session, repo: BookRepository) -> None:
    book = _save(db_session, repo, "Dune")

    repo.increment_view_count(book.id)
    db_session.commit()

    found = repo.find_by_id(book.id)
    assert found is not None
    assert found.view_count == 1
    assert found.version == book.version


def test_delete_by_id(db_session: Session, repo: BookRepository) -> None:
    book = _save(db_session, repo, "Dune", authors=("Frank Herbert",))

    assert repo.delete_by_id(book.id) == 1
    assert repo.delete_by_id(book.id) == 0
    assert repo.find_by_id(book.id) is None


def test_named_entities_match_ignoring_case(db_session: Session) -> None:
    authors = AuthorRepository(db_session)
    saved = authors.save(Author.create("Ursula K. Le Guin"))

    found = authors.find_by_name_ignore_case("ursula k. le guin")

    assert found == saved
    assert authors.find_by_name_ignore_case("Le Guin") is None


def test_stale_write_detected(tmp_path: Path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'books.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False)

    with factory() as setup:
        book = BookRepository(setup).save(Book.create(title="Dune", price=Decimal("10")))
        setup.commit()

    with factory() as first, factory() as second:
        first_repo, second_repo = BookRepository(first), BookRepository(second)
        mine = first_repo.find_by_id(book.id)
        theirs = second_repo.find_by_id(book.id)
        assert mine is not None and theirs is not None

        theirs.adjust_stock(5)
        second_repo.save(theirs)
        second.commit()

        mine.adjust_stock(1)
        with pytest.raises(StaleDataError):
            first_repo.save(mine)

    engine.dispose()
