"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Callable, Hashable
from itertools import count

import pytest

from registrar.catalog import Catalog, Course, Offering
from registrar.students import Student


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def catalog() -> Catalog:
    """A small catalog with a few prerequisite chains.

    math1 -> math2 -> phys2, math1 -> phys1 -> phys2, prog -> ap -> db,
    math1 -> dm -> db. ie and fa have no prerequisites.
    """
    math1 = Course("4", "math1", 3)
    math2 = Course("5", "math2", 3).with_prerequisites(math1)
    phys1 = Course("8", "phys1", 3).with_prerequisites(math1)
    phys2 = Course("9", "phys2", 3).with_prerequisites(math2, phys1)
    prog = Course("7", "prog", 4)
    ap = Course("2", "ap", 3).with_prerequisites(prog)
    dm = Course("3", "dm", 3).with_prerequisites(math1)
    ie = Course("1", "ie", 3)
    fa = Course("6", "fa", 3)
    db = Course("10", "db", 3).with_prerequisites(dm, ap)
    return Catalog([math1, math2, phys1, phys2, prog, ap, dm, ie, fa, db])


@pytest.fixture
def student() -> Student:
    """A student with no grades yet."""
    return Student(id="1", name="Bebe")


@pytest.fixture
def record(catalog: Catalog, student: Student) -> Callable[[str, str, float], None]:
    """Record a grade for the ``student`` fixture by course id."""

    def _record(course_id: str, term: str, grade: float) -> None:
        student.record_grade(catalog.get(course_id), term, grade)

    return _record


@pytest.fixture
def offer(catalog: Catalog) -> Callable[..., Offering]:
    """Build an offering by course id; each call gets a fresh exam time unless given."""
    slots = count(1)

    def _offer(course_id: str, section: int = 1, exam_time: Hashable | None = None) -> Offering:
        if exam_time is None:
            exam_time = f"slot-{next(slots)}"
        return catalog.offering(course_id, section, exam_time)

    return _offer


@pytest.fixture(autouse=True)
def reset_registrar_logger():
    """Drop handlers that setup_logging attached during a test."""
    yield
    logger = logging.getLogger("registrar")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
