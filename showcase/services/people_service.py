"""
People directory: Person records (name + star sign) kept in the in-memory repository.

Responsibility: CRUD over people and the per-person horoscope. Called by the API; no HTTP here.
"""

import logging

from showcase.core.repository import InMemoryCrudRepository
from showcase.schemas.people import Person
from showcase.services.horoscope_service import daily_horoscope

logger = logging.getLogger(__name__)

repository: InMemoryCrudRepository[Person] = InMemoryCrudRepository(
    id_getter=lambda p: p.id,
    id_setter=lambda p, new_id: p.model_copy(update={"id": new_id}),
)


def create_person(name: str, sign: str) -> Person:
    person = repository.save(Person(name=name, sign=sign))
    logger.info("[people:create_person] id=%s name=%r sign=%s", person.id, person.name, person.sign)
    return person


def list_people() -> list[Person]:
    return repository.find_all()


def get_person(person_id: str) -> Person | None:
    return repository.find_by_id(person_id)


def update_person(person_id: str, name: str, sign: str) -> Person | None:
    """Overwrite the person stored at person_id. None if there is no such person."""
    if not repository.exists_by_id(person_id):
        return None
    return repository.save(Person(id=person_id, name=name, sign=sign))


def delete_person(person_id: str) -> bool:
    existed = repository.exists_by_id(person_id)
    repository.delete_by_id(person_id)
    return existed


def clear_people() -> int:
    removed = repository.count()
    repository.delete_all()
    return removed


def person_horoscope(person_id: str) -> tuple[Person, str] | None:
    person = repository.find_by_id(person_id)
    if person is None:
        return None
    return person, daily_horoscope(person.sign)
