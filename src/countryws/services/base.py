"""BaseService — foundation for countryws services.

Every service receives a :class:`CountryRepository` at construction time
and performs all data access through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from countryws.services.ports import CountryRepository


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LookupService(BaseService):
            def count(self) -> ServiceResult:
                return ServiceResult(ok=True, op="count", data={"count": self._repo.count()})
    """

    def __init__(self, repository: CountryRepository) -> None:
        self._repo = repository
