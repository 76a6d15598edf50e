"""
Tour Catalog
============

Client-side collection of tours. The catalog is the only component that
talks to the persistence and identity collaborators, and only at session
boundaries (load and save/delete).

Without a store the catalog is purely in memory, which is how the demo
client runs on fixture data.
"""

import logging
from typing import List, Optional, Protocol, runtime_checkable

from src.tours.errors import NotAuthenticatedError, NotFoundError
from src.tours.models import Tour

logger = logging.getLogger(__name__)


@runtime_checkable
class PersistenceService(Protocol):
    """Tour store keyed by owner identity."""

    def save(self, tour: Tour, owner_id: str) -> Tour:
        """Create when tour.id is None, update otherwise (NotFoundError if missing)."""
        ...

    def create(self, tour: Tour, owner_id: str) -> Tour:
        """Insert a new tour, keeping tour.id when the client already assigned one."""
        ...

    def list(self, owner_id: str) -> List[Tour]:
        ...

    def delete(self, tour_id: str, owner_id: str) -> bool:
        """True if a tour was removed, False if nothing matched."""
        ...


@runtime_checkable
class IdentityProvider(Protocol):
    def current_user(self) -> Optional[str]:
        ...


class StaticIdentity:
    """Identity provider that always reports the same user."""

    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    def current_user(self):
        return self.user_id


class TourCatalog:
    """
    Ordered collection of tours with create-vs-update mediation.

    Args:
        tours: Initial tours (e.g. fixtures)
        store: Optional PersistenceService
        identity: Optional IdentityProvider; required when a store is given
    """

    def __init__(self, tours=None, store: Optional[PersistenceService] = None,
                 identity: Optional[IdentityProvider] = None):
        self._tours: List[Tour] = list(tours or [])
        self.store = store
        self.identity = identity

    @classmethod
    def with_fixtures(cls, **kwargs) -> 'TourCatalog':
        from src.tours.fixtures import sample_tours
        return cls(tours=sample_tours(), **kwargs)

    # ------------------------------------------------------------
    # In-memory collection
    # ------------------------------------------------------------

    def list(self) -> List[Tour]:
        return list(self._tours)

    def __len__(self):
        return len(self._tours)

    def __iter__(self):
        return iter(list(self._tours))

    def get(self, tour_id) -> Optional[Tour]:
        for tour in self._tours:
            if tour.id == tour_id:
                return tour
        return None

    def upsert(self, tour: Tour) -> Tour:
        """Replace the tour with the same id in place, or append it."""
        for i, existing in enumerate(self._tours):
            if tour.id is not None and existing.id == tour.id:
                self._tours[i] = tour
                return tour
        self._tours.append(tour)
        return tour

    def remove(self, tour_id) -> bool:
        before = len(self._tours)
        self._tours = [t for t in self._tours if t.id != tour_id]
        return len(self._tours) != before

    # ------------------------------------------------------------
    # Aggregates (computed on every call, never cached)
    # ------------------------------------------------------------

    def total_views(self) -> int:
        return sum(t.analytics.views for t in self._tours)

    def total_shares(self) -> int:
        return sum(t.analytics.shares for t in self._tours)

    def total_tours(self) -> int:
        return len(self._tours)

    # ------------------------------------------------------------
    # Collaborator boundary
    # ------------------------------------------------------------

    def _owner(self) -> Optional[str]:
        if self.identity is None:
            return None
        user_id = self.identity.current_user()
        if user_id is None:
            raise NotAuthenticatedError("Sign in to manage your tours")
        return user_id

    def load(self) -> List[Tour]:
        """Replace the catalog contents with the current user's stored tours."""
        if self.store is None:
            return self.list()
        owner_id = self._owner()
        self._tours = list(self.store.list(owner_id))
        logger.info("Loaded %d tours from store", len(self._tours))
        return self.list()

    def create(self, tour: Tour) -> Tour:
        """Create path: persist a brand new tour, then add it locally."""
        if self.store is not None:
            tour = self.store.create(tour, self._owner())
        logger.info("Created tour %s", tour.id)
        return self.upsert(tour)

    def update(self, tour: Tour) -> Tour:
        """Update path: persist changes to an existing tour, then replace it locally."""
        if tour.id is None:
            raise NotFoundError("Cannot update a tour that was never saved")
        if self.store is not None:
            tour = self.store.save(tour, self._owner())
        logger.info("Updated tour %s", tour.id)
        return self.upsert(tour)

    def delete(self, tour_id) -> bool:
        """
        Delete a tour locally and in the store.

        Raises NotFoundError when the store reports nothing was removed.
        Without a store, deleting an unknown id changes nothing and
        returns False.
        """
        if self.store is not None:
            owner_id = self._owner()
            if not self.store.delete(tour_id, owner_id):
                raise NotFoundError(tour_id=tour_id)
            self.remove(tour_id)
            logger.info("Deleted tour %s", tour_id)
            return True
        removed = self.remove(tour_id)
        if removed:
            logger.info("Deleted tour %s", tour_id)
        return removed
