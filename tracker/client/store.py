"""
Client-side mirror of the caller's problem statuses and favorites.

Writes are optimistic: the local mirror changes immediately, the request is
sent, and the change is reverted if the request does not succeed. Every
in-flight write is tracked by a pending tag (``status-<number>`` or
``favorite-<id>``) until it settles.

Overlapping writes for the same tag are not serialized. Each call restores
the value it observed when it started, so after several overlapping failures
the mirror holds whatever the last call to settle restored.
"""
import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

import httpx
from pydantic import BaseModel, Field, ValidationError

from tracker.client.api import ProgressApiClient, ProgressApiError
from tracker.client.storage import SessionStorage
from tracker.data.schemas.enums import ProblemStatus

logger = logging.getLogger(__name__)

STORAGE_KEY = "problem-store"

Listener = Callable[["ProblemStore"], None]


def status_tag(problem_number: int) -> str:
    return f"status-{problem_number}"


def favorite_tag(problem_id: int) -> str:
    return f"favorite-{problem_id}"


class StoreSnapshot(BaseModel):
    """Persisted part of the store; pending operations are never persisted."""

    statuses: Dict[int, ProblemStatus] = Field(default_factory=dict)
    favorites: List[int] = Field(default_factory=list)


class ProblemStore:
    def __init__(
        self,
        api: ProgressApiClient,
        storage: Optional[SessionStorage] = None,
        storage_key: str = STORAGE_KEY,
    ):
        self.api = api
        self.storage = storage
        self.storage_key = storage_key
        self._statuses: Dict[int, ProblemStatus] = {}
        self._favorites: set = set()
        self._pending: set = set()
        self._listeners: List[Listener] = []
        self.is_hydrated = False

    @property
    def statuses(self) -> Dict[int, ProblemStatus]:
        return dict(self._statuses)

    @property
    def favorites(self) -> FrozenSet[int]:
        return frozenset(self._favorites)

    @property
    def pending(self) -> FrozenSet[str]:
        return frozenset(self._pending)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def initialize(
        self,
        statuses: Mapping[int, Union[ProblemStatus, str]],
        favorites: Iterable[int],
    ) -> None:
        """Replace both mirrors with an authoritative server snapshot."""
        new_statuses = {}
        for problem_number, status in statuses.items():
            status = ProblemStatus(status)
            if status != ProblemStatus.UNTOUCHED:
                new_statuses[int(problem_number)] = status
        new_favorites = {int(problem_id) for problem_id in favorites}
        self._statuses = new_statuses
        self._favorites = new_favorites
        self._notify()

    def set_status_batch(
        self, entries: Iterable[Tuple[int, Union[ProblemStatus, str]]]
    ) -> None:
        for problem_number, status in entries:
            self._write_status(int(problem_number), ProblemStatus(status))
        self._notify()

    def set_favorites_batch(self, problem_ids: Iterable[int]) -> None:
        self._favorites.update(int(problem_id) for problem_id in problem_ids)
        self._notify()

    def get_status(self, problem_number: int) -> ProblemStatus:
        return self._statuses.get(problem_number, ProblemStatus.UNTOUCHED)

    def is_favorite(self, problem_id: int) -> bool:
        return problem_id in self._favorites

    def is_pending(self, tag: str) -> bool:
        return tag in self._pending

    def _write_status(self, problem_number: int, status: ProblemStatus) -> None:
        if status == ProblemStatus.UNTOUCHED:
            self._statuses.pop(problem_number, None)
        else:
            self._statuses[problem_number] = status

    def _write_favorite(self, problem_id: int, favorite: bool) -> None:
        if favorite:
            self._favorites.add(problem_id)
        else:
            self._favorites.discard(problem_id)

    async def set_status(
        self, problem_number: int, status: Union[ProblemStatus, str]
    ) -> bool:
        """
        Optimistically set a status and confirm it with the server.

        Returns True when the server accepted the change. On any failure the
        mirror is restored to the status read at the start of this call. Errors
        other than API or transport failures are re-raised after the restore.
        """
        status = ProblemStatus(status)
        tag = status_tag(problem_number)
        previous = self.get_status(problem_number)

        self._write_status(problem_number, status)
        self._pending.add(tag)
        self._notify()

        try:
            await self.api.update_status(problem_number, status)
            return True
        except (ProgressApiError, httpx.HTTPError) as e:
            logger.warning(
                f"Failed to update status of problem #{problem_number}, rolling back to "
                f"{previous.value}: {e}"
            )
            self._write_status(problem_number, previous)
            return False
        except Exception:
            self._write_status(problem_number, previous)
            raise
        finally:
            self._pending.discard(tag)
            self._notify()

    async def toggle_favorite(self, problem_id: int) -> bool:
        """Flip favorite membership and confirm it; reverted on failure."""
        tag = favorite_tag(problem_id)
        was_favorite = self.is_favorite(problem_id)

        self._write_favorite(problem_id, not was_favorite)
        self._pending.add(tag)
        self._notify()

        try:
            if was_favorite:
                await self.api.remove_favorite(problem_id)
            else:
                await self.api.add_favorite(problem_id)
            return True
        except (ProgressApiError, httpx.HTTPError) as e:
            logger.warning(f"Failed to update favorite {problem_id}, rolling back: {e}")
            self._write_favorite(problem_id, was_favorite)
            return False
        except Exception:
            self._write_favorite(problem_id, was_favorite)
            raise
        finally:
            self._pending.discard(tag)
            self._notify()

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(statuses=dict(self._statuses), favorites=sorted(self._favorites))

    def restore(self, snapshot: StoreSnapshot) -> None:
        self.initialize(snapshot.statuses, snapshot.favorites)

    async def save(self) -> None:
        """Persist the mirrors, typically on a navigation boundary."""
        if self.storage is None:
            return
        await self.storage.set(self.storage_key, self.snapshot().model_dump_json())

    async def load(self) -> bool:
        """Rehydrate from session storage. Returns True if a snapshot was applied."""
        restored = False
        if self.storage is not None:
            raw = await self.storage.get(self.storage_key)
            if raw:
                try:
                    self.restore(StoreSnapshot.model_validate_json(raw))
                    restored = True
                except ValidationError as e:
                    logger.error(f"Discarding unreadable store snapshot: {e}")
                    await self.storage.delete(self.storage_key)
        self.is_hydrated = True
        return restored

    async def sync_from_server(self) -> bool:
        """
        Seed the mirrors from the init endpoint after sign-in or session start.

        Returns False for a guest session, in which case the mirrors are cleared.
        """
        payload = await self.api.fetch_init()
        if not payload.get("isAuthenticated"):
            self.initialize({}, [])
            await self.save()
            return False

        self.initialize(
            {entry["problemNumber"]: entry["status"] for entry in payload.get("statuses", [])},
            [entry["problemId"] for entry in payload.get("favorites", [])],
        )
        await self.save()
        logger.info(
            f"Store initialized with {len(self._statuses)} statuses and "
            f"{len(self._favorites)} favorites"
        )
        return True


def create_problem_store(
    base_url: str = "",
    token: Optional[str] = None,
    storage: Optional[SessionStorage] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ProblemStore:
    """Build the store handle that UI code receives instead of a global."""
    api = ProgressApiClient(base_url=base_url, token=token, client=client)
    return ProblemStore(api, storage=storage)
