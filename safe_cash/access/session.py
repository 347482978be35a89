"""
Viewer Session

The session is a value: who is signed in (if anyone) and which store is
selected. It changes only through `transition`, a pure function of
(session, event). Nothing here touches storage.

Store selection rules:
- Anonymous viewers may select any store freely.
- Signing in locks the selection to the user's own store, overriding
  whatever the viewer had picked.
- Signing out keeps the selection where it was; it is not rolled back
  to the pre-login public choice.
"""

from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import Role, UserProfile
from safe_cash.registry.stores import StoreRegistry


class SessionStateError(SafeCashError):
    """An event that is not allowed in the current session state."""
    pass


class ViewerState(str, Enum):
    """Who is looking at the screen."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED_STAFF = "authenticated_staff"
    AUTHENTICATED_ADMIN = "authenticated_admin"


class Session(BaseModel):
    """Current identity plus the selected store."""
    model_config = ConfigDict(frozen=True)

    identity: Optional[UserProfile] = None
    selected_store_id: str
    correlation_id: UUID = Field(default_factory=uuid4)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def state(self) -> ViewerState:
        if self.identity is None:
            return ViewerState.ANONYMOUS
        if self.identity.role == Role.ADMIN:
            return ViewerState.AUTHENTICATED_ADMIN
        return ViewerState.AUTHENTICATED_STAFF


# =============================================================================
# EVENTS
# =============================================================================

class LoggedIn(BaseModel):
    """A credential check succeeded for this profile."""
    model_config = ConfigDict(frozen=True)

    profile: UserProfile


class LoggedOut(BaseModel):
    """The signed-in user signed out."""
    model_config = ConfigDict(frozen=True)


class StoreSelected(BaseModel):
    """The viewer picked a store in the public selector."""
    model_config = ConfigDict(frozen=True)

    store_id: str


SessionEvent = Union[LoggedIn, LoggedOut, StoreSelected]


def transition(session: Session, event: SessionEvent) -> Session:
    """
    Apply one event to a session.

    Raises:
        SessionStateError: On sign-in while already signed in. A role is
            fixed for the session's lifetime; sign out first.
    """
    if isinstance(event, LoggedIn):
        if session.is_authenticated:
            raise SessionStateError(
                f"Already signed in as {session.identity.email}; sign out first"
            )
        return session.model_copy(update={
            "identity": event.profile,
            "selected_store_id": event.profile.store_id,
        })

    if isinstance(event, LoggedOut):
        # Selection intentionally stays on the last user's store
        return session.model_copy(update={"identity": None})

    if isinstance(event, StoreSelected):
        if session.is_authenticated:
            return session
        return session.model_copy(update={"selected_store_id": event.store_id})

    raise TypeError(f"Unknown session event: {event!r}")


def initial_session(
    registry: StoreRegistry,
    last_store_id: Optional[str] = None,
    user: Optional[UserProfile] = None,
) -> Session:
    """
    Build the session a process starts with.

    The selection defaults to the persisted last choice if it still names
    a registered store, else the first store. A persisted user forces the
    selection to their own store.
    """
    if registry.has_store(last_store_id):
        selected = last_store_id
    else:
        selected = registry.first_store.id

    session = Session(selected_store_id=selected)
    if user is not None:
        session = transition(session, LoggedIn(profile=user))
    return session
