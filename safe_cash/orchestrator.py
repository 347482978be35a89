"""
Main Orchestrator for Safe Cash Tracker

This module ties together all the components and defines the
end-to-end operations the front end calls:
1. Startup (seed once → restore persisted session)
2. Sign in / sign out
3. Public store selection and balance
4. Transaction intake (validate → append → re-derive)
5. Admin ledger audit

DESIGN DECISION: The orchestrator enforces the boundaries:
- The session only changes through access.session.transition
- Intake and the full ledger are gated by access.policy
- Balances are re-derived from storage on every read
- Every step is audited

Everything runs synchronously, one user action at a time. There is no
background work and no locking.
"""

from typing import Optional, Union

from safe_cash.access import (
    AccessDeniedError,
    LoggedIn,
    LoggedOut,
    Session,
    StoreSelected,
    initial_session,
    require_full_ledger,
    require_intake,
    transition,
)
from safe_cash.audit import AuditLogger, configure_logging
from safe_cash.config import Settings, get_settings
from safe_cash.identity import (
    IdentityDirectory,
    InvalidCredentialsError,
    demo_identity_directory,
    normalize_email,
)
from safe_cash.ledger import compute_view, opening_float_transactions
from safe_cash.models.ledger import (
    Employee,
    LedgerView,
    PublicBalance,
    Store,
    Transaction,
    TransactionType,
    UserProfile,
)
from safe_cash.registry import StoreRegistry
from safe_cash.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    KeyValueTransactionRepository,
    SessionStateStore,
)
from safe_cash.validation import IntakeValidationError, TransactionIntake
from safe_cash.validation.intake import RawAmount


class SafeCashService:
    """
    Application service for one viewer.

    Holds the viewer's Session and the admin's audit-store selection;
    everything else is read from storage on demand.
    """

    def __init__(
        self,
        kv_store: KeyValueStoreInterface,
        settings: Optional[Settings] = None,
        registry: Optional[StoreRegistry] = None,
        identity: Optional[IdentityDirectory] = None,
        intake: Optional[TransactionIntake] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        settings = settings or get_settings()
        storage_settings = settings.storage

        self._ledger_settings = settings.ledger
        self._registry = registry or StoreRegistry()
        self._identity = identity or demo_identity_directory()
        self._intake = intake or TransactionIntake(self._registry)
        self._audit = audit_logger or AuditLogger()

        self._transactions = KeyValueTransactionRepository(kv_store, storage_settings)
        self._state = SessionStateStore(kv_store, storage_settings)

        self._session: Optional[Session] = None
        self._audit_store_id: Optional[str] = None

    # -------------------------------------------------------------------------
    # Startup
    # -------------------------------------------------------------------------

    def initialize(self) -> Session:
        """
        Seed on the first-ever run, then restore the persisted session.

        Must be called before any other operation.
        """
        seed = opening_float_transactions(self._registry.stores, self._ledger_settings)
        if self._transactions.seed_once(seed):
            self._state.save_last_store(self._registry.first_store.id)
            self._audit.log_ledger_seeded(
                store_ids=[store.id for store in self._registry.stores],
                amount=str(self._ledger_settings.opening_float),
            )

        user = self._state.load_user()
        if user is not None and not self._registry.has_store(user.store_id):
            user = None

        self._session = initial_session(
            self._registry,
            last_store_id=self._state.load_last_store(),
            user=user,
        )
        if user is not None:
            self._audit_store_id = user.store_id
            self._audit.log_session_restored(user, self._session.correlation_id)
        self._persist_session()
        return self._session

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("SafeCashService.initialize() has not been called")
        return self._session

    @property
    def registry(self) -> StoreRegistry:
        return self._registry

    @property
    def currency_symbol(self) -> str:
        return self._ledger_settings.currency_symbol

    @property
    def current_user(self) -> Optional[UserProfile]:
        return self.session.identity

    def _persist_session(self) -> None:
        self._state.save_user(self._session.identity)
        self._state.save_last_store(self._session.selected_store_id)

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def login(self, email: str, password: str) -> UserProfile:
        """
        Sign in and lock the store selection to the user's store.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            SessionStateError: Someone is already signed in
        """
        session = self.session
        try:
            profile = self._identity.authenticate(email, password)
        except InvalidCredentialsError:
            self._audit.log_login_failed(normalize_email(email), session.correlation_id)
            raise

        self._session = transition(session, LoggedIn(profile=profile))
        self._audit_store_id = profile.store_id
        self._persist_session()

        self._audit.log_login_succeeded(profile, session.correlation_id)
        if session.selected_store_id != profile.store_id:
            self._audit.log_store_selection_forced(
                profile, session.selected_store_id, session.correlation_id
            )
        return profile

    def logout(self) -> None:
        """Sign out. The selected store stays on the user's store."""
        session = self.session
        user = session.identity
        self._session = transition(session, LoggedOut())
        self._audit_store_id = None
        self._persist_session()
        if user is not None:
            self._audit.log_logged_out(user, session.correlation_id)

    # -------------------------------------------------------------------------
    # Public view
    # -------------------------------------------------------------------------

    def select_store(self, store_id: str) -> Session:
        """
        Change the public store selection.

        Ignored while someone is signed in: the selection stays on their store.

        Raises:
            UnknownStoreError: If the store is not registered
        """
        self._registry.get_store(store_id)
        session = self.session
        self._session = transition(session, StoreSelected(store_id=store_id))
        self._persist_session()
        if self._session.selected_store_id != session.selected_store_id:
            self._audit.log_store_selected(store_id, session.correlation_id)
        return self._session

    def selected_store(self) -> Store:
        return self._registry.get_store(self.session.selected_store_id)

    def public_balance(self) -> PublicBalance:
        """Balance of the selected store. Never includes transactions."""
        store = self.selected_store()
        view = compute_view(self._transactions.load(), store.id)
        return PublicBalance(store_id=store.id, store_name=store.name, balance=view.balance)

    # -------------------------------------------------------------------------
    # Intake
    # -------------------------------------------------------------------------

    def intake_employees(self) -> list[Employee]:
        """Roster offered in the intake form: the user's own store only."""
        user = self._require(require_intake, "record transactions")
        return self._registry.employees_for(user.store_id)

    def submit_transaction(
        self,
        transaction_type: Union[TransactionType, str],
        raw_amount: RawAmount,
        comment: str,
        employee_name: str,
    ) -> Transaction:
        """
        Validate and record a transaction for the signed-in user's store.

        Raises:
            AccessDeniedError: Nobody is signed in
            InvalidAmountError, MissingCommentError, MissingEmployeeError:
                Validation failed; nothing was stored
        """
        user = self._require(require_intake, "record transactions")
        correlation_id = self.session.correlation_id
        try:
            transaction = self._intake.build(
                current_user=user,
                transaction_type=transaction_type,
                raw_amount=raw_amount,
                comment=comment,
                employee_name=employee_name,
            )
        except IntakeValidationError as e:
            self._audit.log_intake_rejected(user.email, e.code, str(e), correlation_id)
            raise

        self._transactions.append(transaction)
        self._audit.log_transaction_recorded(transaction, correlation_id)
        return transaction

    # -------------------------------------------------------------------------
    # Admin audit
    # -------------------------------------------------------------------------

    @property
    def audit_store_id(self) -> Optional[str]:
        return self._audit_store_id

    def select_audit_store(self, store_id: str) -> str:
        """
        Point the admin ledger at another store.

        Independent of the intake store, which stays the admin's own.
        """
        self._require(require_full_ledger, "view the transaction ledger")
        self._registry.get_store(store_id)
        self._audit_store_id = store_id
        return store_id

    def admin_ledger(self, store_id: Optional[str] = None) -> LedgerView:
        """
        Full ledger of one store, newest first.

        Args:
            store_id: Store to audit; defaults to the current audit selection

        Raises:
            AccessDeniedError: The viewer is not a signed-in admin
        """
        admin = self._require(require_full_ledger, "view the transaction ledger")
        target = store_id or self._audit_store_id or admin.store_id
        self._registry.get_store(target)

        view = compute_view(self._transactions.load(), target)
        self._audit.log_ledger_viewed(
            admin.email, target, view.transaction_count, self.session.correlation_id
        )
        return view

    def _require(self, check, operation: str) -> UserProfile:
        session = self.session
        try:
            return check(session)
        except AccessDeniedError:
            actor = session.identity.email if session.identity else None
            self._audit.log_access_denied(actor, operation, session.correlation_id)
            raise


def create_kv_store(settings: Settings) -> KeyValueStoreInterface:
    """Build the key-value store selected by configuration."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(storage_settings.path)


def create_app_components(
    settings: Optional[Settings] = None,
) -> SafeCashService:
    """
    Factory function to create an initialized application service.

    Args:
        settings: Settings to use; defaults to the cached environment settings

    Returns:
        SafeCashService, already initialized
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    service = SafeCashService(
        kv_store=create_kv_store(settings),
        settings=settings,
    )
    service.initialize()
    return service
