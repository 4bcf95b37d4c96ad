"""
ActivationSession.

Client-side orchestrator of the activation flow. On startup it
reconciles the local cache with the activation service and then exposes
a simple activated / not-activated signal to the rest of the app.

Authority rule: whenever the server answers, its answer replaces the
cache. A failed call never touches the cache, and a cache that cannot
be written never overrides what the server said.
"""
import asyncio
import logging
from typing import Optional

from client.domain.session_state import ActivationAttempt, ActivationSnapshot, SessionState
from client.infrastructure.fingerprint import FingerprintProvider
from client.ports.activation_cache import ActivationCache
from client.ports.activation_gateway import ActivationGateway
from core.domain.exceptions import (
    DeviceConflictError,
    DomainException,
    LicenseNotFoundError,
)
from core.domain.value_objects import UserProfile

logger = logging.getLogger(__name__)


class ActivationSession:
    """
    Activation state machine for one running app.

    States: INITIALIZING -> ACTIVATED or NOT_ACTIVATED. NOT_ACTIVATED
    becomes ACTIVATED only through ``activate``; ACTIVATED becomes
    NOT_ACTIVATED through ``logout`` or a ``verify`` the server rejects.
    """

    def __init__(
        self,
        gateway: ActivationGateway,
        cache: ActivationCache,
        fingerprints: FingerprintProvider,
    ):
        """Initialize session with its collaborators."""
        self.gateway = gateway
        self.cache = cache
        self.fingerprints = fingerprints
        self._state = SessionState.INITIALIZING
        self._snapshot = ActivationSnapshot.empty()
        self._lock = asyncio.Lock()
        self._startup: Optional[asyncio.Task] = None
        # Bumped by logout; a reconciliation started before it must not write
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is SessionState.INITIALIZING

    @property
    def is_activated(self) -> bool:
        return self._state is SessionState.ACTIVATED

    @property
    def phone_number(self) -> Optional[str]:
        return self._snapshot.phone

    @property
    def user_profile(self) -> Optional[UserProfile]:
        return self._snapshot.profile

    async def start(self) -> SessionState:
        """
        Run startup reconciliation.

        Only one reconciliation ever runs: concurrent and repeated calls
        wait for the same one and get its result. A reconciliation that
        raised is forgotten, so the next call tries again.

        Returns:
            The state the session settled in
        """
        async with self._lock:
            if self._startup is None:
                self._startup = asyncio.ensure_future(self._reconcile(self._generation))
            startup = self._startup
        try:
            return await startup
        except Exception:
            async with self._lock:
                if self._startup is startup:
                    self._startup = None
            raise

    async def _reconcile(self, generation: int) -> SessionState:
        device_id = await self.fingerprints.get()

        cached = await self.cache.load()
        if self._superseded(generation):
            return self._state
        if cached.is_usable:
            logger.debug("Activation restored from local cache")
            return self._enter(SessionState.ACTIVATED, cached)

        try:
            remote = await self.gateway.check_device(device_id)
        except DomainException as e:
            logger.warning("Device check failed, starting unactivated: %s", e.message)
            return self._settle(generation, SessionState.NOT_ACTIVATED)

        if self._superseded(generation):
            return self._state

        if remote.is_usable:
            await self._remember(remote)
            logger.info("Activation restored from server for this device")
            return self._settle(generation, SessionState.ACTIVATED, remote)

        await self._forget()
        return self._settle(generation, SessionState.NOT_ACTIVATED)

    async def activate(self, phone: str) -> ActivationAttempt:
        """
        Activate this device with the license of a phone number.

        Args:
            phone: Phone number as typed by the user

        Returns:
            ActivationAttempt; on failure ``error`` holds the server's
            message unchanged and the session state is left as it was
        """
        device_id = await self.fingerprints.get()
        try:
            snapshot = await self.gateway.activate(phone, device_id)
        except DomainException as e:
            logger.info("Activation refused: %s", e.code)
            return ActivationAttempt(success=False, error=e.message, code=e.code)

        await self._remember(snapshot)
        self._enter(SessionState.ACTIVATED, snapshot)
        return ActivationAttempt(success=True)

    async def verify(self) -> SessionState:
        """
        Re-check the cached activation with the server.

        A definite "no license" or "other device" answer drops the
        session to NOT_ACTIVATED and clears the cache; a failed call
        changes nothing.

        Returns:
            The session state after the check
        """
        if not self.is_activated or not self._snapshot.phone:
            return self._state

        device_id = await self.fingerprints.get()
        phone = self._snapshot.phone
        try:
            profile = await self.gateway.check_status(phone, device_id)
        except (LicenseNotFoundError, DeviceConflictError) as e:
            logger.warning("Cached activation rejected by server: %s", e.code)
            await self._forget()
            return self._enter(SessionState.NOT_ACTIVATED, ActivationSnapshot.empty())
        except DomainException as e:
            logger.warning("Activation check failed, keeping cached state: %s", e.message)
            return self._state

        snapshot = ActivationSnapshot(activated=True, phone=phone, profile=profile)
        await self._remember(snapshot)
        return self._enter(SessionState.ACTIVATED, snapshot)

    async def logout(self) -> None:
        """
        Forget the activation locally.

        A reconciliation still in flight is discarded. The server-side
        binding is untouched, so the next ``start`` restores the
        activation from the device fingerprint.
        """
        async with self._lock:
            self._generation += 1
            self._startup = None
        await self._forget()
        self._enter(SessionState.NOT_ACTIVATED, ActivationSnapshot.empty())

    async def _remember(self, snapshot: ActivationSnapshot) -> None:
        try:
            await self.cache.save(snapshot)
        except OSError as e:
            logger.warning("Could not write activation cache: %s", e)

    async def _forget(self) -> None:
        try:
            await self.cache.clear()
        except OSError as e:
            logger.warning("Could not clear activation cache: %s", e)

    def _superseded(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.debug("Discarding reconciliation started before logout")
        return True

    def _settle(
        self,
        generation: int,
        state: SessionState,
        snapshot: Optional[ActivationSnapshot] = None,
    ) -> SessionState:
        if self._superseded(generation):
            return self._state
        return self._enter(state, snapshot or ActivationSnapshot.empty())

    def _enter(self, state: SessionState, snapshot: ActivationSnapshot) -> SessionState:
        if state is not self._state:
            logger.info("Activation session %s -> %s", self._state.value, state.value)
        self._state = state
        self._snapshot = snapshot
        return state
