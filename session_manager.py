# Module tracking the archival session (one mirroring run at a time)
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

import constants
from errors import LockFailureError, SessionAlreadyActiveError, SessionNotActiveError


@dataclass(frozen=True)
class ArchivalSession:
    start_time: datetime
    end_time: Optional[datetime] = None
    root_path: str = ""

    @property
    def is_active(self):
        return self.end_time is None

    def to_dict(self):
        """JSON-ready view with DD/MM/YYYY HH:MM:SS timestamps."""
        return {
            'start_time': self.start_time.strftime(constants.SESSION_TIMESTAMP_FORMAT),
            'end_time': self.end_time.strftime(constants.SESSION_TIMESTAMP_FORMAT) if self.end_time else None,
            'path': self.root_path,
        }


class SessionManager:
    """
    Holds the current archival session behind a single exclusive lock.
    The lock is only held while the session value is read or replaced.
    """

    def __init__(self, lock_timeout=constants.DEFAULT_LOCK_TIMEOUT, clock=datetime.now):
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._clock = clock
        self._session = None

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self._lock_timeout):
            logging.error("Could not acquire the session lock")
            raise LockFailureError("session state is locked")
        try:
            yield
        finally:
            self._lock.release()

    def start(self):
        """Opens a new session. Raises SessionAlreadyActiveError if one is running."""
        with self._locked():
            if self._session is not None and self._session.is_active:
                raise SessionAlreadyActiveError("an archival session is already active")
            self._session = ArchivalSession(start_time=self._clock(), root_path="")
            session = self._session
        logging.info(f"Archival session started at {session.to_dict()['start_time']}")
        return session

    def end(self):
        """Closes the active session. Raises SessionNotActiveError when idle."""
        with self._locked():
            if self._session is None or not self._session.is_active:
                raise SessionNotActiveError("no archival session is active")
            self._session = replace(self._session, end_time=self._clock())
            session = self._session
        logging.info(f"Archival session ended at {session.to_dict()['end_time']}")
        return session

    def current(self):
        """Returns the active session. Raises SessionNotActiveError when idle."""
        with self._locked():
            session = self._session
        if session is None or not session.is_active:
            raise SessionNotActiveError("no archival session is active")
        return session
